"""
PayDesk HR - Settings Model

Process-wide payroll parameters stored as key/value rows.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from paydesk.models.base import BaseModel


class SettingEntry(BaseModel):
    """A single named setting; values are stored as text."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
