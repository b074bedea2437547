"""
PayDesk HR - Settings Service

Process-wide payroll parameters stored as key/value rows and merged over
the defaults from configuration.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.config import settings as app_settings
from paydesk.models.settings import SettingEntry
from paydesk.services.calculators.payroll import PayrollSettings

logger = logging.getLogger(__name__)


# Keys stored as whole numbers
INTEGER_KEYS = {"salary_payment_day", "vacation_days_per_year"}


def default_settings() -> Dict[str, Any]:
    """Defaults applied for keys missing from the settings table."""
    return {
        "min_salary": app_settings.default_min_salary,
        "income_tax_rate": app_settings.default_income_tax_rate,
        "fszn_rate": app_settings.default_fszn_rate,
        "insurance_rate": app_settings.default_insurance_rate,
        "benefit_amount": app_settings.default_benefit_amount,
        "tax_deduction": app_settings.default_tax_deduction,
        "salary_payment_day": app_settings.default_salary_payment_day,
        "vacation_days_per_year": app_settings.default_vacation_days_per_year,
    }


def payroll_settings_from_values(values: Dict[str, Any]) -> PayrollSettings:
    """Settings in the shape the payroll calculator takes."""
    return PayrollSettings(
        min_salary=Decimal(str(values["min_salary"])),
        income_tax_rate=Decimal(str(values["income_tax_rate"])),
        fszn_rate=Decimal(str(values["fszn_rate"])),
        insurance_rate=Decimal(str(values["insurance_rate"])),
        benefit_amount=Decimal(str(values["benefit_amount"])),
        tax_deduction=Decimal(str(values["tax_deduction"])),
        salary_payment_day=int(values["salary_payment_day"]),
    )


def default_payroll_settings() -> PayrollSettings:
    return payroll_settings_from_values(default_settings())


def parse_setting_value(key: str, raw: str) -> Any:
    """Numbers come back as Decimal (int for day counts); anything else as text."""
    try:
        value = Decimal(raw)
    except (InvalidOperation, TypeError):
        return raw
    if key in INTEGER_KEYS:
        return int(value)
    return value


class SettingsService:
    """Service for reading and saving payroll settings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_settings(self) -> Dict[str, Any]:
        """All settings, stored values over defaults."""
        result = await self.db.execute(select(SettingEntry))
        entries = list(result.scalars().all())

        merged = default_settings()
        if not entries:
            logger.debug("No settings stored, using defaults")
            return merged

        for entry in entries:
            merged[entry.key] = parse_setting_value(entry.key, entry.value)
        return merged

    async def get_payroll_settings(self) -> PayrollSettings:
        return payroll_settings_from_values(await self.get_settings())

    async def save_settings(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace the stored settings as a whole.

        Keys not supplied fall back to their defaults on the next read.
        """
        await self.db.execute(delete(SettingEntry))
        for key, value in values.items():
            if value is None:
                continue
            self.db.add(SettingEntry(key=key, value=str(value)))

        await self.db.commit()
        logger.info(f"Saved {len(values)} settings")
        return await self.get_settings()
