"""
PayDesk HR - Test Configuration

Pytest fixtures and configuration.
"""

import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from paydesk.services.calculators.payroll import PayrollSettings
from paydesk.services.settings_service import default_payroll_settings
from main import app


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client bound to the application.

    The lifespan is not run, so only endpoints that never open a database
    session can be exercised through it.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def mock_db() -> MagicMock:
    """Stand-in for AsyncSession; awaitable methods are AsyncMocks."""
    db = MagicMock()
    db.execute = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.rollback = AsyncMock()
    db.delete = AsyncMock()
    db.get = AsyncMock()
    return db


@pytest.fixture
def payroll_settings() -> PayrollSettings:
    """Configured default tax parameters."""
    return default_payroll_settings()


@pytest.fixture
def employee() -> SimpleNamespace:
    """Employee paid an explicit 2100 per month."""
    return SimpleNamespace(
        id=uuid.uuid4(),
        name="Anna Petrova",
        hire_date=date(2023, 3, 1),
        termination_date=None,
        rate=Decimal("1"),
        base_salary=Decimal("2100"),
    )


@pytest.fixture
def work_norm() -> SimpleNamespace:
    """20 working days plus 1 holiday."""
    return SimpleNamespace(working_days=20, holiday_days=1)

