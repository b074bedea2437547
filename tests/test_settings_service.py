"""
PayDesk HR - Settings Service Tests
"""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from paydesk.config import settings as app_settings
from paydesk.models.settings import SettingEntry
from paydesk.services.settings_service import SettingsService, default_payroll_settings


def rows_result(entries):
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(entries)
    return result


class TestDefaultPayrollSettings:

    def test_built_from_configuration(self):
        defaults = default_payroll_settings()

        assert defaults.min_salary == app_settings.default_min_salary
        assert defaults.income_tax_rate == app_settings.default_income_tax_rate
        assert defaults.benefit_amount == app_settings.default_benefit_amount
        assert defaults.salary_payment_day == app_settings.default_salary_payment_day

    def test_follows_configuration_changes(self):
        with patch.object(app_settings, "default_min_salary", Decimal("800")):
            assert default_payroll_settings().min_salary == Decimal("800")


class TestGetPayrollSettings:

    @pytest.mark.asyncio
    async def test_stored_values_override_defaults(self, mock_db):
        mock_db.execute.return_value = rows_result([
            SettingEntry(key="min_salary", value="800.00"),
            SettingEntry(key="salary_payment_day", value="15"),
        ])

        payroll_settings = await SettingsService(mock_db).get_payroll_settings()

        assert payroll_settings.min_salary == Decimal("800.00")
        assert payroll_settings.salary_payment_day == 15
        assert payroll_settings.fszn_rate == app_settings.default_fszn_rate

    @pytest.mark.asyncio
    async def test_no_rows_gives_configured_defaults(self, mock_db):
        mock_db.execute.return_value = rows_result([])

        payroll_settings = await SettingsService(mock_db).get_payroll_settings()

        assert payroll_settings == default_payroll_settings()
