"""
Tests de la configuración (Settings)
"""

import pytest
from decimal import Decimal

from pydantic import ValidationError

from app.core.config import Settings


class TestSettings:
    """Lectura y validación de variables de entorno"""

    def test_tax_rate_accepts_percentage(self):
        assert Settings(_env_file=None, TAX_RATE="19%").TAX_RATE == Decimal("0.19")
        assert Settings(_env_file=None, TAX_RATE="0.09").TAX_RATE == Decimal("0.09")

    def test_tax_rate_out_of_range(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, TAX_RATE="1.5")
        with pytest.raises(ValidationError):
            Settings(_env_file=None, TAX_RATE="-0.01")

    def test_tax_rate_with_too_many_decimals(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, TAX_RATE="0.123456")
        assert Settings(_env_file=None, TAX_RATE="0.1925").TAX_RATE == Decimal("0.1925")

    def test_debug_from_string(self):
        assert Settings(_env_file=None, DEBUG="false").DEBUG is False
        assert Settings(_env_file=None, DEBUG="'yes'").DEBUG is True

    def test_database_url_override(self):
        config = Settings(_env_file=None, DATABASE_URL=None, POSTGRES_HOST="db", POSTGRES_PORT=5433)
        assert config.async_database_url.startswith("postgresql+asyncpg://")
        assert "@db:5433/" in config.async_database_url
        assert Settings(_env_file=None, DATABASE_URL="sqlite+aiosqlite:///x.db").async_database_url == \
            "sqlite+aiosqlite:///x.db"

    def test_only_used_options_are_declared(self):
        assert "DEFAULT_PAGE_SIZE" not in Settings.model_fields
        assert "MAX_PAGE_SIZE" not in Settings.model_fields
