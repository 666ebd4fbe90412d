"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from tasknest.core.config import (
    DEFAULT_INVITATION_EXPIRY_HOURS,
    DEFAULT_OTP_EXPIRY_MINUTES,
    Settings,
)


class TestLifecycleDurations:
    """Tests for the verification and invitation lifetimes."""

    def test_defaults(self):
        settings = Settings()

        assert settings.otp_expiry_minutes == DEFAULT_OTP_EXPIRY_MINUTES == 10
        assert settings.invitation_expiry_hours == DEFAULT_INVITATION_EXPIRY_HOURS == 72
        assert settings.otp_length == 6

    def test_numeric_string_is_accepted(self):
        settings = Settings(otp_expiry_minutes="15", invitation_expiry_hours="24")

        assert settings.otp_expiry_minutes == 15
        assert settings.invitation_expiry_hours == 24

    @pytest.mark.parametrize("value", ["soon", "", None, 0, -5])
    def test_unusable_otp_expiry_falls_back_to_default(self, value):
        """Missing, non-numeric or non-positive values use the default."""
        assert Settings(otp_expiry_minutes=value).otp_expiry_minutes == 10

    @pytest.mark.parametrize("value", ["forever", -1, 0])
    def test_unusable_invitation_expiry_falls_back_to_default(self, value):
        assert Settings(invitation_expiry_hours=value).invitation_expiry_hours == 72

    def test_environment_variable_fallback(self, monkeypatch):
        monkeypatch.setenv("TASKNEST_OTP_EXPIRY_MINUTES", "not-a-number")
        monkeypatch.setenv("TASKNEST_INVITATION_EXPIRY_HOURS", "48")

        settings = Settings()

        assert settings.otp_expiry_minutes == 10
        assert settings.invitation_expiry_hours == 48

    def test_otp_length_bounds(self):
        with pytest.raises(ValidationError):
            Settings(otp_length=3)
        with pytest.raises(ValidationError):
            Settings(otp_length=11)


class TestSettings:
    def test_cors_origins_from_comma_separated_string(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_sqlite_rejects_multiple_workers(self):
        with pytest.raises(ValidationError, match="SQLite does not support multiple worker"):
            Settings(workers=4, database_url="sqlite+aiosqlite:///./data/test.db")

    def test_postgres_allows_multiple_workers(self):
        settings = Settings(workers=4, database_url="postgresql+asyncpg://u:p@localhost/db")

        assert settings.workers == 4

    def test_database_url_sync(self):
        assert Settings(database_url="sqlite+aiosqlite:///./x.db").database_url_sync == "sqlite:///./x.db"
        assert (
            Settings(database_url="postgresql+asyncpg://u:p@h/db").database_url_sync
            == "postgresql://u:p@h/db"
        )

    def test_environment_flags(self):
        assert Settings(environment="testing").is_testing
        assert Settings(environment="production").is_production
        assert Settings(environment="development").is_development
