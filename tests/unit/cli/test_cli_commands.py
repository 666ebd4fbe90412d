"""Tests for the tasknest command-line interface."""

from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from tasknest.cli import cli
from tasknest.core.config import Settings
from tasknest.domain.services.cleanup_service import SweepResult


def test_info_shows_lifecycle_settings():
    runner = CliRunner()

    with patch("tasknest.cli.get_settings", return_value=Settings(otp_expiry_minutes=15)):
        result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "OTP expiry:   15 minutes" in result.output
    assert "Invitations:  72 hours" in result.output


def test_serve_runs_uvicorn_with_overrides():
    runner = CliRunner()

    with patch("tasknest.cli.get_settings", return_value=Settings(environment="testing")), patch(
        "uvicorn.run"
    ) as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    mock_run.assert_called_once()
    assert mock_run.call_args.kwargs["port"] == 9000


def test_init_db_refuses_production():
    runner = CliRunner()

    with patch("tasknest.cli.get_settings", return_value=Settings(environment="production")):
        result = runner.invoke(cli, ["init-db", "--force"])

    assert result.exit_code == 1
    assert "alembic upgrade head" in result.output


def test_sweep_reports_counts():
    runner = CliRunner()
    manager = MagicMock()
    manager.disconnect = AsyncMock()

    with patch(
        "tasknest.infrastructure.scheduling.run_expiry_sweep",
        AsyncMock(return_value=SweepResult(pending_registrations=2, one_time_codes=3, invitations=1)),
    ), patch("tasknest.infrastructure.persistence.database.get_db_manager", return_value=manager):
        result = runner.invoke(cli, ["sweep"])

    assert result.exit_code == 0
    assert "Removed 2 pending registration(s) and 3 code(s); expired 1 invitation(s)." in result.output
    manager.disconnect.assert_awaited_once()


def test_check_email_console_provider():
    runner = CliRunner()

    with patch("tasknest.cli.get_settings", return_value=Settings(email_provider="console")):
        result = runner.invoke(cli, ["check-email"])

    assert result.exit_code == 0
    assert "'console' is reachable" in result.output


def test_check_email_unreachable_smtp():
    runner = CliRunner()
    provider = MagicMock()
    provider.test_connection = AsyncMock(return_value=(False, "SMTP connection failed: refused"))

    with patch("tasknest.cli.get_settings", return_value=Settings(email_provider="smtp")), patch(
        "tasknest.infrastructure.services.email_service.build_email_provider",
        return_value=provider,
    ):
        result = runner.invoke(cli, ["check-email"])

    assert result.exit_code == 1
    assert "refused" in result.output
