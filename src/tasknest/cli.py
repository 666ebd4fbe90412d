"""Command-line interface for TaskNest.

This module provides the CLI commands for running and managing
the TaskNest application.
"""

import asyncio
from typing import NoReturn

import click

from tasknest import __version__
from tasknest.core.config import get_settings
from tasknest.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="TaskNest")
def cli() -> None:
    """TaskNest - account verification and workspace invitation API.

    Settings are read from TASKNEST_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option("--workers", type=int, default=None, help="Number of worker processes (overrides config)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the TaskNest server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting TaskNest server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "tasknest.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create all database tables.

    Use this only in development. In production, use migrations instead.
    """
    from tasknest.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production:
        click.echo("ERROR: Running in production mode. Use `alembic upgrade head` instead.", err=True)
        raise SystemExit(1)

    if not force:
        click.confirm("This will create all database tables. Continue?", abort=True, default=False)

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
def sweep() -> None:
    """Run the expiry sweep once.

    Deletes expired pending registrations and codes and marks overdue
    invitations as expired.
    """
    from tasknest.infrastructure.persistence.database import get_db_manager
    from tasknest.infrastructure.scheduling import run_expiry_sweep

    configure_logging(get_settings())

    async def run() -> None:
        try:
            result = await run_expiry_sweep()
        finally:
            await get_db_manager().disconnect()
        click.echo(
            f"Removed {result.pending_registrations} pending registration(s) and "
            f"{result.one_time_codes} code(s); expired {result.invitations} invitation(s)."
        )

    asyncio.run(run())


@cli.command("check-email")
def check_email() -> None:
    """Check that the configured email provider is reachable."""
    from tasknest.infrastructure.services.email_service import build_email_provider

    settings = get_settings()
    configure_logging(settings)

    ok, error = asyncio.run(build_email_provider(settings).test_connection())
    if not ok:
        click.echo(f"Email provider '{settings.email_provider}' is not reachable: {error}", err=True)
        raise SystemExit(1)
    click.echo(f"Email provider '{settings.email_provider}' is reachable.")


@cli.command()
def info() -> None:
    """Display TaskNest configuration."""
    settings = get_settings()

    click.echo(f"""
TaskNest v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Lifecycle:
  OTP length:   {settings.otp_length} digits
  OTP expiry:   {settings.otp_expiry_minutes} minutes
  Invitations:  {settings.invitation_expiry_hours} hours
  Sweep:        every {settings.cleanup_interval_minutes} minutes (enabled: {settings.cleanup_enabled})

Email:
  Provider:     {settings.email_provider}
  From:         {settings.email_from_name} <{settings.email_from}>

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
