"""Command-line interface for Slatestack.

This module provides the CLI commands for running and managing
the Slatestack content backend.
"""

from typing import NoReturn

import click

from slatestack import __version__
from slatestack.core.config import get_settings
from slatestack.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="Slatestack")
def cli() -> None:
    """Slatestack - headless content backend.

    Settings are read from SLATESTACK_* environment variables or a .env file.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Auto-reload on code changes (defaults to on in development)",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Start the Slatestack server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers
    if reload is None:
        reload = settings.is_development

    if bind_workers > 1 and settings.is_sqlite:
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting Slatestack server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "slatestack.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the collections and entries tables.

    Use this only for local setups. In production, run the Alembic
    migrations instead.
    """
    import asyncio

    from slatestack.infrastructure.persistence import models  # noqa: F401
    from slatestack.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = get_db_manager()
        try:
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
def check_update() -> None:
    """Compare this version with the latest published release."""
    import asyncio

    from slatestack.domain.exceptions import UpstreamUnavailableError
    from slatestack.infrastructure.services.update_service import ReleaseCache, UpdateService

    settings = get_settings()
    configure_logging(settings)
    service = UpdateService.from_settings(settings, ReleaseCache(settings.update_cache_ttl_seconds))

    try:
        result = asyncio.run(service.check_for_updates())
    except UpstreamUnavailableError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1) from e

    if result.update_available:
        diff = f" ({result.version_diff})" if result.version_diff else ""
        click.echo(
            f"Update available: {result.current_version} -> {result.latest_version}"
            f"{diff}\n  {result.release_url}"
        )
    else:
        click.echo(f"Slatestack {result.current_version} is up to date.")


@cli.command()
def info() -> None:
    """Display Slatestack configuration."""
    settings = get_settings()

    click.echo(f"""
Slatestack v{settings.app_version}
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
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Content:
  Insert At:    {settings.entry_insert_position}
  Strict Opts:  {settings.strict_select_options}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `slatestack` command and by `python -m slatestack`.
    """
    cli()


if __name__ == "__main__":
    main()
