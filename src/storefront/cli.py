"""Command-line interface for Storefront.

This module provides the CLI commands for running and managing
the Storefront application.
"""

import asyncio
from typing import NoReturn

import click

from storefront import __version__
from storefront.core.config import get_settings
from storefront.core.exceptions import StorefrontError
from storefront.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="Storefront")
def cli() -> None:
    """Storefront - e-commerce backend.

    Accounts with session tokens, a product catalog, carts and orders.
    Configuration is read from STOREFRONT_* environment variables.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the Storefront server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting Storefront server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "storefront.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create all database tables that do not exist yet."""
    from storefront.infrastructure.persistence.database import DatabaseManager

    settings = get_settings()
    configure_logging(settings)

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await db.connect()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command("create-admin")
@click.option("--account", type=str, default=None, help="Login handle (prompts if not provided)")
@click.option("--email", type=str, default=None, help="Email address (prompts if not provided)")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Password (prompts if not provided)",
)
def create_admin(account: str | None, email: str | None, password: str | None) -> None:
    """Create an administrator account, or promote an existing one.

    The password of an existing account is left unchanged.
    """
    from storefront.domain.services import AccountService
    from storefront.infrastructure.persistence.database import DatabaseManager

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if account is None:
        account = click.prompt("Administrator account", type=str)
    if email is None:
        email = click.prompt("Administrator email", type=str)
    if password is None:
        password = click.prompt(
            "Administrator password",
            hide_input=True,
            confirmation_prompt=True,
        )

    async def create() -> None:
        db = DatabaseManager(settings)
        try:
            await db.connect()
            async with db.session() as session:
                user = await AccountService(session).ensure_admin(account, email, password)
            click.echo(f"Administrator ready: {user.account} ({user.id})")
            logger.info("Administrator ensured via CLI", user_id=user.id, account=user.account)
        finally:
            await db.disconnect()

    try:
        asyncio.run(create())
    except StorefrontError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)


@cli.command()
def info() -> None:
    """Display Storefront configuration."""
    settings = get_settings()

    click.echo(f"""
Storefront v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}

Server:
  Host:         {settings.host}
  Port:         {settings.port}

Database:
  URL:          {settings.database_url}

Sessions:
  Token TTL:    {settings.session_token_ttl_days} days

Rate limit:
  Enabled:      {settings.rate_limit_enabled}
  Requests:     {settings.rate_limit_max_requests} per {settings.rate_limit_window_seconds}s

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `storefront` console script and `python -m storefront`.
    """
    cli()


if __name__ == "__main__":
    main()
