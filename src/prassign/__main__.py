"""CLI interface for prassign.

This module provides a command-line interface for managing the reviewer
assignment service, including initialization, server management, and
status checks.
"""
import asyncio
import sys
from pathlib import Path

import click
import uvicorn

from . import __version__
from .core.config.settings import PRAssignConfig, init_config
from .core.logging_setup import configure_logging


@click.group()
@click.version_option(version=__version__)
def cli():
    """prassign - pull request reviewer assignment service.

    Assigns reviewers from the author's team and moves open reviews away
    from deactivated team members.
    """
    pass


@cli.command()
@click.option(
    "--config-path",
    "-c",
    type=click.Path(dir_okay=False),
    default="prassign.yaml",
    help="Path to configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Force overwrite existing config")
def init(config_path: str, force: bool):
    """Initialize prassign configuration.

    Creates a default configuration file with recommended settings.
    """
    config_file = Path(config_path)

    if config_file.exists() and not force:
        click.echo(f"Configuration file already exists: {config_path}")
        click.echo("Use --force to overwrite")
        return

    try:
        config = PRAssignConfig.create_default_config(config_file)

        click.echo(f"Created configuration file: {config_path}")
        click.echo("\nDefault configuration:")
        click.echo(f"  API Server: {config.api_host}:{config.api_port}")
        click.echo(f"  Database: {config.get_database_url()}")
        click.echo(f"\nEdit {config_path} to customize settings.")

    except Exception as e:
        click.echo(f"Error creating configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
@click.option("--host", help="Override API host")
@click.option("--port", type=int, help="Override API port")
def start(config: str, host: str, port: int):
    """Start the prassign API server."""
    try:
        app_config = init_config(config) if config else init_config()

        if host:
            app_config.api_host = host
        if port:
            app_config.api_port = port

        configure_logging(app_config.log_level, app_config.log_file)

        click.echo("Starting prassign...")
        click.echo(f"   API: http://{app_config.api_host}:{app_config.api_port}")
        click.echo("\nPress Ctrl+C to stop\n")

        uvicorn.run(
            "prassign.api:app",
            host=app_config.api_host,
            port=app_config.api_port,
            log_level=app_config.log_level.lower(),
        )

    except KeyboardInterrupt:
        click.echo("\n\nStopping prassign...")
    except Exception as e:
        click.echo(f"Error starting server: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
def status(config: str):
    """Check prassign system status.

    Displays configuration and database information.
    """
    try:
        app_config = init_config(config) if config else init_config()

        click.echo("prassign Status")
        click.echo("=" * 50)
        click.echo(f"Configuration: {config or 'default'}")
        click.echo(f"Database URL: {app_config.get_database_url()}")
        click.echo(f"API Server: {app_config.api_host}:{app_config.api_port}")
        click.echo(f"Log Level: {app_config.log_level}")

        from .core.storage.database import init_db

        db = init_db(app_config.get_database_url())

        async def get_counts():
            from sqlalchemy import func, select

            from .core.domain import PRStatus
            from .core.models import PullRequestRecord, TeamRecord, UserRecord

            try:
                await db.create_tables()
                async with db.session() as session:
                    teams = (await session.execute(select(func.count()).select_from(TeamRecord))).scalar_one()
                    users = (await session.execute(select(func.count()).select_from(UserRecord))).scalar_one()
                    active = (
                        await session.execute(
                            select(func.count())
                            .select_from(UserRecord)
                            .where(UserRecord.is_active.is_(True))
                        )
                    ).scalar_one()
                    open_prs = (
                        await session.execute(
                            select(func.count())
                            .select_from(PullRequestRecord)
                            .where(PullRequestRecord.status == PRStatus.OPEN.value)
                        )
                    ).scalar_one()
                    return teams, users, active, open_prs
            finally:
                await db.close()

        teams, users, active, open_prs = asyncio.run(get_counts())
        click.echo("\nDatabase connection successful")
        click.echo(f"\nTeams: {teams}")
        click.echo(f"Users: {users} total, {active} active")
        click.echo(f"Open pull requests: {open_prs}")

    except Exception as e:
        click.echo(f"Error checking status: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
@click.option("--limit", "-n", type=int, default=20, help="Number of reviewers to show")
def stats(config: str, limit: int):
    """Show reviewer assignment counts.

    Lists the users with the most review assignments.
    """
    try:
        app_config = init_config(config) if config else init_config()

        from .core.services import build_services
        from .core.storage.database import init_db

        db = init_db(app_config.get_database_url())

        async def get_stats():
            try:
                await db.create_tables()
                services = build_services(db)
                return await services.pull_requests.get_assignment_stats()
            finally:
                await db.close()

        assignment_stats = asyncio.run(get_stats())

        if not assignment_stats.by_user:
            click.echo("No reviewer assignments found")
            return

        ranked = sorted(assignment_stats.by_user.items(), key=lambda item: (-item[1], item[0]))
        click.echo(f"\nReviewer assignments (showing {min(limit, len(ranked))}):")
        click.echo("=" * 50)
        for user_id, count in ranked[:limit]:
            click.echo(f"  {user_id:<30} {count}")
        click.echo(f"\nPull requests: {len(assignment_stats.by_pr)}")

    except Exception as e:
        click.echo(f"Error retrieving stats: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
