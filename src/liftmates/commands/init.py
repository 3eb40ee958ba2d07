"""Initialize project command."""

import click

from ..config import get_settings
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the local liftmates database.

    Creates the data directory and the SQLite schema. Not needed when
    LIFTMATES_STORE=rest.
    """
    settings = get_settings()
    if settings.store != "sqlite":
        echo_info(f"Using the {settings.store} store; nothing to initialize.")
        return

    db_path = get_db_path(settings.data_dir)
    echo_info(f"Initializing liftmates in {settings.data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create your profile (LIFTMATES_AUTH_ID identifies you):")
    click.echo("     liftmates user create --email you@example.com --name 'You' --username you")
    click.echo()
    click.echo("  2. Generate a workout:")
    click.echo('     liftmates workout generate -e "Squat:Legs:3:8-10"')
