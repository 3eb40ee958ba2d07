"""CLI entry point for liftmates."""

import logging

import click

from . import __version__
from .commands import init, partner, user, workout
from .config import get_settings


@click.group()
@click.version_option(version=__version__, prog_name="liftmates")
@click.option("--as", "auth_id", help="Auth identity to act as (overrides LIFTMATES_AUTH_ID)")
@click.option("-v", "--verbose", is_flag=True, help="Log service activity")
@click.pass_context
def main(ctx, auth_id: str | None, verbose: bool):
    """liftmates: workout tracking with training partners.

    Example usage:

        # Initialize the database
        liftmates init

        # Create a profile and a workout
        liftmates --as alice user create --email a@x.io --name Alice --username alice
        liftmates --as alice workout generate -e "Squat:Legs:3:8-10"

        # Weekly stats for you and a partner
        liftmates --as alice workout stats
        liftmates --as alice partner stats <partner-id>
    """
    level = logging.INFO if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["auth_id"] = auth_id


# Register commands
main.add_command(init)
main.add_command(user)
main.add_command(workout)
main.add_command(partner)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
