"""User profile commands."""

import click

from ..services.users import UserService
from .base import async_command, connect, echo_success, ensure_initialized, get_session


@click.group()
def user():
    """Manage your profile."""
    pass


@user.command("create")
@click.option("--email", required=True, help="Email address")
@click.option("--name", required=True, help="Full name")
@click.option("--username", required=True, help="Unique username")
@click.option("--height", type=float, help="Height (in)")
@click.option("--weight", type=float, help="Body weight (lbs)")
@click.pass_context
@async_command
async def create(ctx, email: str, name: str, username: str, height: float | None, weight: float | None):
    """Create the profile for the signed-in identity."""
    ensure_initialized(ctx)
    async with connect() as store:
        profile = await UserService(store).create_profile(
            get_session(ctx), email, name, username, height=height, weight=weight
        )
    echo_success(f"Profile created: @{profile.username} ({profile.id})")


@user.command("whoami")
@click.pass_context
@async_command
async def whoami(ctx):
    """Show the current profile."""
    ensure_initialized(ctx)
    async with connect() as store:
        profile = await UserService(store).get_current_profile(get_session(ctx))

    click.echo(f"{profile.name} (@{profile.username})")
    click.echo(f"  ID: {profile.id}")
    click.echo(f"  Email: {profile.email}")
    if profile.height:
        click.echo(f"  Height: {profile.height:g} in")
    if profile.weight:
        click.echo(f"  Weight: {profile.weight:g} lbs")
