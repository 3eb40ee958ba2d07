"""Training partner commands."""

import click

from ..models.partner import PartnerStatus
from ..services.partners import PartnerService
from .base import (
    async_command,
    connect,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_session,
    progress_bar,
)


@click.group()
def partner():
    """Find training partners and compare progress.

    Invite another user, accept or reject invites, and view an accepted
    partner's weekly stats.
    """
    pass


@partner.command("search")
@click.argument("query")
@click.pass_context
@async_command
async def search(ctx, query: str):
    """Search users by name or username."""
    ensure_initialized(ctx)
    async with connect() as store:
        users = await PartnerService(store).search_users(get_session(ctx), query)

    if not users:
        echo_info(f"No users matching '{query}'.")
        return

    click.echo()
    click.echo(format_table(["ID", "Name", "Username"], [[u.id, u.name, u.username] for u in users]))


@partner.command("invite")
@click.argument("user_id")
@click.pass_context
@async_command
async def invite(ctx, user_id: str):
    """Send a partner invite."""
    ensure_initialized(ctx)
    async with connect() as store:
        link = await PartnerService(store).send_invite(get_session(ctx), user_id)
    echo_success(f"Invite sent ({link.id})")


@partner.command("list")
@click.pass_context
@async_command
async def list_partners(ctx):
    """List sent and received invites."""
    ensure_initialized(ctx)
    async with connect() as store:
        partners = await PartnerService(store).get_partners(get_session(ctx))

    if not partners["sent"] and not partners["received"]:
        echo_info("No partners yet. Find someone with 'liftmates partner search'")
        return

    for label, links in (("Sent", partners["sent"]), ("Received", partners["received"])):
        if not links:
            continue
        rows = []
        for link in links:
            other = link.other
            rows.append([
                link.id,
                other.id if other else "-",
                other.username if other else "-",
                link.get_status_display(),
                "*" if link.is_favorite else "",
            ])
        click.echo()
        click.echo(click.style(f"{label}:", bold=True))
        click.echo(format_table(["Invite", "User ID", "Username", "Status", "Fav"], rows))


@partner.command("respond")
@click.argument("invite_id")
@click.argument("answer", type=click.Choice(["accept", "reject"]))
@click.pass_context
@async_command
async def respond(ctx, invite_id: str, answer: str):
    """Accept or reject a received invite."""
    ensure_initialized(ctx)
    status = PartnerStatus.ACCEPTED if answer == "accept" else PartnerStatus.REJECTED
    async with connect() as store:
        await PartnerService(store).respond_to_invite(get_session(ctx), invite_id, status)
    echo_success(f"Invite {status.value}")


@partner.command("cancel")
@click.argument("invite_id")
@click.pass_context
@async_command
async def cancel(ctx, invite_id: str):
    """Cancel an invite."""
    ensure_initialized(ctx)
    async with connect() as store:
        await PartnerService(store).cancel_invite(get_session(ctx), invite_id)
    echo_success("Invite cancelled")


@partner.command("favorite")
@click.argument("partner_id")
@click.option("--off", is_flag=True, help="Remove from favorites")
@click.pass_context
@async_command
async def favorite(ctx, partner_id: str, off: bool):
    """Mark an accepted partner as a favorite."""
    ensure_initialized(ctx)
    async with connect() as store:
        await PartnerService(store).toggle_favorite_partner(get_session(ctx), partner_id, not off)
    echo_success("Removed from favorites" if off else "Added to favorites")


@partner.command("stats")
@click.argument("partner_id")
@click.pass_context
@async_command
async def stats(ctx, partner_id: str):
    """Show a partner's stats for this week."""
    ensure_initialized(ctx)
    async with connect() as store:
        s = await PartnerService(store).get_partner_stats(get_session(ctx), partner_id)

    star = " *" if s.is_favorite else ""
    click.echo()
    click.echo(click.style(f"{s.name} (@{s.username}){star}", bold=True))
    click.echo("=" * 50)
    click.echo(f"Workouts: {s.completed_workouts}/{s.weekly_workouts} completed ({s.completion_rate}%)")
    click.echo(f"Total weight lifted: {s.total_weight:g}")
    click.echo(f"Streak: {s.streak}")
    for i, pct in enumerate(s.weekly_progress, start=1):
        click.echo(f"  Workout {i}: {progress_bar(pct)}")
