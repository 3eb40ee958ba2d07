"""Shared CLI utilities."""

import asyncio
import sys
from contextlib import asynccontextmanager
from functools import wraps
from typing import AsyncIterator

import click

from ..config import get_settings
from ..db import DataStore, get_db_path, open_store
from ..errors import LiftmatesError
from ..session import Session


def async_command(f):
    """Decorator to run async Click commands.

    Service errors are reported as a single [ERROR] line with exit code 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except (LiftmatesError, ValueError) as e:
            echo_error(str(e))
            sys.exit(1)

    return wrapper


@asynccontextmanager
async def connect() -> AsyncIterator[DataStore]:
    """Open the configured store for the duration of a command."""
    store = open_store()
    try:
        yield store
    finally:
        await store.close()


def get_session(ctx: click.Context) -> Session:
    """Session for the identity given on the command line or in settings."""
    obj = ctx.find_root().obj or {}
    return Session(auth_id=obj.get("auth_id") or get_settings().auth_id)


def ensure_initialized(ctx: click.Context) -> None:
    """Ensure the local database is initialized."""
    settings = get_settings()
    if settings.store != "sqlite":
        return
    if not get_db_path(settings.data_dir).exists():
        click.echo(
            click.style("Error: ", fg="red")
            + "Project not initialized. Run 'liftmates init' first."
        )
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)


def progress_bar(percent: int, width: int = 20) -> str:
    """Render a percentage as a text bar, e.g. [#####     ] 50%."""
    filled = round(width * percent / 100)
    return "[" + "#" * filled + " " * (width - filled) + f"] {percent}%"
