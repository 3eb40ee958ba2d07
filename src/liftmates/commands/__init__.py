"""CLI commands for liftmates."""

from .init import init
from .partners import partner
from .users import user
from .workouts import workout

__all__ = [
    "init",
    "partner",
    "user",
    "workout",
]
