"""Data store protocol shared by the SQLite and REST backends."""

from dataclasses import dataclass
from typing import Any, Protocol, Sequence, runtime_checkable

FILTER_OPS = ("eq", "neq", "gte", "lte", "in", "not_in", "ilike")

TABLES = (
    "users",
    "daily_workouts",
    "workout_exercises",
    "exercise_sets",
    "workout_partners",
)


@dataclass(frozen=True)
class Filter:
    """A single column predicate.

    ``ilike`` matches ``value`` as a case-insensitive substring; ``in`` and
    ``not_in`` take a sequence of values.
    """

    column: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in FILTER_OPS:
            raise ValueError(f"Unsupported filter op: {self.op}")


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def neq(column: str, value: Any) -> Filter:
    return Filter(column, "neq", value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column, "lte", value)


def in_(column: str, values: Sequence[Any]) -> Filter:
    return Filter(column, "in", tuple(values))


def not_in(column: str, values: Sequence[Any]) -> Filter:
    return Filter(column, "not_in", tuple(values))


def ilike(column: str, value: str) -> Filter:
    return Filter(column, "ilike", value)


@runtime_checkable
class DataStore(Protocol):
    """Generic relational store interface.

    Rows are plain dicts. Every method raises PersistenceError when the
    backend rejects the request.
    """

    async def select(
        self,
        table: str,
        columns: Sequence[str] | str = "*",
        filters: Sequence[Filter] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        """Return rows of ``table`` matching all filters."""
        ...

    async def insert(self, table: str, rows: dict | Sequence[dict]) -> list[dict]:
        """Insert one or more rows and return them as stored."""
        ...

    async def update(self, table: str, patch: dict, filters: Sequence[Filter]) -> None:
        """Apply ``patch`` to every matching row."""
        ...

    async def delete(self, table: str, filters: Sequence[Filter]) -> None:
        """Delete every matching row."""
        ...

    async def close(self) -> None:
        """Release any held resources."""
        ...
