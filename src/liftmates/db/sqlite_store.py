"""aiosqlite implementation of the data store."""

import json
import logging
import re
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, AsyncIterator, Sequence

import aiosqlite

from ..errors import PersistenceError
from ..models.workout import to_iso
from .engine import get_db_path
from .store import TABLES, Filter

logger = logging.getLogger(__name__)

BOOLEAN_COLUMNS = {"completed", "is_favorite", "is_shared"}
JSON_COLUMNS = {"shared_with"}

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


def _check_table(table: str) -> str:
    if table not in TABLES:
        raise PersistenceError(f"Unknown table: {table}", table=table)
    return table


def _check_column(column: str) -> str:
    if not _IDENTIFIER.match(column):
        raise PersistenceError(f"Invalid column name: {column}")
    return column


def _encode(column: str, value: Any) -> Any:
    """Convert a Python value to its SQLite representation."""
    if column in JSON_COLUMNS:
        return json.dumps(list(value or []))
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, datetime):
        return to_iso(value)
    return value


def _decode(row: aiosqlite.Row) -> dict:
    """Convert a SQLite row back to Python values."""
    data = dict(row)
    for column in BOOLEAN_COLUMNS & data.keys():
        if data[column] is not None:
            data[column] = bool(data[column])
    for column in JSON_COLUMNS & data.keys():
        data[column] = json.loads(data[column]) if data[column] else []
    return data


def _where(filters: Sequence[Filter]) -> tuple[str, list]:
    """Build a WHERE clause and its parameters."""
    clauses = []
    params: list = []
    for f in filters:
        column = _check_column(f.column)
        if f.op == "eq":
            if f.value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(_encode(column, f.value))
        elif f.op == "neq":
            clauses.append(f"{column} != ?")
            params.append(_encode(column, f.value))
        elif f.op == "gte":
            clauses.append(f"{column} >= ?")
            params.append(_encode(column, f.value))
        elif f.op == "lte":
            clauses.append(f"{column} <= ?")
            params.append(_encode(column, f.value))
        elif f.op in ("in", "not_in"):
            values = list(f.value)
            if not values:
                # IN () matches nothing, NOT IN () matches everything
                clauses.append("0 = 1" if f.op == "in" else "1 = 1")
                continue
            placeholders = ", ".join("?" for _ in values)
            keyword = "IN" if f.op == "in" else "NOT IN"
            clauses.append(f"{column} {keyword} ({placeholders})")
            params.extend(_encode(column, v) for v in values)
        elif f.op == "ilike":
            clauses.append(f"LOWER({column}) LIKE LOWER(?)")
            params.append(f"%{f.value}%")
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params


class SQLiteStore:
    """Data store backed by a local SQLite file.

    Each call opens its own connection, so the store can be shared freely.
    Rows are returned in insertion order unless ``order_by`` is given.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON")
            yield db

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
        _check_table(table)
        if isinstance(columns, str):
            column_sql = columns if columns == "*" else _check_column(columns)
        else:
            column_sql = ", ".join(_check_column(c) for c in columns)

        where, params = _where(filters)
        sql = f"SELECT {column_sql} FROM {table}{where}"
        if order_by:
            sql += f" ORDER BY {_check_column(order_by)} {'DESC' if descending else 'ASC'}, rowid"
        else:
            sql += " ORDER BY rowid"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        try:
            async with self._connect() as db:
                cursor = await db.execute(sql, params)
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.warning("select on %s failed: %s", table, e)
            raise PersistenceError(f"Failed to read {table}: {e}", table=table, operation="select") from e
        return [_decode(row) for row in rows]

    async def insert(self, table: str, rows: dict | Sequence[dict]) -> list[dict]:
        """Insert one or more rows in a single transaction and return them."""
        _check_table(table)
        batch = [rows] if isinstance(rows, dict) else list(rows)
        if not batch:
            return []

        ids = []
        try:
            async with self._connect() as db:
                for row in batch:
                    data = dict(row)
                    data.setdefault("id", uuid.uuid4().hex)
                    ids.append(data["id"])
                    columns = [_check_column(c) for c in data]
                    placeholders = ", ".join("?" for _ in columns)
                    await db.execute(
                        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                        [_encode(c, data[c]) for c in columns],
                    )
                await db.commit()
                placeholders = ", ".join("?" for _ in ids)
                cursor = await db.execute(
                    f"SELECT * FROM {table} WHERE id IN ({placeholders}) ORDER BY rowid", ids
                )
                stored = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.warning("insert into %s failed: %s", table, e)
            raise PersistenceError(f"Failed to insert into {table}: {e}", table=table, operation="insert") from e
        return [_decode(row) for row in stored]

    async def update(self, table: str, patch: dict, filters: Sequence[Filter]) -> None:
        """Apply ``patch`` to every matching row."""
        _check_table(table)
        if not patch:
            return
        assignments = ", ".join(f"{_check_column(c)} = ?" for c in patch)
        where, params = _where(filters)
        values = [_encode(c, v) for c, v in patch.items()] + params
        try:
            async with self._connect() as db:
                await db.execute(f"UPDATE {table} SET {assignments}{where}", values)
                await db.commit()
        except aiosqlite.Error as e:
            logger.warning("update on %s failed: %s", table, e)
            raise PersistenceError(f"Failed to update {table}: {e}", table=table, operation="update") from e

    async def delete(self, table: str, filters: Sequence[Filter]) -> None:
        """Delete every matching row (children cascade)."""
        _check_table(table)
        where, params = _where(filters)
        try:
            async with self._connect() as db:
                await db.execute(f"DELETE FROM {table}{where}", params)
                await db.commit()
        except aiosqlite.Error as e:
            logger.warning("delete on %s failed: %s", table, e)
            raise PersistenceError(f"Failed to delete from {table}: {e}", table=table, operation="delete") from e

    async def close(self) -> None:
        """Nothing to release; connections are per call."""
