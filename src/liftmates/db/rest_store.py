"""HTTP implementation of the data store for PostgREST-style endpoints."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..config import get_settings
from ..errors import PersistenceError
from ..models.workout import to_iso
from .store import TABLES, Filter

logger = logging.getLogger(__name__)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, datetime):
        return to_iso(value)
    return str(value)


def _format_list(values: Sequence[Any]) -> str:
    return "(" + ",".join(_format_value(v) for v in values) + ")"


def filter_params(filters: Sequence[Filter]) -> List[tuple[str, str]]:
    """Encode filters as PostgREST query parameters."""
    params: List[tuple[str, str]] = []
    for f in filters:
        if f.op == "eq" and f.value is None:
            params.append((f.column, "is.null"))
        elif f.op in ("eq", "neq", "gte", "lte"):
            params.append((f.column, f"{f.op}.{_format_value(f.value)}"))
        elif f.op == "in":
            params.append((f.column, f"in.{_format_list(f.value)}"))
        elif f.op == "not_in":
            params.append((f.column, f"not.in.{_format_list(f.value)}"))
        elif f.op == "ilike":
            params.append((f.column, f"ilike.*{f.value}*"))
    return params


def _serialize(row: dict) -> dict:
    return {k: to_iso(v) if isinstance(v, datetime) else v for k, v in row.items()}


class RestStore:
    """Data store talking to a PostgREST-compatible HTTP API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.rest_url).rstrip("/")
        api_key_val = api_key or settings.rest_api_key

        headers: Dict[str, str] = {
            "Accept": "application/json",
            "Prefer": "return=representation",
        }
        if api_key_val:
            headers["apikey"] = api_key_val
            headers["Authorization"] = f"Bearer {api_key_val}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=30.0,
            transport=transport,
        )

    async def __aenter__(self) -> "RestStore":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, table: str, operation: str, **kwargs) -> httpx.Response:
        if table not in TABLES:
            raise PersistenceError(f"Unknown table: {table}", table=table)
        try:
            resp = await self._client.request(method, f"/{table}", **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("%s on %s failed: %s %s", operation, table, e.response.status_code, e.response.text)
            raise PersistenceError(
                f"Failed to {operation} {table}: HTTP {e.response.status_code}",
                table=table,
                operation=operation,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("%s on %s failed: %s", operation, table, e)
            raise PersistenceError(f"Failed to {operation} {table}: {e}", table=table, operation=operation) from e
        return resp

    async def select(
        self,
        table: str,
        columns: Sequence[str] | str = "*",
        filters: Sequence[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[dict]:
        """Return rows of ``table`` matching all filters."""
        select = columns if isinstance(columns, str) else ",".join(columns)
        params: List[tuple[str, str]] = [("select", select)]
        params.extend(filter_params(filters))
        if order_by:
            params.append(("order", f"{order_by}.{'desc' if descending else 'asc'}"))
        if limit is not None:
            params.append(("limit", str(limit)))
        resp = await self._request("GET", table, "select", params=params)
        data = resp.json()
        return data if isinstance(data, list) else []

    async def insert(self, table: str, rows: dict | Sequence[dict]) -> List[dict]:
        """Insert one or more rows and return them as stored."""
        batch = [rows] if isinstance(rows, dict) else list(rows)
        if not batch:
            return []
        resp = await self._request("POST", table, "insert", json=[_serialize(r) for r in batch])
        data = resp.json()
        return data if isinstance(data, list) else [data]

    async def update(self, table: str, patch: dict, filters: Sequence[Filter]) -> None:
        """Apply ``patch`` to every matching row."""
        if not patch:
            return
        await self._request("PATCH", table, "update", params=filter_params(filters), json=_serialize(patch))

    async def delete(self, table: str, filters: Sequence[Filter]) -> None:
        """Delete every matching row."""
        await self._request("DELETE", table, "delete", params=filter_params(filters))
