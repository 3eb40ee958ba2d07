"""Tests for the HTTP data store."""

import asyncio
import json

import httpx
import pytest

from liftmates.db.rest_store import RestStore, filter_params
from liftmates.db.store import Filter, eq, gte, ilike, in_, neq, not_in
from liftmates.errors import PersistenceError

from .conftest import NOW


def make_store(handler) -> RestStore:
    return RestStore(
        base_url="http://store.test/rest/v1",
        api_key="secret",
        transport=httpx.MockTransport(handler),
    )


async def _call(store: RestStore, method: str, *args, **kwargs):
    async with store:
        return await getattr(store, method)(*args, **kwargs)


class TestFilterParams:
    """Tests for query parameter encoding."""

    def test_comparisons(self):
        params = filter_params([eq("user_id", "u1"), neq("status", "rejected"), gte("date", NOW)])
        assert params == [
            ("user_id", "eq.u1"),
            ("status", "neq.rejected"),
            ("date", "gte.2026-10-21T12:00:00.000000+00:00"),
        ]

    def test_booleans_and_null(self):
        assert filter_params([eq("completed", True), eq("notes", None)]) == [
            ("completed", "eq.true"),
            ("notes", "is.null"),
        ]

    def test_lists_and_patterns(self):
        params = filter_params([in_("id", ["a", "b"]), not_in("id", ["c"]), ilike("name", "bob")])
        assert params == [
            ("id", "in.(a,b)"),
            ("id", "not.in.(c)"),
            ("name", "ilike.*bob*"),
        ]

    def test_unknown_op_rejected(self):
        with pytest.raises(ValueError):
            Filter("id", "like", "x")


class TestRestStore:
    """Tests for RestStore requests."""

    def test_select(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=[{"id": "w1", "completed": True}])

        rows = asyncio.run(
            _call(
                make_store(handler),
                "select",
                "daily_workouts",
                columns=["id", "completed"],
                filters=[eq("user_id", "u1")],
                order_by="date",
                descending=True,
                limit=5,
            )
        )

        request = seen["request"]
        assert rows == [{"id": "w1", "completed": True}]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/daily_workouts"
        assert request.url.params["select"] == "id,completed"
        assert request.url.params["user_id"] == "eq.u1"
        assert request.url.params["order"] == "date.desc"
        assert request.url.params["limit"] == "5"
        assert request.headers["apikey"] == "secret"
        assert request.headers["Authorization"] == "Bearer secret"

    def test_insert_returns_representation(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            seen["prefer"] = request.headers.get("Prefer")
            return httpx.Response(201, json=[dict(row, id=f"s{i}") for i, row in enumerate(seen["body"])])

        rows = asyncio.run(
            _call(
                make_store(handler),
                "insert",
                "exercise_sets",
                [{"set_number": 1}, {"set_number": 2}],
            )
        )

        assert seen["prefer"] == "return=representation"
        assert seen["body"] == [{"set_number": 1}, {"set_number": 2}]
        assert [r["id"] for r in rows] == ["s0", "s1"]

    def test_insert_serializes_datetimes(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json=seen["body"])

        asyncio.run(_call(make_store(handler), "insert", "daily_workouts", {"date": NOW}))
        assert seen["body"] == [{"date": "2026-10-21T12:00:00.000000+00:00"}]

    def test_update_and_delete(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        store = make_store(handler)

        async def run():
            async with store:
                await store.update("daily_workouts", {"is_favorite": True}, [eq("id", "w1")])
                await store.delete("workout_exercises", [eq("id", "e1")])

        asyncio.run(run())

        patch, delete = seen
        assert patch.method == "PATCH"
        assert json.loads(patch.content) == {"is_favorite": True}
        assert patch.url.params["id"] == "eq.w1"
        assert delete.method == "DELETE"
        assert delete.url.path.endswith("/workout_exercises")

    def test_http_error_becomes_persistence_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(409, json={"message": "duplicate key"})

        with pytest.raises(PersistenceError) as excinfo:
            asyncio.run(_call(make_store(handler), "insert", "workout_partners", {"user_id": "a"}))

        assert excinfo.value.table == "workout_partners"
        assert excinfo.value.operation == "insert"
        assert "409" in str(excinfo.value)

    def test_transport_error_becomes_persistence_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PersistenceError, match="connection refused"):
            asyncio.run(_call(make_store(handler), "select", "users"))

    def test_unknown_table(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(PersistenceError, match="Unknown table"):
            asyncio.run(_call(make_store(handler), "select", "secrets"))
