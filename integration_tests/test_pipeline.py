"""Integration tests for the full partner workflow.

The SQLite flow runs anywhere. The REST flow needs a live PostgREST-compatible
endpoint with the liftmates tables and is skipped unless
LIFTMATES_INTEGRATION_REST_URL is set.
"""

import asyncio
import os
import uuid

import pytest

from liftmates.db import RestStore, SQLiteStore, init_db
from liftmates.models.partner import PartnerStatus
from liftmates.models.workout import Difficulty, ExerciseSpec, WorkoutType
from liftmates.services import PartnerService, UserService, WorkoutService
from liftmates.session import Session

REST_URL = os.environ.get("LIFTMATES_INTEGRATION_REST_URL")


async def partner_week_flow(store) -> None:
    """Two users partner up, one trains, the other reads their week."""
    suffix = uuid.uuid4().hex[:8]
    users = UserService(store)
    workouts = WorkoutService(store)
    partners = PartnerService(store)

    dana = Session(auth_id=f"auth-dana-{suffix}")
    eli = Session(auth_id=f"auth-eli-{suffix}")
    await users.create_profile(dana, f"dana-{suffix}@example.com", "Dana Park", f"dana{suffix}")
    eli_profile = await users.create_profile(eli, f"eli-{suffix}@example.com", "Eli Ford", f"eli{suffix}")

    found = await partners.search_users(dana, f"eli{suffix}")
    assert [u.id for u in found] == [eli_profile.id]

    link = await partners.send_invite(dana, eli_profile.id)
    await partners.respond_to_invite(eli, link.id, PartnerStatus.ACCEPTED)
    await partners.toggle_favorite_partner(dana, eli_profile.id, True)

    created = await workouts.generate_workout(
        eli,
        WorkoutType.STRENGTH,
        Difficulty.MEDIUM,
        [
            ExerciseSpec(name="Deadlift", body_part="Back", target_sets=2, target_reps="5"),
            ExerciseSpec(name="Split Squat", body_part="Legs", target_sets=2, target_reps="10"),
        ],
    )
    assert created.title.startswith("Back/Legs (")

    deadlift_sets = created.exercises[0].sets
    for s in deadlift_sets:
        await workouts.log_set(eli, s.id, weight=225, reps=5, completed=True)
    await workouts.complete_workout(eli, created.id)

    stats = await partners.get_partner_stats(dana, eli_profile.id)
    assert stats.is_favorite is True
    assert stats.weekly_workouts == 1
    assert stats.total_weight == 450
    assert stats.completion_rate == 100
    assert stats.weekly_progress == [50]
    assert stats.streak == 1

    await workouts.delete_workout(eli, created.id)
    assert await workouts.get_current_week_workouts(eli) == []


class TestPartnerWorkflow:
    """Full workflow tests against each store backend."""

    def test_sqlite(self, tmp_path):
        db_path = tmp_path / "liftmates.db"
        asyncio.run(init_db(db_path))
        asyncio.run(partner_week_flow(SQLiteStore(db_path)))

    @pytest.mark.skipif(REST_URL is None, reason="Requires a live REST endpoint")
    def test_rest(self):
        async def run():
            async with RestStore(
                base_url=REST_URL,
                api_key=os.environ.get("LIFTMATES_INTEGRATION_REST_API_KEY"),
            ) as store:
                await partner_week_flow(store)

        asyncio.run(run())
