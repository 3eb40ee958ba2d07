"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from liftmates.db import SQLiteStore, init_db
from liftmates.models.workout import DailyWorkout, ExerciseSet, WorkoutExercise
from liftmates.services.users import UserService
from liftmates.session import Session

# Wednesday; the week starts on Sunday 2026-10-18
NOW = datetime(2026, 10, 21, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def store(temp_db_path):
    """An initialized SQLite store."""
    asyncio.run(init_db(temp_db_path))
    return SQLiteStore(temp_db_path)


def _create_user(store, auth_id: str, name: str, username: str) -> Session:
    session = Session(auth_id=auth_id)
    asyncio.run(
        UserService(store).create_profile(session, f"{username}@example.com", name, username)
    )
    return session


@pytest.fixture
def alice(store) -> Session:
    """Session for a user with a profile."""
    return _create_user(store, "auth-alice", "Alice Smith", "alice")


@pytest.fixture
def bob(store) -> Session:
    """Session for a second user with a profile."""
    return _create_user(store, "auth-bob", "Bob Jones", "bobby")


def make_workout(
    date: datetime | None,
    completed: bool = False,
    sets: list[tuple[float, bool]] | None = None,
) -> DailyWorkout:
    """Build an in-memory workout with one exercise holding ``sets``.

    Each set is a (weight, completed) pair.
    """
    exercise = WorkoutExercise(
        name="Squat",
        target_sets=len(sets or []),
        target_reps="8",
        sets=[
            ExerciseSet(set_number=i, weight=weight, reps=8, completed=done)
            for i, (weight, done) in enumerate(sets or [], start=1)
        ],
    )
    return DailyWorkout(user_id="u1", date=date, completed=completed, exercises=[exercise])
