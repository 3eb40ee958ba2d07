"""Workout generation and management."""

import logging
from datetime import datetime
from typing import Sequence

from ..db.repositories import WorkoutRepository
from ..db.store import DataStore
from ..errors import NotFoundError, PersistenceError
from ..models.stats import WeeklyStats
from ..models.workout import (
    DailyWorkout,
    Difficulty,
    ExerciseSet,
    ExerciseSpec,
    Sharing,
    WorkoutExercise,
    WorkoutType,
)
from ..session import Session
from .stats import start_of_week, summarize_week
from .users import UserService

logger = logging.getLogger(__name__)


def format_short_date(day: datetime) -> str:
    """Numeric month/day/2-digit-year without padding, e.g. 3/7/26."""
    return f"{day.month}/{day.day}/{day:%y}"


def build_workout_title(exercises: Sequence[ExerciseSpec], today: datetime) -> str:
    """Title from the distinct body parts in first-seen order plus the date.

    >>> build_workout_title([ExerciseSpec("Squat", "Legs", 3, "8")], datetime(2026, 3, 7))
    'Legs (3/7/26)'
    """
    body_parts = list(dict.fromkeys(ex.body_part for ex in exercises))
    return f"{'/'.join(body_parts)} ({format_short_date(today)})"


def build_sets(exercise_id: str, user_id: str, target_sets: int) -> list[ExerciseSet]:
    """Blank set rows numbered 1..target_sets."""
    return [
        ExerciseSet(exercise_id=exercise_id, user_id=user_id, set_number=n)
        for n in range(1, target_sets + 1)
    ]


class WorkoutService:
    """Creates, lists and updates a user's workouts."""

    def __init__(self, store: DataStore):
        self.workouts = WorkoutRepository(store)
        self.users = UserService(store)

    async def generate_workout(
        self,
        session: Session,
        workout_type: WorkoutType,
        difficulty: Difficulty,
        exercises: Sequence[ExerciseSpec],
        sharing: Sharing | None = None,
        now: datetime | None = None,
    ) -> DailyWorkout:
        """Create a workout with one exercise row per ExerciseSpec and blank sets.

        Rows are written one exercise at a time with no rollback. If a write
        fails after the workout row exists, the rows created so far stay in
        the store and the PersistenceError carries the workout id and the
        name of the exercise that failed.
        """
        user_id = await self.users.resolve_user_id(session)
        for spec in exercises:
            if spec.target_sets < 0:
                raise ValueError(f"target_sets must not be negative for {spec.name}")

        sharing = sharing or Sharing()
        now = now or datetime.now().astimezone()

        try:
            workout = await self.workouts.create_workout(
                DailyWorkout(
                    user_id=user_id,
                    date=now,
                    title=build_workout_title(exercises, now),
                    workout_type=WorkoutType(workout_type),
                    difficulty=Difficulty(difficulty),
                    duration=1,
                    completed=False,
                    is_favorite=False,
                    is_shared=sharing.is_shared,
                    shared_with=list(sharing.shared_with),
                )
            )
        except PersistenceError as e:
            raise PersistenceError(
                f"Failed to create workout: {e}", table="daily_workouts", operation="insert"
            ) from e

        for spec in exercises:
            try:
                exercise = await self.workouts.create_exercise(
                    WorkoutExercise(
                        daily_workout_id=workout.id,
                        name=spec.name,
                        target_sets=spec.target_sets,
                        target_reps=spec.target_reps,
                        notes=spec.notes or "",
                        equipment=spec.equipment,
                    )
                )
                exercise.sets = await self.workouts.create_sets(
                    build_sets(exercise.id, user_id, spec.target_sets)
                )
            except PersistenceError as e:
                logger.warning(
                    "Workout %s left incomplete: exercise %r failed", workout.id, spec.name
                )
                raise PersistenceError(
                    f"Failed to create exercise {spec.name!r} for workout {workout.id}: {e}",
                    table=e.table,
                    operation=e.operation,
                    workout_id=workout.id,
                    exercise_name=spec.name,
                ) from e
            workout.exercises.append(exercise)

        logger.info(
            "Created workout %s (%s) with %d exercises", workout.id, workout.title, len(exercises)
        )
        return workout

    async def get_current_week_workouts(
        self, session: Session, now: datetime | None = None
    ) -> list[DailyWorkout]:
        """The user's workouts from the start of this week until now, newest first."""
        user_id = await self.users.resolve_user_id(session)
        now = now or datetime.now().astimezone()
        return await self.workouts.list_for_user(user_id, start_of_week(now), now)

    async def get_workout_stats(self, session: Session, now: datetime | None = None) -> WeeklyStats:
        """Weekly statistics for the current user."""
        workouts = await self.get_current_week_workouts(session, now)
        return summarize_week(workouts)

    async def _owned_workout(self, session: Session, workout_id: str) -> DailyWorkout:
        user_id = await self.users.resolve_user_id(session)
        return await self._workout_for(user_id, workout_id)

    async def _workout_for(self, user_id: str, workout_id: str) -> DailyWorkout:
        workout = await self.workouts.get(workout_id)
        if workout is None or workout.user_id != user_id:
            raise NotFoundError(f"Workout {workout_id} not found")
        return workout

    async def get_workout(self, session: Session, workout_id: str) -> DailyWorkout:
        """One of the current user's workouts with exercises and sets."""
        return await self._owned_workout(session, workout_id)

    async def delete_workout(self, session: Session, workout_id: str) -> None:
        """Delete a workout with all its exercises and sets."""
        await self._owned_workout(session, workout_id)
        await self.workouts.delete_workout(workout_id)
        logger.info("Deleted workout %s", workout_id)

    async def delete_exercise(self, session: Session, exercise_id: str) -> None:
        """Delete one exercise and its sets."""
        user_id = await self.users.resolve_user_id(session)
        exercise = await self.workouts.get_exercise(exercise_id)
        if exercise is None:
            raise NotFoundError(f"Exercise {exercise_id} not found")
        await self._workout_for(user_id, exercise.daily_workout_id)
        await self.workouts.delete_exercise(exercise_id)
        logger.info("Deleted exercise %s", exercise_id)

    async def toggle_favorite(self, session: Session, workout_id: str, is_favorite: bool) -> None:
        await self._owned_workout(session, workout_id)
        await self.workouts.update_workout(workout_id, {"is_favorite": is_favorite})

    async def complete_workout(self, session: Session, workout_id: str, completed: bool = True) -> None:
        await self._owned_workout(session, workout_id)
        await self.workouts.update_workout(workout_id, {"completed": completed})

    async def log_set(
        self,
        session: Session,
        set_id: str,
        weight: float | None = None,
        reps: int | None = None,
        completed: bool | None = None,
    ) -> ExerciseSet:
        """Record weight, reps or completion on one set."""
        user_id = await self.users.resolve_user_id(session)
        existing = await self.workouts.get_set(set_id)
        if existing is None or existing.user_id != user_id:
            raise NotFoundError(f"Set {set_id} not found")

        patch = {}
        if weight is not None:
            if weight < 0:
                raise ValueError("weight must not be negative")
            patch["weight"] = weight
        if reps is not None:
            if reps < 0:
                raise ValueError("reps must not be negative")
            patch["reps"] = reps
        if completed is not None:
            patch["completed"] = completed
        await self.workouts.update_set(set_id, patch)
        return await self.workouts.get_set(set_id)
