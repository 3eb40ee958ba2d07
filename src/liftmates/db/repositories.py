"""Data access layer for liftmates.

Repositories translate between store rows and model objects, and assemble
nested records (workout -> exercises -> sets) with follow-up ``in`` selects.
"""

from datetime import datetime

from ..models.partner import PartnerLink, PartnerStatus, PartnerSummary, UserProfile
from ..models.workout import DailyWorkout, ExerciseSet, WorkoutExercise
from .store import DataStore, eq, gte, ilike, in_, lte


class UserRepository:
    """Repository for user profiles."""

    def __init__(self, store: DataStore):
        self.store = store

    async def create(self, profile: UserProfile) -> UserProfile:
        """Create a new user profile."""
        rows = await self.store.insert("users", profile.to_dict())
        return UserProfile.from_dict(rows[0])

    async def get(self, user_id: str) -> UserProfile | None:
        """Get a profile by ID."""
        rows = await self.store.select("users", filters=[eq("id", user_id)], limit=1)
        return UserProfile.from_dict(rows[0]) if rows else None

    async def get_by_auth_id(self, auth_id: str) -> UserProfile | None:
        """Get the profile linked to an auth identity."""
        rows = await self.store.select("users", filters=[eq("auth_id", auth_id)], limit=1)
        return UserProfile.from_dict(rows[0]) if rows else None

    async def get_many(self, user_ids: list[str]) -> dict[str, UserProfile]:
        """Get profiles keyed by ID."""
        if not user_ids:
            return {}
        rows = await self.store.select("users", filters=[in_("id", user_ids)])
        return {row["id"]: UserProfile.from_dict(row) for row in rows}

    async def search(self, column: str, query: str, limit: int | None = None) -> list[UserProfile]:
        """Case-insensitive substring search on one column."""
        rows = await self.store.select(
            "users",
            columns=["id", "auth_id", "name", "username"],
            filters=[ilike(column, query)],
            order_by=column,
            limit=limit,
        )
        return [UserProfile.from_dict(row) for row in rows]


class WorkoutRepository:
    """Repository for workouts and their nested exercises and sets."""

    def __init__(self, store: DataStore):
        self.store = store

    async def create_workout(self, workout: DailyWorkout) -> DailyWorkout:
        """Insert the workout row only."""
        rows = await self.store.insert("daily_workouts", workout.to_dict())
        created = DailyWorkout.from_dict(rows[0])
        created.exercises = []
        return created

    async def create_exercise(self, exercise: WorkoutExercise) -> WorkoutExercise:
        """Insert one exercise row."""
        rows = await self.store.insert("workout_exercises", exercise.to_dict())
        created = WorkoutExercise.from_dict(rows[0])
        created.sets = []
        return created

    async def create_sets(self, sets: list[ExerciseSet]) -> list[ExerciseSet]:
        """Insert a batch of set rows."""
        if not sets:
            return []
        rows = await self.store.insert("exercise_sets", [s.to_dict() for s in sets])
        return [ExerciseSet.from_dict(row) for row in rows]

    async def get(self, workout_id: str) -> DailyWorkout | None:
        """Get a workout by ID with nested exercises and sets."""
        rows = await self.store.select("daily_workouts", filters=[eq("id", workout_id)], limit=1)
        if not rows:
            return None
        return (await self._with_children(rows))[0]

    async def list_for_user(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[DailyWorkout]:
        """List a user's workouts in [start, end], newest first, fully nested."""
        filters = [eq("user_id", user_id)]
        if start is not None:
            filters.append(gte("date", start))
        if end is not None:
            filters.append(lte("date", end))
        rows = await self.store.select(
            "daily_workouts", filters=filters, order_by="date", descending=True
        )
        return await self._with_children(rows)

    async def get_exercise(self, exercise_id: str) -> WorkoutExercise | None:
        rows = await self.store.select("workout_exercises", filters=[eq("id", exercise_id)], limit=1)
        return WorkoutExercise.from_dict(rows[0]) if rows else None

    async def get_set(self, set_id: str) -> ExerciseSet | None:
        rows = await self.store.select("exercise_sets", filters=[eq("id", set_id)], limit=1)
        return ExerciseSet.from_dict(rows[0]) if rows else None

    async def update_workout(self, workout_id: str, patch: dict) -> None:
        await self.store.update("daily_workouts", patch, [eq("id", workout_id)])

    async def update_set(self, set_id: str, patch: dict) -> None:
        await self.store.update("exercise_sets", patch, [eq("id", set_id)])

    async def delete_workout(self, workout_id: str) -> None:
        """Delete a workout; exercises and sets go with it."""
        await self.store.delete("daily_workouts", [eq("id", workout_id)])

    async def delete_exercise(self, exercise_id: str) -> None:
        """Delete an exercise; its sets go with it."""
        await self.store.delete("workout_exercises", [eq("id", exercise_id)])

    async def _with_children(self, workout_rows: list[dict]) -> list[DailyWorkout]:
        """Embed exercises and sets into workout rows."""
        if not workout_rows:
            return []
        workout_ids = [row["id"] for row in workout_rows]
        exercise_rows = await self.store.select(
            "workout_exercises", filters=[in_("daily_workout_id", workout_ids)]
        )
        exercise_ids = [row["id"] for row in exercise_rows]
        set_rows = []
        if exercise_ids:
            set_rows = await self.store.select(
                "exercise_sets", filters=[in_("exercise_id", exercise_ids)], order_by="set_number"
            )

        sets_by_exercise: dict[str, list[dict]] = {}
        for row in set_rows:
            sets_by_exercise.setdefault(row["exercise_id"], []).append(row)

        exercises_by_workout: dict[str, list[dict]] = {}
        for row in exercise_rows:
            nested = dict(row, exercise_sets=sets_by_exercise.get(row["id"], []))
            exercises_by_workout.setdefault(row["daily_workout_id"], []).append(nested)

        return [
            DailyWorkout.from_dict(
                dict(row, workout_exercises=exercises_by_workout.get(row["id"], []))
            )
            for row in workout_rows
        ]


class PartnerRepository:
    """Repository for partner links."""

    def __init__(self, store: DataStore):
        self.store = store
        self.users = UserRepository(store)

    async def create(self, link: PartnerLink) -> PartnerLink:
        """Create a new partner link."""
        rows = await self.store.insert("workout_partners", link.to_dict())
        return PartnerLink.from_dict(rows[0])

    async def get(self, link_id: str) -> PartnerLink | None:
        rows = await self.store.select("workout_partners", filters=[eq("id", link_id)], limit=1)
        return PartnerLink.from_dict(rows[0]) if rows else None

    async def get_link(
        self, user_id: str, partner_id: str, status: PartnerStatus | None = None
    ) -> PartnerLink | None:
        """Get the link for an ordered (user_id, partner_id) pair."""
        filters = [eq("user_id", user_id), eq("partner_id", partner_id)]
        if status is not None:
            filters.append(eq("status", status.value))
        rows = await self.store.select("workout_partners", filters=filters, limit=1)
        return PartnerLink.from_dict(rows[0]) if rows else None

    async def list_sent(self, user_id: str) -> list[PartnerLink]:
        """Invites sent by the user, with the invited partner attached."""
        rows = await self.store.select(
            "workout_partners", filters=[eq("user_id", user_id)], order_by="created_at"
        )
        return await self._attach(rows, "partner_id")

    async def list_received(self, user_id: str) -> list[PartnerLink]:
        """Invites received by the user, with the sender attached."""
        rows = await self.store.select(
            "workout_partners", filters=[eq("partner_id", user_id)], order_by="created_at"
        )
        return await self._attach(rows, "user_id")

    async def invited_ids(self, user_id: str) -> list[str]:
        """IDs of everyone the user has already invited."""
        rows = await self.store.select(
            "workout_partners", columns=["partner_id"], filters=[eq("user_id", user_id)]
        )
        return [row["partner_id"] for row in rows]

    async def update(self, link_id: str, patch: dict) -> None:
        await self.store.update("workout_partners", patch, [eq("id", link_id)])

    async def set_favorite(self, user_id: str, partner_id: str, is_favorite: bool) -> None:
        """Set the favorite flag on the user's accepted link to a partner."""
        await self.store.update(
            "workout_partners",
            {"is_favorite": is_favorite},
            [
                eq("user_id", user_id),
                eq("partner_id", partner_id),
                eq("status", PartnerStatus.ACCEPTED.value),
            ],
        )

    async def delete(self, link_id: str) -> None:
        await self.store.delete("workout_partners", [eq("id", link_id)])

    async def _attach(self, rows: list[dict], other_column: str) -> list[PartnerLink]:
        profiles = await self.users.get_many([row[other_column] for row in rows])
        links = []
        for row in rows:
            link = PartnerLink.from_dict(row)
            profile = profiles.get(row[other_column])
            if profile is not None:
                link.other = PartnerSummary(id=profile.id, name=profile.name, username=profile.username)
            links.append(link)
        return links
