"""Workout, exercise and set data models."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ..utils.coerce import as_flag

# Fractional seconds right after HH:MM:SS
_FRACTION = re.compile(r"(?<=\d{2}:\d{2}:\d{2})\.(\d+)")


class WorkoutType(str, Enum):
    """Kind of workout being generated."""

    STRENGTH = "strength"
    WEIGHT_LOSS = "weight_loss"


class Difficulty(str, Enum):
    """Workout difficulty."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def to_iso(value: datetime) -> str:
    """Serialize a timestamp as UTC ISO 8601 so stored values sort as text."""
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _pad_fraction(match: re.Match) -> str:
    return "." + match.group(1).ljust(6, "0")[:6]


def parse_timestamp(value) -> datetime | None:
    """Parse a stored timestamp, tolerating a trailing 'Z' and missing values.

    Fractional seconds of any precision are accepted (PostgREST trims
    trailing zeros, e.g. ``12:00:00.12345+00:00``).
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = _FRACTION.sub(_pad_fraction, str(value).replace("Z", "+00:00"))
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


@dataclass
class ExerciseSpec:
    """One exercise requested when generating a workout."""

    name: str
    body_part: str
    target_sets: int
    target_reps: str
    notes: str = ""
    equipment: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseSpec":
        """Create from dictionary (accepts camelCase keys too)."""
        return cls(
            name=data["name"],
            body_part=data.get("body_part", data.get("bodyPart", "")),
            target_sets=int(data.get("target_sets", data.get("targetSets", 0))),
            target_reps=str(data.get("target_reps", data.get("targetReps", ""))),
            notes=data.get("notes") or "",
            equipment=data.get("equipment"),
        )


@dataclass
class Sharing:
    """Sharing options for a generated workout."""

    is_shared: bool = False
    shared_with: list[str] = field(default_factory=list)


@dataclass
class ExerciseSet:
    """A single performed set of an exercise."""

    exercise_id: str | None = None
    user_id: str | None = None
    set_number: int = 1
    weight: float = 0
    reps: int = 0
    completed: bool = False
    id: str | None = None

    def to_dict(self) -> dict:
        """Convert to a store row."""
        return {
            "exercise_id": self.exercise_id,
            "user_id": self.user_id,
            "set_number": self.set_number,
            "weight": self.weight,
            "reps": self.reps,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseSet":
        """Create from a store row.

        Values are passed through as stored; the stats functions coerce
        anything malformed.
        """
        return cls(
            id=data.get("id"),
            exercise_id=data.get("exercise_id"),
            user_id=data.get("user_id"),
            set_number=data.get("set_number", 1),
            weight=data.get("weight", 0),
            reps=data.get("reps", 0),
            completed=data.get("completed", False),
        )


@dataclass
class WorkoutExercise:
    """An exercise within a daily workout."""

    name: str
    target_sets: int
    target_reps: str
    daily_workout_id: str | None = None
    notes: str = ""
    equipment: str | None = None
    sets: list[ExerciseSet] | None = field(default_factory=list)
    id: str | None = None

    @property
    def completed_sets(self) -> int:
        return sum(1 for s in self.sets or [] if as_flag(s.completed))

    def to_dict(self) -> dict:
        """Convert to a store row (without nested sets)."""
        return {
            "daily_workout_id": self.daily_workout_id,
            "name": self.name,
            "target_sets": self.target_sets,
            "target_reps": self.target_reps,
            "notes": self.notes,
            "equipment": self.equipment,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutExercise":
        """Create from a store row, with optional nested ``exercise_sets``."""
        raw_sets = data.get("exercise_sets")
        return cls(
            id=data.get("id"),
            daily_workout_id=data.get("daily_workout_id"),
            name=data.get("name", ""),
            target_sets=data.get("target_sets", 0),
            target_reps=data.get("target_reps", ""),
            notes=data.get("notes") or "",
            equipment=data.get("equipment"),
            sets=[ExerciseSet.from_dict(s) for s in raw_sets] if raw_sets is not None else None,
        )


@dataclass
class DailyWorkout:
    """A dated collection of exercises performed by one user."""

    user_id: str | None
    date: datetime | None
    title: str = ""
    workout_type: WorkoutType = WorkoutType.STRENGTH
    difficulty: Difficulty = Difficulty.MEDIUM
    duration: int = 1
    completed: bool = False
    is_favorite: bool = False
    is_shared: bool = False
    shared_with: list[str] = field(default_factory=list)
    exercises: list[WorkoutExercise] | None = field(default_factory=list)
    id: str | None = None

    @property
    def total_sets(self) -> int:
        return sum(len(ex.sets or []) for ex in self.exercises or [])

    @property
    def completed_sets(self) -> int:
        return sum(ex.completed_sets for ex in self.exercises or [])

    def to_dict(self) -> dict:
        """Convert to a store row (without nested exercises)."""
        return {
            "user_id": self.user_id,
            "date": to_iso(self.date) if self.date else None,
            "title": self.title,
            "workout_type": self.workout_type.value,
            "difficulty": self.difficulty.value,
            "duration": self.duration,
            "completed": self.completed,
            "is_favorite": self.is_favorite,
            "is_shared": self.is_shared,
            "shared_with": list(self.shared_with),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyWorkout":
        """Create from a store row, with optional nested ``workout_exercises``."""
        raw_exercises = data.get("workout_exercises")
        return cls(
            id=data.get("id"),
            user_id=data.get("user_id"),
            date=parse_timestamp(data.get("date")),
            title=data.get("title") or "",
            workout_type=WorkoutType(data.get("workout_type") or "strength"),
            difficulty=Difficulty(data.get("difficulty") or "medium"),
            duration=data.get("duration") or 1,
            completed=data.get("completed", False),
            is_favorite=bool(data.get("is_favorite", False)),
            is_shared=bool(data.get("is_shared", False)),
            shared_with=list(data.get("shared_with") or []),
            exercises=(
                [WorkoutExercise.from_dict(ex) for ex in raw_exercises]
                if raw_exercises is not None
                else None
            ),
        )
