"""Data models for liftmates."""

from .partner import PartnerLink, PartnerStatus, PartnerSummary, UserProfile
from .stats import PartnerStats, WeeklyStats
from .workout import (
    DailyWorkout,
    Difficulty,
    ExerciseSet,
    ExerciseSpec,
    Sharing,
    WorkoutExercise,
    WorkoutType,
)

__all__ = [
    "DailyWorkout",
    "Difficulty",
    "ExerciseSet",
    "ExerciseSpec",
    "PartnerLink",
    "PartnerStats",
    "PartnerStatus",
    "PartnerSummary",
    "Sharing",
    "UserProfile",
    "WeeklyStats",
    "WorkoutExercise",
    "WorkoutType",
]
