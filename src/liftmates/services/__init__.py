"""Business services for liftmates."""

from .partners import PartnerService
from .users import UserService
from .workouts import WorkoutService

__all__ = [
    "PartnerService",
    "UserService",
    "WorkoutService",
]
