"""Weekly statistics results."""

from dataclasses import asdict, dataclass, field


@dataclass
class WeeklyStats:
    """Aggregated statistics for one user's week."""

    weekly_workouts: int = 0
    completed_workouts: int = 0
    total_weight: float = 0
    completion_rate: int = 0
    weekly_progress: list[int] = field(default_factory=list)
    streak: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class PartnerStats(WeeklyStats):
    """Weekly statistics for a training partner."""

    name: str = ""
    username: str = ""
    is_favorite: bool = False
