"""Weekly statistics aggregation.

Pure functions over already-fetched workouts with their nested exercises
and sets. Missing nested collections count as empty, malformed weights as
0 and malformed completed flags as false, so none of these raise.
"""

from datetime import datetime, time, timedelta, timezone
from typing import Sequence

from ..models.stats import WeeklyStats
from ..models.workout import DailyWorkout
from ..utils.coerce import as_flag, as_number, percentage


def _is_local(now: datetime) -> bool:
    """True for naive times and for fixed offsets produced by ``astimezone()``."""
    if now.tzinfo is None:
        return True
    return isinstance(now.tzinfo, timezone) and now.utcoffset() == now.astimezone().utcoffset()


def start_of_week(now: datetime | None = None) -> datetime:
    """Most recent Sunday at 00:00, in the timezone of ``now``.

    A fixed offset matching the system zone is treated as local time, so the
    Sunday offset is looked up for Sunday itself and a DST change during the
    week does not shift midnight.
    """
    if now is None:
        now = datetime.now().astimezone()
    days_since_sunday = (now.weekday() + 1) % 7
    day = now.date() - timedelta(days=days_since_sunday)
    if _is_local(now):
        return datetime.combine(day, time.min).astimezone()
    return datetime.combine(day, time.min, tzinfo=now.tzinfo)


def total_weight_lifted(workouts: Sequence[DailyWorkout]) -> float:
    """Sum of weight over every completed set."""
    total = 0.0
    for workout in workouts:
        for exercise in workout.exercises or []:
            for s in exercise.sets or []:
                if as_flag(s.completed):
                    total += as_number(s.weight)
    return total


def completion_rate(workouts: Sequence[DailyWorkout]) -> int:
    """Percentage of workouts marked completed, 0 for no workouts."""
    completed = sum(1 for w in workouts if as_flag(w.completed))
    return percentage(completed, len(workouts))


def _set_counts(workout: DailyWorkout) -> tuple[int, int]:
    total = 0
    completed = 0
    for exercise in workout.exercises or []:
        for s in exercise.sets or []:
            total += 1
            if as_flag(s.completed):
                completed += 1
    return completed, total


def weekly_progress(workouts: Sequence[DailyWorkout]) -> list[int]:
    """Per-workout percentage of completed sets, in input order."""
    return [percentage(*_set_counts(w)) for w in workouts]


def _sort_key(workout: DailyWorkout) -> float:
    if workout.date is None:
        return float("-inf")
    return workout.date.timestamp()


def streak(workouts: Sequence[DailyWorkout]) -> int:
    """Number of consecutive completed workouts, counting back from the newest.

    Only the completed flags in date order are checked; a gap between
    workout dates does not end the streak. Ties on date keep input order.
    """
    count = 0
    for workout in sorted(workouts, key=_sort_key, reverse=True):
        if not as_flag(workout.completed):
            break
        count += 1
    return count


def summarize_week(workouts: Sequence[DailyWorkout]) -> WeeklyStats:
    """Compute every weekly metric for one user's workouts."""
    return WeeklyStats(
        weekly_workouts=len(workouts),
        completed_workouts=sum(1 for w in workouts if as_flag(w.completed)),
        total_weight=total_weight_lifted(workouts),
        completion_rate=completion_rate(workouts),
        weekly_progress=weekly_progress(workouts),
        streak=streak(workouts),
    )
