"""User stats: workout streaks and exercise completion rate."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from fittrack.models.workout_session import WorkoutSession
from fittrack.services.tracker import completed_exercise_count


def compute_streaks(workout_dates: Sequence[date], today: date | None = None) -> tuple[int, int]:
    """
    Given distinct workout dates in descending order, return (current, longest) streak.
    The current streak only counts when the last workout was today or yesterday.
    """
    if not workout_dates:
        return 0, 0
    today = today or date.today()

    current = 0
    if workout_dates[0] >= today - timedelta(days=1):
        current = 1
        for i in range(1, len(workout_dates)):
            if workout_dates[i] == workout_dates[i - 1] - timedelta(days=1):
                current += 1
            else:
                break

    longest = 1
    run = 1
    for i in range(1, len(workout_dates)):
        if workout_dates[i] == workout_dates[i - 1] - timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return current, longest


def completion_rate(sessions: Iterable[WorkoutSession]) -> float:
    """Percentage of exercises completed across sessions, rounded to 0.1."""
    total = 0
    done = 0
    for session in sessions:
        total += len(session.exercises)
        done += completed_exercise_count(session)
    if total == 0:
        return 0.0
    return round(done / total * 100, 1)
