"""Per-exercise progress over finished sessions."""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from fittrack.core.timeutils import as_utc
from fittrack.models.workout_session import WorkoutSession
from fittrack.schemas.progress import ExerciseProgressDetail, ExerciseProgressSummary, ProgressPoint
from fittrack.services.tracker import exercise_completed


def _percent_change(earliest: float, latest: float) -> float:
    if earliest <= 0:
        return 0.0
    return round((latest - earliest) / earliest * 100, 1)


def collect_points(
    sessions: Iterable[WorkoutSession],
) -> tuple[dict[uuid.UUID, list[ProgressPoint]], dict[uuid.UUID, str]]:
    """
    Walk finished sessions in chronological order and average each completed
    exercise's sets into one data point. Returns (points by exercise id, latest name by id).
    """
    points: dict[uuid.UUID, list[ProgressPoint]] = {}
    names: dict[uuid.UUID, str] = {}
    for session in sessions:
        for ex in session.exercises:
            if ex.exercise_id is None or not exercise_completed(ex):
                continue
            names[ex.exercise_id] = ex.exercise_name
            n = len(ex.sets)
            points.setdefault(ex.exercise_id, []).append(
                ProgressPoint(
                    date=as_utc(session.finished_at),
                    weight=round(sum(s.actual_weight for s in ex.sets) / n, 2),
                    weight_unit=ex.sets[-1].weight_unit,
                    reps=round(sum(s.actual_reps for s in ex.sets) / n, 2),
                    rating=round(sum(s.rating for s in ex.sets) / n, 2),
                )
            )
    return points, names


def progress_summary(sessions: Iterable[WorkoutSession]) -> list[ExerciseProgressSummary]:
    points, names = collect_points(sessions)
    summary = []
    for exercise_id, history in points.items():
        progress = 0.0
        if len(history) >= 2:
            progress = _percent_change(history[0].weight, history[-1].weight)
        summary.append(
            ExerciseProgressSummary(
                exercise_id=exercise_id,
                exercise_name=names[exercise_id],
                data_points=len(history),
                progress_percent=progress,
                current_weight=history[-1].weight,
                weight_unit=history[-1].weight_unit,
            )
        )
    # Most tracked first; sort is stable so ties keep first-seen order
    summary.sort(key=lambda s: s.data_points, reverse=True)
    return summary


def exercise_progress(
    sessions: Iterable[WorkoutSession], exercise_id: uuid.UUID
) -> ExerciseProgressDetail | None:
    """Data points and overall change for one exercise, or None when it was never completed."""
    points, names = collect_points(sessions)
    history = points.get(exercise_id)
    if not history:
        return None
    first, last = history[0], history[-1]
    return ExerciseProgressDetail(
        exercise_id=exercise_id,
        exercise_name=names[exercise_id],
        points=history,
        weight_change=round(last.weight - first.weight, 2),
        weight_change_percent=_percent_change(first.weight, last.weight),
        reps_change=round(last.reps - first.reps, 2),
    )
