"""Guided workout tracker: session snapshot, set completion, rest window and navigation.

Functions here mutate ORM objects that are already loaded (exercises and sets
included); endpoints do ownership, status and bounds checks before calling in.
"""

from __future__ import annotations

import math
from datetime import datetime

from fittrack.core.enums import SessionStatus, WeightUnit
from fittrack.core.timeutils import as_utc, utcnow
from fittrack.models.plan import WorkoutPlan
from fittrack.models.workout_session import SessionExercise, SessionSet, WorkoutSession
from fittrack.schemas.session import (
    ExerciseFeedback,
    SessionExerciseRead,
    SessionSetRead,
    WorkoutSessionRead,
)
from fittrack.services.recommendations import exercise_feedback


def build_session_from_plan(plan: WorkoutPlan, user_id, now: datetime | None = None) -> WorkoutSession:
    """Snapshot a plan into a new in-progress session with one empty slot per target set."""
    now = now or utcnow()
    exercises = []
    for position, pe in enumerate(plan.exercises):
        sets = [
            SessionSet(
                set_index=i,
                actual_reps=0,
                actual_weight=pe.weight,
                weight_unit=pe.weight_unit,
                rating=0,
                completed=False,
            )
            for i in range(pe.sets)
        ]
        exercises.append(
            SessionExercise(
                exercise_id=pe.exercise_id,
                exercise_name=pe.exercise_name,
                position=position,
                target_sets=pe.sets,
                target_reps=pe.reps,
                rest_seconds=pe.rest_seconds,
                target_weight=pe.weight,
                weight_unit=pe.weight_unit,
                sets=sets,
            )
        )
    return WorkoutSession(
        user_id=user_id,
        workout_plan_id=plan.id,
        workout_plan_name=plan.name,
        status=SessionStatus.IN_PROGRESS,
        current_exercise_index=0,
        overall_rating=0,
        notes="",
        started_at=now,
        exercises=exercises,
    )


def rest_remaining_seconds(session: WorkoutSession, now: datetime | None = None) -> int:
    started = as_utc(session.rest_started_at)
    if started is None or not session.rest_seconds:
        return 0
    elapsed = ((now or utcnow()) - started).total_seconds()
    return max(0, math.ceil(session.rest_seconds - elapsed))


def exercise_completed(exercise: SessionExercise) -> bool:
    return bool(exercise.sets) and all(s.completed for s in exercise.sets)


def complete_set(
    session: WorkoutSession,
    exercise_index: int,
    set_index: int,
    actual_reps: int,
    actual_weight: float,
    weight_unit: WeightUnit,
    rating: int,
    now: datetime | None = None,
) -> ExerciseFeedback | None:
    """
    Record a set and start the rest window. Re-completing a set overwrites it.
    Returns feedback when this completes the exercise, and then moves on to the
    next exercise (unless it is the last one). Correcting a set of an exercise
    that was already complete gives no feedback and leaves the index alone.
    """
    now = now or utcnow()
    exercise = session.exercises[exercise_index]
    was_complete = exercise_completed(exercise)
    s = exercise.sets[set_index]
    s.actual_reps = actual_reps
    s.actual_weight = actual_weight
    s.weight_unit = weight_unit
    s.rating = rating
    s.completed = True
    s.completed_at = now

    if exercise.rest_seconds > 0:
        session.rest_started_at = now
        session.rest_seconds = exercise.rest_seconds

    if was_complete or not exercise_completed(exercise):
        return None
    feedback = exercise_feedback(exercise)
    if exercise_index < len(session.exercises) - 1:
        session.current_exercise_index = exercise_index + 1
    return feedback


def skip_rest(session: WorkoutSession) -> None:
    session.rest_started_at = None
    session.rest_seconds = None


def move_exercise(session: WorkoutSession, step: int) -> None:
    """Move the current exercise by step, clamped to the session's exercises."""
    last = max(len(session.exercises) - 1, 0)
    session.current_exercise_index = min(max(session.current_exercise_index + step, 0), last)


def finish_session(
    session: WorkoutSession,
    overall_rating: int,
    notes: str,
    now: datetime | None = None,
) -> None:
    session.status = SessionStatus.FINISHED
    session.finished_at = now or utcnow()
    session.overall_rating = overall_rating
    session.notes = notes
    skip_rest(session)


def completed_exercise_count(session: WorkoutSession) -> int:
    return sum(1 for ex in session.exercises if exercise_completed(ex))


def session_to_read(session: WorkoutSession, now: datetime | None = None) -> WorkoutSessionRead:
    remaining = rest_remaining_seconds(session, now)
    exercises = [
        SessionExerciseRead(
            id=ex.id,
            exercise_id=ex.exercise_id,
            exercise_name=ex.exercise_name,
            position=ex.position,
            target_sets=ex.target_sets,
            target_reps=ex.target_reps,
            rest_seconds=ex.rest_seconds,
            target_weight=ex.target_weight,
            weight_unit=ex.weight_unit,
            completed=exercise_completed(ex),
            completed_sets=sum(1 for s in ex.sets if s.completed),
            sets=[SessionSetRead.model_validate(s) for s in ex.sets],
        )
        for ex in session.exercises
    ]
    return WorkoutSessionRead(
        id=session.id,
        workout_plan_id=session.workout_plan_id,
        workout_plan_name=session.workout_plan_name,
        status=session.status,
        current_exercise_index=session.current_exercise_index,
        is_resting=remaining > 0,
        rest_remaining_seconds=remaining,
        overall_rating=session.overall_rating,
        notes=session.notes,
        started_at=as_utc(session.started_at),
        finished_at=as_utc(session.finished_at),
        completed_exercises=sum(1 for ex in exercises if ex.completed),
        exercises=exercises,
    )
