"""Difficulty-rating heuristics: per-exercise feedback and post-session weight recommendations.

Both read the average set rating of an exercise:
- feedback (shown as soon as an exercise's sets are all done) treats 3.5 as difficult
- recommendations (after finishing) treat 3.5 as still maintainable
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fittrack.core.constants import (
    EASY_RATING_THRESHOLD,
    HARD_RATING_THRESHOLD,
    WEIGHT_DECREASE_FACTOR,
    WEIGHT_INCREASE_FACTOR,
)
from fittrack.core.enums import AdjustmentAction
from fittrack.schemas.session import ExerciseFeedback, RatingDescription, Recommendation

if TYPE_CHECKING:
    from fittrack.models.plan import WorkoutPlan
    from fittrack.models.workout_session import SessionExercise, WorkoutSession

RATING_DESCRIPTIONS: dict[int, tuple[str, str]] = {
    0: ("", "Select difficulty level"),
    1: ("Very easy", "Very easy - Could do many more reps"),
    2: ("Easy", "Easy - Could do a few more reps"),
    3: ("Moderate", "Moderate - Challenging but manageable"),
    4: ("Difficult", "Difficult - Almost reached failure"),
    5: ("Very difficult", "Very difficult - Reached muscle failure"),
}

FEEDBACK_MESSAGES = {
    AdjustmentAction.INCREASE: "This was too easy! Consider increasing weight by 5-10%.",
    AdjustmentAction.MAINTAIN: "Great job! This was a good challenge level.",
    AdjustmentAction.DECREASE: "This was quite difficult. Consider reducing weight by 5-10% or doing fewer reps.",
}

MAINTAIN_MESSAGE = "Maintain current weight and reps"


def rating_descriptions() -> list[RatingDescription]:
    return [
        RatingDescription(rating=rating, short=short, description=long)
        for rating, (short, long) in RATING_DESCRIPTIONS.items()
    ]


def average_rating(exercise: SessionExercise) -> float:
    """Mean rating over all sets of the exercise (0 when it has none)."""
    if not exercise.sets:
        return 0.0
    return sum(s.rating for s in exercise.sets) / len(exercise.sets)


def exercise_feedback(exercise: SessionExercise) -> ExerciseFeedback:
    avg = average_rating(exercise)
    if avg < EASY_RATING_THRESHOLD:
        action = AdjustmentAction.INCREASE
    elif avg < HARD_RATING_THRESHOLD:
        action = AdjustmentAction.MAINTAIN
    else:
        action = AdjustmentAction.DECREASE
    return ExerciseFeedback(
        exercise_name=exercise.exercise_name,
        average_rating=round(avg, 2),
        action=action,
        message=FEEDBACK_MESSAGES[action],
    )


def recommend(exercise: SessionExercise) -> Recommendation:
    """Weight recommendation for one exercise, based on the first set's weight."""
    avg = average_rating(exercise)
    first = exercise.sets[0]
    current = first.actual_weight
    unit = first.weight_unit
    if avg < EASY_RATING_THRESHOLD:
        action = AdjustmentAction.INCREASE
        recommended = current * WEIGHT_INCREASE_FACTOR
        message = f"Increase weight to {recommended:.1f}{unit.value}"
    elif avg > HARD_RATING_THRESHOLD:
        action = AdjustmentAction.DECREASE
        recommended = current * WEIGHT_DECREASE_FACTOR
        message = f"Decrease weight to {recommended:.1f}{unit.value}"
    else:
        action = AdjustmentAction.MAINTAIN
        recommended = current
        message = MAINTAIN_MESSAGE
    return Recommendation(
        exercise_id=exercise.exercise_id,
        exercise_name=exercise.exercise_name,
        average_rating=round(avg, 2),
        action=action,
        current_weight=current,
        recommended_weight=round(recommended, 1),
        weight_unit=unit,
        message=message,
    )


def session_recommendations(session: WorkoutSession) -> list[Recommendation]:
    """One recommendation per completed exercise that has sets."""
    return [
        recommend(ex)
        for ex in session.exercises
        if ex.sets and all(s.completed for s in ex.sets)
    ]


def apply_recommendations(
    plan: WorkoutPlan,
    recommendations: list[Recommendation],
) -> int:
    """Write recommended weights into the plan's matching exercises. Returns how many changed."""
    by_exercise = {
        r.exercise_id: r
        for r in recommendations
        if r.exercise_id is not None and r.action != AdjustmentAction.MAINTAIN
    }
    updated = 0
    for plan_exercise in plan.exercises:
        rec = by_exercise.get(plan_exercise.exercise_id)
        if rec is None:
            continue
        plan_exercise.weight = rec.recommended_weight
        plan_exercise.weight_unit = rec.weight_unit
        updated += 1
    return updated
