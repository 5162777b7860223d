"""ORM models - import all so Base.metadata is complete for migrations."""

from fittrack.models.exercise import Exercise
from fittrack.models.plan import PlanExercise, WorkoutPlan
from fittrack.models.user import AuthToken, User
from fittrack.models.workout_session import SessionExercise, SessionSet, WorkoutSession

__all__ = [
    "AuthToken",
    "Exercise",
    "PlanExercise",
    "SessionExercise",
    "SessionSet",
    "User",
    "WorkoutPlan",
    "WorkoutSession",
]
