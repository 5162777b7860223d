"""Workout session (tracker) schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fittrack.core.constants import MAX_RATING, MIN_RATING
from fittrack.core.enums import AdjustmentAction, SessionStatus, WeightUnit
from fittrack.schemas.plan import WorkoutPlanRead


class SessionStart(BaseModel):
    workout_plan_id: UUID


class SessionSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    set_index: int
    actual_reps: int
    actual_weight: float
    weight_unit: WeightUnit
    rating: int
    completed: bool
    completed_at: datetime | None = None


class SessionExerciseRead(BaseModel):
    id: UUID
    exercise_id: UUID | None = None
    exercise_name: str
    position: int
    target_sets: int
    target_reps: str
    rest_seconds: int
    target_weight: float
    weight_unit: WeightUnit
    completed: bool
    completed_sets: int
    sets: list[SessionSetRead] = []


class WorkoutSessionRead(BaseModel):
    id: UUID
    workout_plan_id: UUID | None = None
    workout_plan_name: str
    status: SessionStatus
    current_exercise_index: int
    is_resting: bool
    rest_remaining_seconds: int
    overall_rating: int
    notes: str
    started_at: datetime
    finished_at: datetime | None = None
    completed_exercises: int
    exercises: list[SessionExerciseRead] = []


class SetCompletion(BaseModel):
    exercise_index: int = Field(..., ge=0)
    set_index: int = Field(..., ge=0)
    actual_reps: int = Field(..., ge=0)
    actual_weight: float = Field(..., ge=0)
    weight_unit: WeightUnit = WeightUnit.KG
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)


class ExerciseFeedback(BaseModel):
    """Shown once every set of an exercise has been completed."""

    exercise_name: str
    average_rating: float
    action: AdjustmentAction
    message: str


class SetCompletionResult(BaseModel):
    session: WorkoutSessionRead
    feedback: ExerciseFeedback | None = None


class SessionFinish(BaseModel):
    overall_rating: int = Field(0, ge=MIN_RATING, le=MAX_RATING)
    notes: str = Field("", max_length=2000)


class Recommendation(BaseModel):
    exercise_id: UUID | None = None
    exercise_name: str
    average_rating: float
    action: AdjustmentAction
    current_weight: float
    recommended_weight: float
    weight_unit: WeightUnit
    message: str


class SessionFinishResult(BaseModel):
    session: WorkoutSessionRead
    recommendations: list[Recommendation] = []


class RecommendationsApply(BaseModel):
    exercise_ids: list[UUID] = Field(..., min_length=1)


class RecommendationsApplyResult(BaseModel):
    plan: WorkoutPlanRead
    updated_exercises: int


class WorkoutSessionSummary(BaseModel):
    """History list entry."""

    id: UUID
    workout_plan_id: UUID | None = None
    workout_plan_name: str
    started_at: datetime
    finished_at: datetime
    exercises_count: int
    completed_count: int
    completion: float  # 0..1
    overall_rating: int
    notes: str


class RatingDescription(BaseModel):
    rating: int
    short: str
    description: str
