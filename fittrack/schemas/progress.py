"""Progress chart schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from fittrack.core.enums import WeightUnit


class ProgressPoint(BaseModel):
    date: datetime
    weight: float
    weight_unit: WeightUnit
    reps: float
    rating: float


class ExerciseProgressSummary(BaseModel):
    exercise_id: UUID
    exercise_name: str
    data_points: int
    progress_percent: float
    current_weight: float
    weight_unit: WeightUnit


class ExerciseProgressDetail(BaseModel):
    exercise_id: UUID
    exercise_name: str
    points: list[ProgressPoint]
    weight_change: float
    weight_change_percent: float
    reps_change: float
