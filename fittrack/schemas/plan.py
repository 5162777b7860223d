"""Workout plan schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fittrack.core.constants import DEFAULT_REPS, DEFAULT_REST_SECONDS, DEFAULT_SETS, DEFAULT_WEIGHT
from fittrack.core.enums import WeightUnit


def _reps_not_blank(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Please enter reps")
    return v


class PlanExerciseCreate(BaseModel):
    exercise_id: UUID
    sets: int = Field(DEFAULT_SETS, gt=0)
    reps: str = Field(DEFAULT_REPS, min_length=1, max_length=50)  # free text, e.g. "10-12"
    rest_seconds: int = Field(DEFAULT_REST_SECONDS, ge=0)
    weight: float = Field(DEFAULT_WEIGHT, ge=0)
    weight_unit: WeightUnit = WeightUnit.KG
    notes: str = Field("", max_length=500)

    @field_validator("reps")
    @classmethod
    def reps_not_blank(cls, v):
        return _reps_not_blank(v)


class PlanExerciseUpdate(BaseModel):
    sets: int | None = Field(None, gt=0)
    reps: str | None = Field(None, min_length=1, max_length=50)
    rest_seconds: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    weight_unit: WeightUnit | None = None
    notes: str | None = Field(None, max_length=500)

    @field_validator("reps")
    @classmethod
    def reps_not_blank(cls, v):
        return _reps_not_blank(v)


class PlanExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exercise_id: UUID | None = None
    exercise_name: str
    sets: int
    reps: str
    rest_seconds: int
    weight: float
    weight_unit: WeightUnit
    notes: str
    position: int


class PlanExercisesAdd(BaseModel):
    exercises: list[PlanExerciseCreate] = Field(..., min_length=1)


class PlanExercisesReorder(BaseModel):
    plan_exercise_ids: list[UUID]


class WorkoutPlanBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=2000)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a name for your workout plan")
        return v


class WorkoutPlanCreate(WorkoutPlanBase):
    pass


class WorkoutPlanUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Please enter a name for your workout plan")
        return v


class WorkoutPlanSummary(WorkoutPlanBase):
    id: UUID
    exercise_count: int
    created_at: datetime
    updated_at: datetime


class WorkoutPlanRead(WorkoutPlanBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime
    exercises: list[PlanExerciseRead] = []
