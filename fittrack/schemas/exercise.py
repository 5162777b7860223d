"""Exercise schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    equipment: str = Field(default="", max_length=100)
    muscle_groups: list[str] = []
    instructions: dict[str, str] = {}
    description: str | None = Field(None, max_length=2000)
    images: list[str] = []
    tags: list[str] = []
    videos: list[str] = []


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    equipment: str | None = Field(None, max_length=100)
    muscle_groups: list[str] | None = None
    instructions: dict[str, str] | None = None
    description: str | None = Field(None, max_length=2000)
    images: list[str] | None = None
    tags: list[str] | None = None
    videos: list[str] | None = None


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime


class ExerciseFilterOptions(BaseModel):
    """Values offered by the catalog filter dialog."""

    muscle_groups: list[str]
    equipment: list[str]
