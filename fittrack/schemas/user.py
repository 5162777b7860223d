"""User profile, settings and account schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fittrack.core.constants import FITNESS_GOALS, MIN_PASSWORD_LENGTH
from fittrack.core.enums import FitnessLevel, UnitSystem


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    display_name: str
    photo_url: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    fitness_level: FitnessLevel
    fitness_goals: list[str] = []
    notifications_enabled: bool
    unit_system: UnitSystem
    created_at: datetime
    last_active_at: datetime | None = None


class UserUpdate(BaseModel):
    display_name: str | None = Field(None, min_length=1, max_length=100)
    photo_url: str | None = Field(None, max_length=1000)
    height_cm: float | None = Field(None, gt=0)
    weight_kg: float | None = Field(None, gt=0)
    fitness_level: FitnessLevel | None = None
    fitness_goals: list[str] | None = None

    @field_validator("display_name")
    @classmethod
    def display_name_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Please enter your name")
        return v

    @field_validator("fitness_goals")
    @classmethod
    def known_goals(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        unknown = [g for g in v if g not in FITNESS_GOALS]
        if unknown:
            raise ValueError(f"Unknown fitness goals: {', '.join(unknown)}")
        # dict keeps first-seen order
        return list(dict.fromkeys(v))


class UserSettingsUpdate(BaseModel):
    notifications_enabled: bool | None = None
    unit_system: UnitSystem | None = None


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChange":
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class AccountDelete(BaseModel):
    password: str = Field(..., min_length=1)


class UserStats(BaseModel):
    total_workouts: int
    current_streak: int
    longest_streak: int
    last_workout_date: date | None = None
    completion_rate: float  # percent of exercises completed across finished sessions
