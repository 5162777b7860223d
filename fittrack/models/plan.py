"""Workout plan - user-owned ordered list of exercises with parameters."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fittrack.core.constants import DEFAULT_REPS, DEFAULT_REST_SECONDS, DEFAULT_SETS, DEFAULT_WEIGHT
from fittrack.core.enums import WeightUnit
from fittrack.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutPlan(Base):
    """Named plan owned by a user."""

    __tablename__ = "workout_plans"
    __table_args__ = (Index("ix_workout_plans_user_created", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    user: Mapped["User"] = relationship("User", back_populates="workout_plans")
    exercises: Mapped[list["PlanExercise"]] = relationship(
        "PlanExercise",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="PlanExercise.position",
    )
    # Sessions outlive their plan; deleting a plan nulls the reference
    sessions: Mapped[list["WorkoutSession"]] = relationship("WorkoutSession", back_populates="workout_plan")


class PlanExercise(Base):
    """Exercise entry in a plan with its target parameters."""

    __tablename__ = "plan_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True
    )
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)  # snapshot for display
    sets: Mapped[int] = mapped_column(Integer, default=DEFAULT_SETS, nullable=False)
    reps: Mapped[str] = mapped_column(String(50), default=DEFAULT_REPS, nullable=False)  # e.g. "10-12"
    rest_seconds: Mapped[int] = mapped_column(Integer, default=DEFAULT_REST_SECONDS, nullable=False)
    weight: Mapped[float] = mapped_column(Float, default=DEFAULT_WEIGHT, nullable=False)
    weight_unit: Mapped[WeightUnit] = mapped_column(Enum(WeightUnit), default=WeightUnit.KG, nullable=False)
    notes: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    plan: Mapped["WorkoutPlan"] = relationship("WorkoutPlan", back_populates="exercises")
