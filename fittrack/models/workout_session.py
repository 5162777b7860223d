"""Workout session - one execution of a plan, with per-set performance."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fittrack.core.enums import SessionStatus, WeightUnit
from fittrack.db.base import Base


class WorkoutSession(Base):
    """Snapshot of a plan being executed (in progress) or executed (finished).

    Rest state: rest_started_at + rest_seconds; remaining time is derived on read.
    """

    __tablename__ = "workout_sessions"
    __table_args__ = (
        Index("ix_workout_sessions_user_finished", "user_id", "finished_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    workout_plan_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workout_plans.id", ondelete="SET NULL"), nullable=True
    )
    workout_plan_name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus), default=SessionStatus.IN_PROGRESS, nullable=False
    )
    current_exercise_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rest_started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    overall_rating: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="workout_sessions")
    workout_plan: Mapped["WorkoutPlan | None"] = relationship("WorkoutPlan", back_populates="sessions")
    exercises: Mapped[list["SessionExercise"]] = relationship(
        "SessionExercise",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionExercise.position",
    )


class SessionExercise(Base):
    """Plan exercise as it was when the session started (targets are frozen)."""

    __tablename__ = "session_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True, index=True
    )
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    target_sets: Mapped[int] = mapped_column(Integer, nullable=False)
    target_reps: Mapped[str] = mapped_column(String(50), nullable=False)
    rest_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    target_weight: Mapped[float] = mapped_column(Float, nullable=False)
    weight_unit: Mapped[WeightUnit] = mapped_column(Enum(WeightUnit), nullable=False)

    session: Mapped["WorkoutSession"] = relationship("WorkoutSession", back_populates="exercises")
    sets: Mapped[list["SessionSet"]] = relationship(
        "SessionSet",
        back_populates="session_exercise",
        cascade="all, delete-orphan",
        order_by="SessionSet.set_index",
    )


class SessionSet(Base):
    """Actual performance for one set; rating 0 = not rated, 1-5 = very easy .. very difficult."""

    __tablename__ = "session_sets"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    session_exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("session_exercises.id", ondelete="CASCADE"), nullable=False, index=True
    )
    set_index: Mapped[int] = mapped_column(Integer, nullable=False)
    actual_reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    actual_weight: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    weight_unit: Mapped[WeightUnit] = mapped_column(Enum(WeightUnit), default=WeightUnit.KG, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    session_exercise: Mapped["SessionExercise"] = relationship("SessionExercise", back_populates="sets")
