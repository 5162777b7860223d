"""Initial schema: users, tokens, exercises, plans, sessions.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

json_document = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")

fitness_level = sa.Enum("BEGINNER", "INTERMEDIATE", "ADVANCED", name="fitnesslevel")
unit_system = sa.Enum("METRIC", "IMPERIAL", name="unitsystem")
token_purpose = sa.Enum("ACCESS", "PASSWORD_RESET", name="tokenpurpose")
weight_unit = sa.Enum("KG", "LB", name="weightunit")
session_status = sa.Enum("IN_PROGRESS", "FINISHED", name="sessionstatus")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("photo_url", sa.String(length=1000), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("height_cm", sa.Float(), nullable=True),
        sa.Column("weight_kg", sa.Float(), nullable=True),
        sa.Column("fitness_level", fitness_level, nullable=False),
        sa.Column("fitness_goals", json_document, nullable=False),
        sa.Column("notifications_enabled", sa.Boolean(), nullable=False),
        sa.Column("unit_system", unit_system, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_active_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "auth_tokens",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("purpose", token_purpose, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_auth_tokens_user_id"), "auth_tokens", ["user_id"], unique=False)
    op.create_index(op.f("ix_auth_tokens_token_hash"), "auth_tokens", ["token_hash"], unique=True)

    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("equipment", sa.String(length=100), nullable=False),
        sa.Column("muscle_groups", json_document, nullable=False),
        sa.Column("instructions", json_document, nullable=False),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column("images", json_document, nullable=False),
        sa.Column("tags", json_document, nullable=False),
        sa.Column("videos", json_document, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=True)

    op.create_table(
        "workout_plans",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workout_plans_user_created", "workout_plans", ["user_id", "created_at"], unique=False)

    op.create_table(
        "plan_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("plan_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=True),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("sets", sa.Integer(), nullable=False),
        sa.Column("reps", sa.String(length=50), nullable=False),
        sa.Column("rest_seconds", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("weight_unit", weight_unit, nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["plan_id"], ["workout_plans.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_plan_exercises_plan_id"), "plan_exercises", ["plan_id"], unique=False)

    op.create_table(
        "workout_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("workout_plan_id", sa.Uuid(), nullable=True),
        sa.Column("workout_plan_name", sa.String(length=255), nullable=False),
        sa.Column("status", session_status, nullable=False),
        sa.Column("current_exercise_index", sa.Integer(), nullable=False),
        sa.Column("rest_started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rest_seconds", sa.Integer(), nullable=True),
        sa.Column("overall_rating", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["workout_plan_id"], ["workout_plans.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_workout_sessions_user_finished", "workout_sessions", ["user_id", "finished_at"], unique=False
    )

    op.create_table(
        "session_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=True),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("target_sets", sa.Integer(), nullable=False),
        sa.Column("target_reps", sa.String(length=50), nullable=False),
        sa.Column("rest_seconds", sa.Integer(), nullable=False),
        sa.Column("target_weight", sa.Float(), nullable=False),
        sa.Column("weight_unit", weight_unit, nullable=False),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["session_id"], ["workout_sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_session_exercises_session_id"), "session_exercises", ["session_id"], unique=False)
    op.create_index(op.f("ix_session_exercises_exercise_id"), "session_exercises", ["exercise_id"], unique=False)

    op.create_table(
        "session_sets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_exercise_id", sa.Uuid(), nullable=False),
        sa.Column("set_index", sa.Integer(), nullable=False),
        sa.Column("actual_reps", sa.Integer(), nullable=False),
        sa.Column("actual_weight", sa.Float(), nullable=False),
        sa.Column("weight_unit", weight_unit, nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["session_exercise_id"], ["session_exercises.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_session_sets_session_exercise_id"), "session_sets", ["session_exercise_id"], unique=False
    )


def downgrade() -> None:
    op.drop_table("session_sets")
    op.drop_table("session_exercises")
    op.drop_table("workout_sessions")
    op.drop_table("plan_exercises")
    op.drop_table("workout_plans")
    op.drop_table("exercises")
    op.drop_table("auth_tokens")
    op.drop_table("users")
    bind = op.get_bind()
    for enum_type in (session_status, weight_unit, token_purpose, unit_system, fitness_level):
        enum_type.drop(bind, checkfirst=True)
