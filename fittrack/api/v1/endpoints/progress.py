"""Progress charts over finished sessions."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.api.deps import get_current_user
from fittrack.core.enums import SessionStatus
from fittrack.db.session import get_db
from fittrack.models.user import User
from fittrack.models.workout_session import SessionExercise, WorkoutSession
from fittrack.schemas.progress import ExerciseProgressDetail, ExerciseProgressSummary
from fittrack.services.progress import exercise_progress, progress_summary

router = APIRouter()


async def _finished_sessions(db: AsyncSession, user: User) -> list[WorkoutSession]:
    """Caller's finished sessions, oldest first."""
    result = await db.execute(
        select(WorkoutSession)
        .options(selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets))
        .where(WorkoutSession.user_id == user.id, WorkoutSession.status == SessionStatus.FINISHED)
        .order_by(WorkoutSession.finished_at.asc())
    )
    return list(result.scalars().all())


@router.get("", response_model=list[ExerciseProgressSummary])
async def get_progress_summary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Every exercise completed at least once, most tracked first."""
    return progress_summary(await _finished_sessions(db, user))


@router.get("/exercises/{exercise_id}", response_model=ExerciseProgressDetail)
async def get_exercise_progress(
    exercise_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    detail = exercise_progress(await _finished_sessions(db, user), exercise_id)
    if detail is None:
        raise HTTPException(status_code=404, detail="No data available for this exercise")
    return detail
