"""Guided workout sessions: start, log sets, rest, navigate, finish, history."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.api.deps import get_current_user
from fittrack.api.v1.endpoints.plans import get_owned_plan, plan_to_read
from fittrack.core.enums import SessionStatus
from fittrack.core.timeutils import as_utc, utcnow
from fittrack.db.session import get_db
from fittrack.models.user import User
from fittrack.models.workout_session import SessionExercise, WorkoutSession
from fittrack.schemas.session import (
    RatingDescription,
    Recommendation,
    RecommendationsApply,
    RecommendationsApplyResult,
    SessionFinish,
    SessionFinishResult,
    SessionStart,
    SetCompletion,
    SetCompletionResult,
    WorkoutSessionRead,
    WorkoutSessionSummary,
)
from fittrack.services import tracker
from fittrack.services.recommendations import (
    apply_recommendations,
    rating_descriptions,
    session_recommendations,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _session_query():
    return select(WorkoutSession).options(
        selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets)
    )


async def _get_owned_session(db: AsyncSession, session_id: uuid.UUID, user: User) -> WorkoutSession:
    result = await db.execute(
        _session_query().where(WorkoutSession.id == session_id, WorkoutSession.user_id == user.id)
    )
    session = result.scalar_one_or_none()
    if not session:
        raise HTTPException(status_code=404, detail="Workout session not found")
    return session


def _ensure_in_progress(session: WorkoutSession) -> None:
    if session.status == SessionStatus.FINISHED:
        raise HTTPException(status_code=409, detail="Workout session is already finished")


@router.get("/ratings", response_model=list[RatingDescription])
async def list_rating_descriptions():
    """Short and long description for every difficulty rating."""
    return rating_descriptions()


@router.get("/history", response_model=list[WorkoutSessionSummary])
async def list_history(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 50,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
):
    """Finished sessions, newest first, optionally within a date range."""
    stmt = _session_query().where(
        WorkoutSession.user_id == user.id,
        WorkoutSession.status == SessionStatus.FINISHED,
    )
    if from_date:
        stmt = stmt.where(WorkoutSession.finished_at >= from_date)
    if to_date:
        stmt = stmt.where(WorkoutSession.finished_at <= to_date)
    stmt = stmt.order_by(WorkoutSession.finished_at.desc()).offset(skip).limit(limit)
    result = await db.execute(stmt)
    summaries = []
    for s in result.scalars().all():
        total = len(s.exercises)
        done = tracker.completed_exercise_count(s)
        summaries.append(
            WorkoutSessionSummary(
                id=s.id,
                workout_plan_id=s.workout_plan_id,
                workout_plan_name=s.workout_plan_name,
                started_at=as_utc(s.started_at),
                finished_at=as_utc(s.finished_at),
                exercises_count=total,
                completed_count=done,
                completion=round(done / total, 4) if total else 0.0,
                overall_rating=s.overall_rating,
                notes=s.notes,
            )
        )
    return summaries


@router.post("", response_model=WorkoutSessionRead, status_code=201)
async def start_session(
    payload: SessionStart,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Start a session from one of the caller's plans."""
    plan = await get_owned_plan(db, payload.workout_plan_id, user)
    if not plan.exercises:
        raise HTTPException(status_code=400, detail="No exercises in this workout plan")
    session = tracker.build_session_from_plan(plan, user.id)
    db.add(session)
    await db.flush()
    logger.info("Started session %s from plan %s", session.id, plan.id)
    return tracker.session_to_read(session)


@router.get("/{session_id}", response_model=WorkoutSessionRead)
async def get_session(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return tracker.session_to_read(await _get_owned_session(db, session_id, user))


@router.post("/{session_id}/sets", response_model=SetCompletionResult)
async def complete_set(
    session_id: uuid.UUID,
    payload: SetCompletion,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Record one set and start the rest timer; feedback once the exercise is done."""
    session = await _get_owned_session(db, session_id, user)
    _ensure_in_progress(session)
    if payload.exercise_index >= len(session.exercises):
        raise HTTPException(status_code=400, detail="Exercise index out of range")
    if payload.set_index >= len(session.exercises[payload.exercise_index].sets):
        raise HTTPException(status_code=400, detail="Set index out of range")
    feedback = tracker.complete_set(
        session,
        payload.exercise_index,
        payload.set_index,
        actual_reps=payload.actual_reps,
        actual_weight=payload.actual_weight,
        weight_unit=payload.weight_unit,
        rating=payload.rating,
    )
    await db.flush()
    return SetCompletionResult(session=tracker.session_to_read(session), feedback=feedback)


@router.post("/{session_id}/rest/skip", response_model=WorkoutSessionRead)
async def skip_rest(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    session = await _get_owned_session(db, session_id, user)
    _ensure_in_progress(session)
    tracker.skip_rest(session)
    await db.flush()
    return tracker.session_to_read(session)


async def _move(db: AsyncSession, session_id: uuid.UUID, user: User, step: int) -> WorkoutSessionRead:
    session = await _get_owned_session(db, session_id, user)
    _ensure_in_progress(session)
    tracker.move_exercise(session, step)
    await db.flush()
    return tracker.session_to_read(session)


@router.post("/{session_id}/next", response_model=WorkoutSessionRead)
async def next_exercise(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _move(db, session_id, user, 1)


@router.post("/{session_id}/previous", response_model=WorkoutSessionRead)
async def previous_exercise(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _move(db, session_id, user, -1)


@router.post("/{session_id}/finish", response_model=SessionFinishResult)
async def finish_session(
    session_id: uuid.UUID,
    payload: SessionFinish,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Mark the session finished and return weight recommendations."""
    session = await _get_owned_session(db, session_id, user)
    _ensure_in_progress(session)
    tracker.finish_session(session, payload.overall_rating, payload.notes)
    await db.flush()
    logger.info("Finished session %s", session.id)
    return SessionFinishResult(
        session=tracker.session_to_read(session),
        recommendations=session_recommendations(session),
    )


@router.get("/{session_id}/recommendations", response_model=list[Recommendation])
async def get_recommendations(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    session = await _get_owned_session(db, session_id, user)
    if session.status != SessionStatus.FINISHED:
        raise HTTPException(status_code=409, detail="Workout session is not finished yet")
    return session_recommendations(session)


@router.post("/{session_id}/recommendations/apply", response_model=RecommendationsApplyResult)
async def apply_session_recommendations(
    session_id: uuid.UUID,
    payload: RecommendationsApply,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Copy the selected recommended weights into the session's plan."""
    session = await _get_owned_session(db, session_id, user)
    if session.status != SessionStatus.FINISHED:
        raise HTTPException(status_code=409, detail="Workout session is not finished yet")
    if session.workout_plan_id is None:
        raise HTTPException(status_code=404, detail="Workout plan not found")
    plan = await get_owned_plan(db, session.workout_plan_id, user)
    selected = set(payload.exercise_ids)
    chosen = [r for r in session_recommendations(session) if r.exercise_id in selected]
    updated = apply_recommendations(plan, chosen)
    if updated:
        plan.updated_at = utcnow()
    await db.flush()
    logger.info("Applied %d recommendations from session %s to plan %s", updated, session.id, plan.id)
    return RecommendationsApplyResult(plan=plan_to_read(plan), updated_exercises=updated)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a session. For an in-progress session this is exit without saving."""
    session = await _get_owned_session(db, session_id, user)
    await db.delete(session)
    return None
