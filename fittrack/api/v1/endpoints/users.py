"""Current user's profile, settings, password, account deletion and stats."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.api.deps import get_current_token, get_current_user
from fittrack.core.enums import SessionStatus
from fittrack.core.security import hash_password, verify_password
from fittrack.core.timeutils import as_utc
from fittrack.db.session import get_db
from fittrack.models.user import AuthToken, User
from fittrack.models.workout_session import SessionExercise, WorkoutSession
from fittrack.schemas.user import (
    AccountDelete,
    PasswordChange,
    UserRead,
    UserSettingsUpdate,
    UserStats,
    UserUpdate,
)
from fittrack.services.accounts import revoke_tokens
from fittrack.services.stats import completion_rate, compute_streaks

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserRead)
async def get_profile(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserRead)
async def update_profile(
    payload: UserUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update profile fields (partial)."""
    for k, v in payload.model_dump(exclude_unset=True).items():
        if v is None and k in ("display_name", "fitness_level", "fitness_goals"):
            continue
        setattr(user, k, v)
    await db.flush()
    return user


@router.patch("/me/settings", response_model=UserRead)
async def update_settings(
    payload: UserSettingsUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    for k, v in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user, k, v)
    await db.flush()
    return user


@router.post("/me/password", status_code=204)
async def change_password(
    payload: PasswordChange,
    token: AuthToken = Depends(get_current_token),
    db: AsyncSession = Depends(get_db),
):
    """Change password; every other access token is revoked."""
    user = token.user
    if not verify_password(payload.current_password, user.password_hash):
        raise HTTPException(status_code=400, detail="Current password is incorrect.")
    user.password_hash = hash_password(payload.new_password)
    await revoke_tokens(db, user, keep=token)
    logger.info("Password changed for user %s", user.id)
    return None


@router.delete("/me", status_code=204)
async def delete_account(
    payload: AccountDelete,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete the account with its plans, sessions and tokens."""
    if not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Password is incorrect.")
    user_id = user.id
    await db.delete(user)
    logger.info("Deleted user %s", user_id)
    return None


@router.get("/me/stats", response_model=UserStats)
async def get_stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Workout count, streaks (consecutive days with a finished session) and completion rate."""
    finished = (WorkoutSession.user_id == user.id, WorkoutSession.status == SessionStatus.FINISHED)

    result = await db.execute(
        select(WorkoutSession)
        .options(selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets))
        .where(*finished)
    )
    sessions = result.scalars().all()

    # Distinct UTC calendar days, newest first
    workout_dates = sorted({as_utc(s.finished_at).date() for s in sessions if s.finished_at}, reverse=True)

    current, longest = compute_streaks(workout_dates, today=datetime.now(timezone.utc).date())
    return UserStats(
        total_workouts=len(sessions),
        current_streak=current,
        longest_streak=longest,
        last_workout_date=workout_dates[0] if workout_dates else None,
        completion_rate=completion_rate(sessions),
    )
