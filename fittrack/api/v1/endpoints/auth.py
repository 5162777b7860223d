"""Registration, login/logout and password reset."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.deps import get_current_token
from fittrack.core.config import get_settings
from fittrack.core.enums import TokenPurpose
from fittrack.core.security import hash_password, verify_password
from fittrack.core.timeutils import utcnow
from fittrack.db.session import get_db
from fittrack.models.user import AuthToken, User
from fittrack.schemas.auth import (
    LoginRequest,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegisterRequest,
    TokenResponse,
)
from fittrack.schemas.user import UserRead
from fittrack.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter()

RESET_REQUESTED_MESSAGE = "If an account exists for this email, password reset instructions have been sent."


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def _token_response(db: AsyncSession, user: User) -> TokenResponse:
    settings = get_settings()
    plain, token = await accounts.issue_token(
        db, user, TokenPurpose.ACCESS, settings.access_token_ttl_minutes
    )
    return TokenResponse(
        access_token=plain,
        expires_at=token.expires_at,
        user=UserRead.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create an account with default settings and sign it in."""
    email = _normalize_email(payload.email)
    result = await db.execute(select(User.id).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="An account already exists for this email.")
    now = utcnow()
    user = User(
        email=email,
        display_name=payload.display_name,
        password_hash=hash_password(payload.password),
        fitness_goals=[],
        created_at=now,
        updated_at=now,
        last_active_at=now,
    )
    db.add(user)
    await db.flush()
    logger.info("Registered user %s", user.id)
    return await _token_response(db, user)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    email = _normalize_email(payload.email)
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s", email)
        raise HTTPException(status_code=401, detail="Invalid email or password.")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="This account has been disabled.")
    user.last_active_at = utcnow()
    return await _token_response(db, user)


@router.post("/logout", status_code=204)
async def logout(token: AuthToken = Depends(get_current_token)):
    """Revoke the token used for this request."""
    token.revoked_at = utcnow()
    return None


@router.post("/password-reset", response_model=MessageResponse, status_code=202)
async def request_password_reset(payload: PasswordResetRequest, db: AsyncSession = Depends(get_db)):
    """Always answers the same way so account existence is not disclosed."""
    email = _normalize_email(payload.email)
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user is not None and user.is_active:
        settings = get_settings()
        await accounts.revoke_tokens(db, user, TokenPurpose.PASSWORD_RESET)
        plain, _ = await accounts.issue_token(
            db, user, TokenPurpose.PASSWORD_RESET, settings.password_reset_ttl_minutes
        )
        accounts.deliver_password_reset(user.email, plain)
    return MessageResponse(message=RESET_REQUESTED_MESSAGE)


@router.post("/password-reset/confirm", status_code=204)
async def confirm_password_reset(payload: PasswordResetConfirm, db: AsyncSession = Depends(get_db)):
    """Set a new password with a reset token; signs out every session."""
    token = await accounts.resolve_token(db, payload.token, TokenPurpose.PASSWORD_RESET)
    if token is None:
        raise HTTPException(status_code=400, detail="Invalid or expired reset token")
    user = token.user
    user.password_hash = hash_password(payload.new_password)
    token.revoked_at = utcnow()
    await accounts.revoke_tokens(db, user, TokenPurpose.ACCESS)
    logger.info("Password reset completed for user %s", user.id)
    return None
