"""Account tokens: issue, resolve and revoke access and password-reset tokens."""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.core.enums import TokenPurpose
from fittrack.core.security import hash_token, new_token
from fittrack.core.timeutils import as_utc, utcnow
from fittrack.models.user import AuthToken, User

logger = logging.getLogger(__name__)


async def issue_token(
    db: AsyncSession, user: User, purpose: TokenPurpose, ttl_minutes: int
) -> tuple[str, AuthToken]:
    """Create a token; the plain value is returned once and never stored."""
    plain = new_token()
    now = utcnow()
    token = AuthToken(
        user_id=user.id,
        token_hash=hash_token(plain),
        purpose=purpose,
        created_at=now,
        expires_at=now + timedelta(minutes=ttl_minutes),
    )
    db.add(token)
    await db.flush()
    return plain, token


async def resolve_token(db: AsyncSession, plain: str, purpose: TokenPurpose) -> AuthToken | None:
    """Return the unrevoked, unexpired token (user loaded) matching plain, else None."""
    result = await db.execute(
        select(AuthToken)
        .options(selectinload(AuthToken.user))
        .where(AuthToken.token_hash == hash_token(plain), AuthToken.purpose == purpose)
    )
    token = result.scalar_one_or_none()
    if token is None or token.revoked_at is not None:
        return None
    if as_utc(token.expires_at) <= utcnow():
        return None
    return token


async def revoke_tokens(
    db: AsyncSession,
    user: User,
    purpose: TokenPurpose | None = None,
    keep: AuthToken | None = None,
) -> None:
    """Revoke the user's live tokens (of one purpose, or all), optionally sparing one."""
    stmt = (
        update(AuthToken)
        .where(AuthToken.user_id == user.id, AuthToken.revoked_at.is_(None))
        .values(revoked_at=utcnow())
    )
    if purpose is not None:
        stmt = stmt.where(AuthToken.purpose == purpose)
    if keep is not None:
        stmt = stmt.where(AuthToken.id != keep.id)
    await db.execute(stmt.execution_options(synchronize_session=False))


def deliver_password_reset(email: str, token: str) -> None:
    """Hand a reset token to the user. No mail transport is configured, so this only logs."""
    logger.info("Password reset requested for %s", email)
