"""Shared endpoint dependencies."""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.core.enums import TokenPurpose
from fittrack.db.session import get_db
from fittrack.models.user import AuthToken, User
from fittrack.services.accounts import resolve_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> AuthToken:
    """Resolve the bearer token to a live access token of an active user."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = await resolve_token(db, credentials.credentials, TokenPurpose.ACCESS)
    if token is None or not token.user.is_active:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


async def get_current_user(token: AuthToken = Depends(get_current_token)) -> User:
    return token.user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Like get_current_user, but anonymous callers get None. A bad token is still a 401."""
    if credentials is None:
        return None
    token = await get_current_token(credentials, db)
    return token.user
