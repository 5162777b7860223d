"""Liveness and readiness probes."""

import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.core.config import get_settings
from fittrack.db.session import engine, get_db

router = APIRouter()


@router.get("")
async def health():
    """Liveness: app name, environment and, when BUILD_TIMESTAMP is set, the build time."""
    settings = get_settings()
    payload: dict = {"status": "ok", "app": settings.app_name, "environment": settings.environment}
    built_at = os.environ.get("BUILD_TIMESTAMP")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: the database answers and the schema is in place."""
    backend = engine.dialect.name
    try:
        await db.execute(text("SELECT 1"))
        users = await db.execute(text("SELECT COUNT(*) FROM users"))
    except Exception as e:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": backend, "detail": str(e)},
        )
    return {"status": "ok", "database": backend, "users": users.scalar_one()}
