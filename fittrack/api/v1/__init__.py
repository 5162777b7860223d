"""API v1 router aggregation."""

from fastapi import APIRouter

from fittrack.api.v1.endpoints import auth, exercises, health, plans, progress, sessions, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(progress.router, prefix="/progress", tags=["progress"])
