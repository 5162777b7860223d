"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import fittrack.models  # noqa: F401  (register tables on Base.metadata)
from fittrack.api.v1 import api_router
from fittrack.core.config import get_settings
from fittrack.core.logging_config import configure_logging
from fittrack.db.base import Base
from fittrack.db.session import engine

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging and (optionally) tables; shutdown: dispose the engine."""
    configure_logging(settings)
    if settings.auto_create_tables:
        # Local SQLite and tests; use Alembic everywhere else
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("%s starting (%s)", settings.app_name, settings.environment)
    yield
    await engine.dispose()
    logger.info("%s stopped", settings.app_name)


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: anything in debug, localhost in development, CORS_ORIGINS otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
