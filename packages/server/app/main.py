"""
SkillMatch API Server

Entry point for the FastAPI application.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1 import router as api_v1_router
from app.core.config import get_settings
from app.core.database import async_session_factory, dispose_engine, engine
from app.core.errors import setup_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import (
    REQUEST_ID_HEADER,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from app.core.redis import close_redis
from app.core.schema import EXPECTED_REVISION, get_schema_revision, verify_schema_revision
from app.repositories import ProjectRepository

settings = get_settings()
log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging and schema check. Shutdown: close connections."""
    setup_logging(settings.debug, json_logs=settings.log_json)
    log.info("app.starting", verify_schema=settings.verify_schema)
    if settings.verify_schema:
        await verify_schema_revision(engine)

    yield

    log.info("app.stopping")
    await close_redis()
    await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="SkillMatch",
        description="Skill-sharing and project-collaboration API.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    setup_exception_handlers(app)

    # Middleware (last added is outermost)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestContextMiddleware)

    # API routes
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Liveness check endpoint."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check():
        """Readiness check endpoint."""
        return {"status": "ready"}

    @app.get("/status", tags=["System"])
    async def status_check():
        """Store connectivity, schema revision and a project count."""
        try:
            async with engine.connect() as conn:
                revision = await get_schema_revision(conn)
            async with async_session_factory() as session:
                project_count = await ProjectRepository(session).count()
        except (SQLAlchemyError, OSError) as exc:
            log.error("status.db_unavailable", error=str(exc))
            return JSONResponse(
                status_code=500,
                content={
                    "ok": False,
                    "db": {"connected": False, "expectedRevision": EXPECTED_REVISION},
                    "message": "Database unavailable",
                },
            )
        return {
            "ok": True,
            "db": {
                "connected": True,
                "schemaRevision": revision,
                "expectedRevision": EXPECTED_REVISION,
                "projectCount": project_count,
            },
        }

    return app


app = create_app()
