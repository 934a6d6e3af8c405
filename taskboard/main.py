"""
Taskboard — Application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `services/`, `models/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.v1.api import api_router
from taskboard.core.config import settings
from taskboard.core.exceptions import register_exception_handlers
from taskboard.db.base import Base
from taskboard.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from taskboard.models.task import Task  # noqa: F401
from taskboard.models.user import ROLE_ADMIN, User

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


async def seed_first_admin(session: AsyncSession) -> User | None:
    """Create the bootstrap admin unless some user already holds its PIN."""
    result = await session.execute(
        select(User).where(User.pin == settings.FIRST_ADMIN_PIN)
    )
    if result.scalar_one_or_none() is not None:
        return None

    admin = User(
        name=settings.FIRST_ADMIN_NAME,
        pin=settings.FIRST_ADMIN_PIN,
        role=ROLE_ADMIN,
        is_active=True,
    )
    session.add(admin)
    await session.commit()
    await session.refresh(admin)
    logger.info("Default admin created: %s (PIN: <redacted>)", admin.name)
    return admin


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    async with async_session_factory() as session:
        await seed_first_admin(session)

    logger.info("Taskboard v%s started", settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="PIN-authenticated work order assignment",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    # Serve frontend static files (must be last — catch-all mount)
    frontend_dir = Path(__file__).resolve().parent.parent / "frontend"
    if frontend_dir.is_dir():
        application.mount(
            "/",
            StaticFiles(directory=str(frontend_dir), html=True),
            name="frontend",
        )
        logger.info("Frontend mounted from %s", frontend_dir)

    return application


app = create_app()
