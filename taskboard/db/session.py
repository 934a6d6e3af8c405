"""
Async SQLAlchemy engine & session factory.

PostgreSQL (asyncpg) in production; SQLite (aiosqlite) is accepted for
local runs and the test-suite.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from taskboard.core.config import settings


def build_engine(url: str) -> AsyncEngine:
    engine_args: dict[str, Any] = {"echo": False}

    if url.startswith("postgresql"):
        engine_args.update(
            {
                "pool_pre_ping": True,
                "pool_size": 10,
                "max_overflow": 5,
                "pool_recycle": 300,
            }
        )
    elif url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}

    return create_async_engine(url, **engine_args)


engine = build_engine(settings.DATABASE_URL)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
