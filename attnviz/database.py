"""
AttnViz Backend: Database Engine Management
==============================================

What:  Async SQLAlchemy engine construction, session factory and ORM base.
Why:   Centralizes all connection logic in one place.
How:   build_engine() creates an async engine from Settings; the engine is
       owned by TextStore, which is constructed once in create_app() and
       injected into the routes. There is no process-wide engine.
Who:   Used by create_app(), TextStore and the Alembic environment (Base).

Connection Pooling:
    SQLite (aiosqlite):  default SQLAlchemy pool, no sizing arguments
    Server databases:    pool_size / max_overflow / pre_ping from Settings,
                         connections recycled hourly
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from attnviz.config import Settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by TextStore.create_schema()
    and by Alembic for migrations.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(app_settings: Settings) -> AsyncEngine:
    """
    Create the async engine described by the given settings.

    Pool sizing arguments are rejected by SQLite's pool classes, so they are
    only passed for server databases.
    """
    options: Dict[str, Any] = {
        # Echo SQL only when debugging; it is very noisy otherwise
        "echo": app_settings.log_level == "DEBUG",
    }
    if not app_settings.is_sqlite:
        options.update(
            pool_size=app_settings.db_pool_size,
            max_overflow=app_settings.db_max_overflow,
            pool_pre_ping=app_settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(app_settings.database_url, **options)


# ── Session Factory ───────────────────────────────────────────────────────
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to an engine.

    expire_on_commit=False keeps attribute access working after commit,
    since records are converted to response models outside the session.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
