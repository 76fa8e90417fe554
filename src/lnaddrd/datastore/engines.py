"""Database engine factory — PostgreSQL (asyncpg) or SQLite (aiosqlite)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from lnaddrd.config.settings import DatabaseEngine

if TYPE_CHECKING:
    from lnaddrd.config.settings import DatabaseConfig


def _postgres_options(config: DatabaseConfig) -> dict[str, Any]:
    # pool_size connections stay open, the rest up to max_open_connections overflow
    return {
        "pool_size": config.max_idle_connections,
        "max_overflow": max(config.max_open_connections - config.max_idle_connections, 0),
        "pool_pre_ping": True,
    }


def create_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create an async SQLAlchemy engine for the configured backend.

    SQLite keeps SQLAlchemy's default pool; PostgreSQL gets a sized pool with
    pre-ping so connections dropped by the server are replaced.
    """
    options: dict[str, Any] = {"echo": config.debug_sql}
    if config.engine is DatabaseEngine.POSTGRESQL:
        options.update(_postgres_options(config))
    return create_async_engine(config.dsn, **options)
