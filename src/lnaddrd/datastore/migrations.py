"""Schema creation for development and single-node deployments.

Production deployments run the Alembic scripts instead (see ``alembic/env.py``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lnaddrd.repository.models import Base

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


async def run_auto_migrate(engine: AsyncEngine) -> None:
    """Create all tables defined by the ORM models, skipping existing ones.

    Args:
        engine: The async SQLAlchemy engine to migrate.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema is up to date")


async def drop_all_tables(engine: AsyncEngine) -> None:
    """Drop all tables (test/dev utility only).

    Args:
        engine: The async SQLAlchemy engine.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
