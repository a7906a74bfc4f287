"""
employee_registry.db.init_db

Schema initialization.

Responsibilities:
- Create tables and indexes if they don't exist.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from employee_registry.db.schema import metadata


async def init_db(engine: AsyncEngine) -> None:
    """
    Create the three tables and their indexes. Safe to run against an
    already-initialized store (`checkfirst`).
    """

    # Use a transactional DDL block when supported by the backend.
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all, checkfirst=True)
