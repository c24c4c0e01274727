"""Schema bootstrap for local and test databases.

Production schemas are managed by Alembic. For SQLite development databases and
tests the tables can be created straight from the model metadata.
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from familytree.core.logging import logger
from familytree.models import Base


async def create_tables(engine: AsyncEngine) -> None:
    """Create every table that does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")

