import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text

from actionthreads.core.modelhub import get_modelhub_client

logger = logging.getLogger("actionthreads.services.health")


async def check_db(session: AsyncSession) -> bool:
    """Run ``SELECT 1``; False when the database cannot be reached."""
    try:
        await session.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("health.db.unreachable", extra={"error_type": exc.__class__.__name__})
        return False


def check_modelhub() -> bool:
    """Whether action point generation has a configured provider client."""
    return get_modelhub_client() is not None
