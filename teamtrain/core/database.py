import logging

from teamtrain.core.base import Base
from teamtrain.core.config import settings
from teamtrain.core.db import engine

# register every model on Base.metadata
import teamtrain.models  # noqa: F401

logger = logging.getLogger(__name__)


async def init_database():
    """Create the tables, dropping them first when RESET_DATABASE is set."""
    async with engine.begin() as conn:
        if settings.RESET_DATABASE:
            logger.warning("RESET_DATABASE=true, dropping all tables")
            await conn.run_sync(Base.metadata.drop_all)

        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created/verified")
