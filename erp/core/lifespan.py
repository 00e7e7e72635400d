"""Application lifespan: startup and shutdown.

Only infrastructure wiring here: logging setup on startup, DB engine
dispose on shutdown. The storage façade is built in create_app() so it
exists before the first request, lifespan or not.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from erp.core.config import get_settings
from erp.infrastructure.persistence import database
from erp.shared.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine."""
    settings = get_settings()
    setup_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)

    yield

    await database.dispose_engine()
    logger.info("%s stopped", settings.app_name)
