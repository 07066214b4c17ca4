"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. Used by main.py; no business logic
here, only logging setup and DB engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from docroute.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine if one was created."""
    setup_logging()
    logger.info("Starting %s", app.title)

    yield

    from docroute.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        database.engine = None
        database.AsyncSessionLocal = None
        logger.info("Database engine disposed")
