"""
Define application startup and shutdown procedures
"""

import re
from contextlib import asynccontextmanager
from fastapi import FastAPI
from core.config import get_settings
from core.logger import logger
from core.mongo import create_record_store
from core.storage import create_blob_store


def _log_setting(key: str, value) -> None:
    """Log a setting, masking credentials"""
    if value is None:
        logger.info("  %s: %s", key, value)
    elif "ACCOUNT" in key or "ACCESS_KEY" in key or "SECRET" in key:
        logger.info("  %s: %s", key, "*****")
    elif "CONNECTION_STRING" in key:
        # Mask password in connection string if present
        masked_value = re.sub(r"://(.*?):(.*?)@", r"://\1:*****@", value)
        logger.info("  %s: %s", key, masked_value)
    else:
        logger.info("  %s: %s", key, value)


# Handle startup/shutdown tasks
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("In lifespan...starting up")

    settings = get_settings()
    logger.info("Configuration Settings:")
    for key, value in settings.model_dump().items():
        _log_setting(key, value)

    logger.info("Initializing blob store...")
    blob_store = create_blob_store(settings)
    blob_store.ensure_bucket()
    app.state.blob_store = blob_store

    logger.info("Connecting to record store...")
    record_store = create_record_store(settings)
    record_store.ping()
    app.state.record_store = record_store

    logger.info("In lifespan...yield")
    try:
        yield
    finally:
        # Shutdown
        logger.info("In lifespan...shutting down")
        record_store.close()
