"""
Configure the logger
"""

import logging
import os

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("filer")


def set_log_level(level: str) -> None:
    """Apply LOG_LEVEL once the environment file has been loaded"""
    logging.getLogger().setLevel(level.upper())
