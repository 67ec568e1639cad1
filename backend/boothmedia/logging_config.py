# backend/boothmedia/logging_config.py
"""
Loguru sink configuration.

Called once by the application lifespan. Everything else logs through
``from loguru import logger`` directly.
"""

import sys
from typing import Optional

from loguru import logger

from .enums import LogLevel

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: LogLevel = LogLevel.INFO, log_file: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with the application sinks.

    Args:
        level: Minimum level for all sinks
        log_file: Optional path for a rotating file sink
    """
    logger.remove()
    logger.add(sys.stderr, level=level.value, format=CONSOLE_FORMAT, enqueue=False)

    if log_file:
        logger.add(
            log_file,
            level=level.value,
            rotation="10 MB",
            retention=5,
            enqueue=True,
        )

    logger.debug(f"Logging configured (level={level.value}, file={log_file or '-'})")
