"""Loguru sinks for the engine: coloured console output and an optional rotating log file."""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> list[int]:
    """
    Replace loguru's default sink by the engine's sinks.
    ----

    Returns the ids of the added handlers, so a caller can `logger.remove()` them again.
    """
    logger.remove()
    handler_ids = [logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)]

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler_ids.append(
            logger.add(log_path, level=level, format=FILE_FORMAT, rotation="10 MB", retention=5)
        )

    logger.info(f"Logging configured at level: {level}")
    return handler_ids
