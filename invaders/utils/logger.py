"""
Logging setup for Invaders.

Every module asks for its logger with get_logger(__name__); setup_logging()
attaches handlers to the package logger once, from the loaded LoggingConfig.
"""

import logging
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .config_loader import LoggingConfig

PACKAGE_LOGGER = "invaders"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(config: Optional["LoggingConfig"] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        config: Logging section of the loaded configuration (defaults to INFO
            on stderr with no log file)

    Returns:
        The configured package logger
    """
    level_name = config.level if config else "INFO"
    log_file = config.log_file if config else ""

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, str(level_name).upper(), logging.INFO))

    # Re-running setup replaces our handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
