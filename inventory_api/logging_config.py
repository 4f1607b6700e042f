"""
Logging configuration for the inventory service.

Routes every logger (ours, uvicorn's, motor's) through a single rich handler.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger with a rich handler for colored output.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        log_file: Optional file path to also write logs to

    Returns:
        The ``inventory_api`` logger
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    debug = numeric <= logging.DEBUG
    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            show_time=True,
            show_path=debug,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=numeric, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger("inventory_api")
    logger.setLevel(numeric)
    return logger
