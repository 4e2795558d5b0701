"""Logging configuration."""

import logging
from pathlib import Path
from typing import Optional, Union
from rich.logging import RichHandler
from ..config import get_settings


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the root ``beacon`` logger and return it.

    Without an explicit level, level and log file come from BEACON_* settings.
    """
    if level is None:
        settings = get_settings()
        level = settings.log_level
        log_file = log_file or settings.log_file

    logger = logging.getLogger("beacon")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Reconfiguring replaces handlers from a previous call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler with rich
    console_handler = RichHandler(
        rich_tracebacks=True,
        show_time=True,
        show_path=False,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the ``beacon`` namespace."""
    if not name.startswith("beacon"):
        name = f"beacon.{name}"
    return logging.getLogger(name)
