"""Logging setup.

Console output goes through rich; an optional rotating log file keeps a
plain-text history of saves, alerts and exports.
"""

import logging
import logging.handlers
from typing import Optional

from rich.logging import RichHandler

from .config import Settings, get_settings

FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


def setup_logging(settings: Optional[Settings] = None, verbose: bool = False) -> None:
    """Configure the root logger for the CLI and web app."""
    settings = settings or get_settings()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    level_name = "DEBUG" if verbose else settings.log_level.upper()
    log_level = getattr(logging, level_name, logging.INFO)
    root_logger.setLevel(log_level)

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root_logger.addHandler(console_handler)

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=settings.log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)

    # Quiet third-party noise
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    root_logger.debug("Logging initialized: level=%s, file=%s", level_name, settings.log_file)
