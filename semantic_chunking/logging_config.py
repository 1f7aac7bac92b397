"""
Logging for the chunking CLI and HTTP service.

Modules log through ``logging.getLogger(__name__)`` and so sit under the
``semantic_chunking`` logger; the scripts call ``setup_logging`` once.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "semantic_chunking"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """Attach stdout (and optionally file) handlers to the package logger."""
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    # Re-running replaces handlers instead of stacking them
    logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
