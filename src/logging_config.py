"""Logging setup shared by the API and scripts."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger with a single stream handler.

    Safe to call more than once: an existing handler is reused and only
    the level is updated.

    Args:
        level: Level name such as "DEBUG". Defaults to settings.log_level.

    Returns:
        The configured root logger
    """
    if level is None:
        from src.config import settings
        level = settings.log_level

    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_family_tree_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._family_tree_handler = True
        root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return root
