"""
logging.py — Logging setup for reportkit scripts.

reportkit modules never install handlers; they only ask for a named logger.
Handler and format setup belongs to whoever runs the code, which in this repo
means the CLI scripts in backend/scripts/. Notebooks and other callers may
configure logging their own way, or call configure_logging() too.

Format:
    timestamp | level | module | message

What goes where:
- INFO: one line per tagging pass, query run, file written
- DEBUG: per-rule tally, resolved config paths, unknown color names
- WARNING: records dropped for missing required fields, empty selections
"""

import logging
from typing import Optional

from reportkit.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install the root handler for a script run.

    Parameters:
        level (str): "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL";
            defaults to settings.LOG_LEVEL. Unknown names fall back to INFO.

    Call once, first thing in a script's main().
    """
    level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).debug("Logging configured at %s", level)


def get_logger(name: str) -> logging.Logger:
    """Named logger for a reportkit module; pass __name__."""
    return logging.getLogger(name)
