"""
files.py — File discovery helpers.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from reportkit.core.logging import get_logger

logger = get_logger(__name__)


def recent_file(directory: Union[str, Path], pattern: str) -> Path:
    """
    Find the most recently saved file whose name matches a pattern.

    Useful when historical versions of an export live side by side and only the
    latest should be read.

    Args:
        directory: Folder to search (not recursive)
        pattern: Regular expression searched in file names

    Returns:
        Path of the newest match. On equal modification times the file sorting
        last by name wins.

    Raises:
        FileNotFoundError: If the directory is missing or nothing matches
    """
    folder = Path(directory).expanduser()
    if not folder.is_dir():
        raise FileNotFoundError(f"Directory not found: {folder}")

    matcher = re.compile(pattern)
    candidates = sorted(p for p in folder.iterdir() if p.is_file() and matcher.search(p.name))
    if not candidates:
        raise FileNotFoundError(f"No files matching {pattern!r} in {folder}")

    # stable sort keeps name order among equal mtimes
    candidates.sort(key=lambda p: p.stat().st_mtime)
    latest = candidates[-1]
    logger.debug("Most recent of %d matches: %s", len(candidates), latest)
    return latest
