"""
csv_export.py — Bulk export of in-memory tables to timestamped CSV files.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import List, Mapping, Optional, Union

import pandas as pd

from reportkit.core.config import settings
from reportkit.core.logging import get_logger

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def dfs_to_csv(
    tables: Mapping[str, pd.DataFrame],
    pattern: str = ".*",
    directory: Optional[Union[str, Path]] = None,
    timestamp: Optional[datetime] = None,
) -> List[Path]:
    """
    Write every table whose name matches a pattern to its own CSV file.

    Files are named {name}_{YYYYmmdd_HHMMSS}.csv; all files of one call share
    the same timestamp. The index is not written.

    Args:
        tables: Mapping of name -> DataFrame (e.g. the output of run_scripts)
        pattern: Regular expression searched in each table name
        directory: Output folder, created if needed (defaults to settings.EXPORT_DIR)
        timestamp: Time stamped into file names (defaults to now)

    Returns:
        Paths written, in the order of `tables`
    """
    matcher = re.compile(pattern)
    folder = Path(directory if directory is not None else settings.EXPORT_DIR).expanduser()
    folder.mkdir(parents=True, exist_ok=True)
    stamp = (timestamp or datetime.now()).strftime(TIMESTAMP_FORMAT)

    written: List[Path] = []
    for name, frame in tables.items():
        if not matcher.search(name):
            continue
        path = folder / f"{name}_{stamp}.csv"
        frame.to_csv(path, index=False)
        logger.info("Wrote %d rows to %s", len(frame), path)
        written.append(path)

    if not written:
        logger.warning("No tables matched pattern %r", pattern)
    return written
