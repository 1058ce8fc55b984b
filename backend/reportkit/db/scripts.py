"""
scripts.py — SQL script loading, templating and execution.

A directory holds one query per file, e.g.

    sql/
        q_open_cases.sql
        q_closed_cases.sql

read_scripts("sql", {"start": "2017-03-01"}, prefix="q_") returns
{"open_cases": "...", "closed_cases": "..."} with every ${start} filled in.
run_scripts(conn, scripts) runs each query and returns {name: DataFrame}.

Results travel as explicit mappings; nothing is injected into module or global state.
"""

from __future__ import annotations

import string
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import pandas as pd

from reportkit.core.config import settings
from reportkit.core.errors import TemplateVariableError
from reportkit.core.logging import get_logger

logger = get_logger(__name__)


class SqlTemplate(string.Template):
    """
    Template that only substitutes ${name} placeholders.

    Bare $ signs ($1 parameters, $$-quoted function bodies) pass through untouched.
    """
    pattern = r"""
    \$(?:
      (?P<escaped>(?!))                 |
      (?P<named>(?!))                   |
      \{(?P<braced>[_a-z][_a-z0-9]*)\}  |
      (?P<invalid>(?!))
    )
    """


def _script_name(filename: str, prefix: str, suffix: str) -> str:
    name = filename[len(prefix):]
    if suffix:
        name = name[: -len(suffix)]
    return name


def read_scripts(
    directory: Union[str, Path],
    variables: Optional[Mapping[str, Any]] = None,
    prefix: str = "",
    suffix: Optional[str] = None,
) -> Dict[str, str]:
    """
    Load and fill in every SQL template in a directory.

    Args:
        directory: Folder containing the templates
        variables: Values for ${name} placeholders
        prefix: Only files starting with this are read; stripped from the name
        suffix: Only files ending with this are read; stripped from the name
            (defaults to settings.SQL_SCRIPT_SUFFIX)

    Returns:
        Mapping of derived name -> query text, in file name order

    Raises:
        FileNotFoundError: If the directory does not exist
        TemplateVariableError: If a template uses a variable with no value
    """
    if suffix is None:
        suffix = settings.SQL_SCRIPT_SUFFIX
    variables = dict(variables or {})

    folder = Path(directory).expanduser()
    if not folder.is_dir():
        raise FileNotFoundError(f"SQL script directory not found: {folder}")

    paths = sorted(
        p for p in folder.iterdir()
        if p.is_file() and p.name.startswith(prefix) and p.name.endswith(suffix)
    )
    if not paths:
        logger.warning("No SQL scripts matching %s*%s in %s", prefix, suffix, folder)

    scripts: Dict[str, str] = {}
    for path in paths:
        template = SqlTemplate(path.read_text(encoding="utf-8"))
        try:
            query = template.substitute(variables)
        except KeyError as e:
            raise TemplateVariableError(path.name, e.args[0]) from None
        scripts[_script_name(path.name, prefix, suffix)] = query

    logger.info("Loaded %d SQL scripts from %s", len(scripts), folder)
    return scripts


def run_scripts(connection: Any, scripts: Mapping[str, str]) -> Dict[str, pd.DataFrame]:
    """
    Run each named query and collect the results.

    Args:
        connection: SQLAlchemy Connection/Engine or DB-API connection
        scripts: Mapping of name -> query text (e.g. from read_scripts)

    Returns:
        Mapping of name -> result DataFrame, in the order of `scripts`

    Driver errors are not caught; the first failing query stops the run.
    """
    results: Dict[str, pd.DataFrame] = {}
    for name, query in scripts.items():
        logger.info("Running query %s", name)
        frame = pd.read_sql(query, connection)
        logger.info("Query %s returned %d rows", name, len(frame))
        results[name] = frame
    return results
