"""
export_queries.py — Run a folder of SQL templates and dump each result to CSV.

Usage:
    python scripts/export_queries.py \
        --db-config ~/vdm.cfg \
        --sql-dir sql/ --prefix q_ \
        --var start=2017-03-01 --var end=2017-05-31 \
        --output-dir exports/

--var qtr=FY18Q1 also defines qtr_start / qtr_end from the fiscal calendar.
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List

from reportkit.core.config import settings
from reportkit.core.errors import ReportkitError
from reportkit.core.logging import configure_logging
from reportkit.db.connection import connect, load_db_config
from reportkit.db.scripts import read_scripts, run_scripts
from reportkit.export.csv_export import dfs_to_csv
from reportkit.fiscal.calendar import quarter_range


def parse_vars(pairs: List[str]) -> Dict[str, str]:
    """Turn ["a=1", "b=2"] into {"a": "1", "b": "2"}."""
    variables: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"--var expects name=value, got {pair!r}")
        variables[key.strip()] = value
    if "qtr" in variables:
        qtr = quarter_range(variables["qtr"])
        variables.setdefault("qtr_start", qtr.start_date.isoformat())
        variables.setdefault("qtr_end", qtr.end_date.isoformat())
    return variables


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run SQL templates and export each result to CSV"
    )
    parser.add_argument(
        "--db-config",
        type=str,
        default=None,
        help="Path to JSON database config (default: DB_CONFIG_PATH)",
    )
    parser.add_argument(
        "--sql-dir",
        type=str,
        required=True,
        help="Folder of SQL template files",
    )
    parser.add_argument(
        "--prefix",
        type=str,
        default="",
        help="Only run templates whose file name starts with this",
    )
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        help="Template variable as name=value (repeatable)",
    )
    parser.add_argument(
        "--pattern",
        type=str,
        default=".*",
        help="Only export results whose name matches this regex",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output folder (default: EXPORT_DIR)",
    )

    args = parser.parse_args()
    configure_logging(settings.LOG_LEVEL)

    try:
        scripts = read_scripts(args.sql_dir, parse_vars(args.var), prefix=args.prefix)
        config = load_db_config(args.db_config)
        conn = connect(config)
        try:
            results = run_scripts(conn, scripts)
        finally:
            conn.close()

        paths = dfs_to_csv(results, pattern=args.pattern, directory=args.output_dir)
        print(f"Exported {len(paths)} tables")

    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    except (ReportkitError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
