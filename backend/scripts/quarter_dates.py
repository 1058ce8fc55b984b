"""
quarter_dates.py — Print fiscal quarter start/end dates.

Usage:
    python scripts/quarter_dates.py                      # last 4 quarters up to today
    python scripts/quarter_dates.py --reference 2017 --count 12
    python scripts/quarter_dates.py --reference Q1FY18 --current
    python scripts/quarter_dates.py --reference 2016-04-25 --output-csv quarters.csv
"""

from __future__ import annotations

import argparse
import sys
from datetime import date

from reportkit.core.config import settings
from reportkit.core.errors import InvalidInput
from reportkit.core.logging import configure_logging
from reportkit.fiscal.calendar import quarter_history_frame, quarter_range


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Print fiscal quarter start and end dates"
    )
    parser.add_argument(
        "--reference",
        type=str,
        default=date.today().isoformat(),
        help="Date (YYYY-MM-DD), month (YYYY-MM), quarter label or fiscal year (default: today)",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=4,
        help="Number of quarters ending with the reference quarter (default: 4)",
    )
    parser.add_argument(
        "--current",
        action="store_true",
        help="Only print the start and end of the reference quarter",
    )
    parser.add_argument(
        "--output-csv",
        type=str,
        default=None,
        help="Write the quarter table to this CSV instead of printing it",
    )

    args = parser.parse_args()
    configure_logging(settings.LOG_LEVEL)

    try:
        if args.current:
            current = quarter_range(args.reference)
            print(f"{current.quarter_label_current} {current.start_date} {current.end_date}")
            return

        frame = quarter_history_frame(args.reference, args.count)
        if args.output_csv:
            frame.to_csv(args.output_csv, index=False)
            print(f"Wrote {len(frame)} quarters to {args.output_csv}")
        else:
            print(frame.to_string(index=False))

    except InvalidInput as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
