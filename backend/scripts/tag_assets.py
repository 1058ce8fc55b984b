"""
tag_assets.py — Apply asset type and product moniker tagging to an asset CSV.

Usage:
    python scripts/tag_assets.py \
        --input-csv assets.csv \
        --output-csv assets_tagged.csv \
        --exclude free L3 --monikers --summary
"""

from __future__ import annotations

import argparse
import sys

import pandas as pd

from reportkit.core.config import settings
from reportkit.core.errors import ReportkitError
from reportkit.core.logging import configure_logging
from reportkit.tagging.asset_rules import (
    ASSET_REQUIRED_FIELDS,
    ASSET_TYPE_ORDER,
    ASSET_TYPE_RULES,
    CUSTOMER,
    add_asset_moniker,
)
from reportkit.tagging.rule_based_tagger import tag
from reportkit.tagging.sanity_checks import print_tagging_summary


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Tag assets by type (and optionally product moniker)"
    )
    parser.add_argument(
        "--input-csv",
        type=str,
        required=True,
        help="Path to input asset CSV",
    )
    parser.add_argument(
        "--output-csv",
        type=str,
        required=True,
        help="Path to output tagged asset CSV",
    )
    parser.add_argument(
        "--exclude",
        nargs="*",
        default=None,
        help=f"Asset types to drop from the output ({', '.join(ASSET_TYPE_ORDER)})",
    )
    parser.add_argument(
        "--monikers",
        action="store_true",
        help="Also add product_moniker from product_group_detail",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the per-rule tally",
    )

    args = parser.parse_args()
    configure_logging(settings.LOG_LEVEL)

    try:
        assets = pd.read_csv(args.input_csv)
        result = tag(
            assets,
            ASSET_TYPE_RULES,
            default_category=CUSTOMER,
            category_order=ASSET_TYPE_ORDER,
            filter=args.exclude,
            required_fields=ASSET_REQUIRED_FIELDS,
            label_column="asset_type",
            rank_column="asset_type_num",
        )
        print_tagging_summary(result, verbose=args.summary)

        tagged = result.records
        if args.monikers:
            tagged = add_asset_moniker(tagged)

        tagged.to_csv(args.output_csv, index=False)
        print(f"Tagged {len(tagged)} assets and wrote to {args.output_csv}")

    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    except ReportkitError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
