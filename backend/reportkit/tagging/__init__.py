"""
tagging — priority-ordered keyword classification of asset tables.

Rules are applied in order, the first match wins, and anything unmatched falls
into a default category.
"""

from reportkit.tagging.asset_rules import (
    ASSET_TYPE_ORDER,
    ASSET_TYPE_RULES,
    MONIKER_ORDER,
    MONIKER_RULES,
    add_asset_moniker,
    add_asset_type,
)
from reportkit.tagging.models import KeywordRule, MatchMode, RuleTally, TaggingResult
from reportkit.tagging.rule_based_tagger import check_required_fields, tag
from reportkit.tagging.sanity_checks import print_tagging_summary

__all__ = [
    "ASSET_TYPE_ORDER",
    "ASSET_TYPE_RULES",
    "MONIKER_ORDER",
    "MONIKER_RULES",
    "KeywordRule",
    "MatchMode",
    "RuleTally",
    "TaggingResult",
    "add_asset_moniker",
    "add_asset_type",
    "check_required_fields",
    "print_tagging_summary",
    "tag",
]
