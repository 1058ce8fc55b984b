"""
asset_rules.py — Asset type and product moniker rule vocabularies.

Asset types mark entitlements as free, academic, partner, etc. so they can be
filtered out of customer counts or used to mark whole accounts. Monikers group
product lines into the brand architecture buckets.

Rule ORDER matters: an earlier rule claims a record before a later, more general
rule can mis-mark it (e.g. a partner evaluation is "partner", not "free").
"""

from __future__ import annotations

from typing import Collection, Optional, Union

import pandas as pd

from reportkit.tagging.models import KeywordRule, MatchMode
from reportkit.tagging.rule_based_tagger import Records, tag

# ============================================================================
# ASSET TYPE LABELS
# ============================================================================

FREE = "free"
ACADEMIC = "academic"
L3 = "L3"
EMPLOYEE = "employee"
SELF_SUPPORT = "self-support"
DEV_SUITE = "dev suite"
PARTNER = "partner"
CUSTOMER = "customer"

# Rank order used for asset_type_num (1 = free ... 8 = customer)
ASSET_TYPE_ORDER = (FREE, ACADEMIC, L3, EMPLOYEE, SELF_SUPPORT, DEV_SUITE, PARTNER, CUSTOMER)

ASSET_REQUIRED_FIELDS = ("startdate", "enddate")

# ============================================================================
# ASSET TYPE RULES (priority order)
# ============================================================================

ASSET_TYPE_RULES = (
    # dev suite entitlements are definitely this type
    KeywordRule(DEV_SUITE, "description", ("red hat enterprise linux developer suite",), MatchMode.REGEX),
    # employee evals and employee RHUI before they read as free/partner
    KeywordRule(EMPLOYEE, "description", ("employee",), MatchMode.REGEX),
    # partner L3 / unsupported / evals
    KeywordRule(
        PARTNER,
        "description",
        (" nfr", r"\(nfr", "ccp", "rhui", "partner", "provider", "update infrastructure"),
        MatchMode.REGEX,
    ),
    # non-partner L3 before self-support
    KeywordRule(L3, "description", ("l3",), MatchMode.REGEX),
    # academic before self-support
    KeywordRule(ACADEMIC, "description", ("academic", "caudit"), MatchMode.REGEX),
    KeywordRule(SELF_SUPPORT, "description", ("self",), MatchMode.REGEX),
    KeywordRule(SELF_SUPPORT, "product_support_type", ("self-support",), MatchMode.REGEX),
    # whatever free offering remains
    KeywordRule(
        FREE,
        "description",
        ("beta", "day", "eval", "preview", "unsupported", "download and kbase only", "free", "6.?month"),
        MatchMode.REGEX,
    ),
)

# ============================================================================
# PRODUCT MONIKERS
# ============================================================================

EMERGING = "Emerging"
MIDDLEWARE = "Middleware"
PLATFORM = "Platform"
OTHER = "Other"
UNASSIGNED = "Unassigned"

MONIKER_ORDER = (EMERGING, MIDDLEWARE, PLATFORM, OTHER, UNASSIGNED)

MONIKER_RULES = (
    KeywordRule(
        EMERGING,
        "product_group_detail",
        (
            "ANSIBLE", "AUTOMATION", "CLOUDFORMS", "INTEGRATION", "MOBILE",
            "OPENSHIFT", "RHCI", "RHEL - OSP", "RHT STORAGE",
        ),
        MatchMode.EXACT,
    ),
    KeywordRule(MIDDLEWARE, "product_group_detail", ("ACCELERATION",), MatchMode.EXACT),
    KeywordRule(
        PLATFORM,
        "product_group_detail",
        (
            "DIRECTORY & CERTIFICATE", "RHEL", "RHEL WITH SMART VIRTUALIZATION",
            "RHEV", "SATELLITE/SMART MGMT/INSIGHTS",
        ),
        MatchMode.EXACT,
    ),
    KeywordRule(
        OTHER,
        "product_group_detail",
        (
            "TRAINING (CLOUD)", "TRAINING (MIDDLEWARE)", "TRAINING (OPENSHIFT)",
            "TRAINING (PLATFORM)", "TRAINING (STORAGE)",
        ),
        MatchMode.EXACT,
    ),
)


def add_asset_type(assets: Records, filter: Optional[Union[str, Collection[str]]] = None) -> pd.DataFrame:
    """
    Mark each asset with an asset type.

    Args:
        assets: Asset table with description, product_support_type, startdate
            and enddate columns. Rows missing startdate or enddate are dropped.
        filter: Asset type, or types, to remove from the result (e.g. "free" or {"free", "L3"})

    Returns:
        Asset table with asset_type and asset_type_num columns added
    """
    result = tag(
        assets,
        ASSET_TYPE_RULES,
        default_category=CUSTOMER,
        category_order=ASSET_TYPE_ORDER,
        filter=filter,
        required_fields=ASSET_REQUIRED_FIELDS,
        label_column="asset_type",
        rank_column="asset_type_num",
    )
    return result.records


def add_asset_moniker(assets: Records, filter: Optional[Union[str, Collection[str]]] = None) -> pd.DataFrame:
    """
    Mark each asset with its product moniker.

    Args:
        assets: Asset table with a product_group_detail column
        filter: Monikers to remove from the result (e.g. {"Other"})

    Returns:
        Asset table with product_moniker and product_moniker_num columns added;
        product groups outside the brand architecture are "Unassigned"
    """
    result = tag(
        assets,
        MONIKER_RULES,
        default_category=UNASSIGNED,
        category_order=MONIKER_ORDER,
        filter=filter,
        label_column="product_moniker",
        rank_column="product_moniker_num",
    )
    return result.records
