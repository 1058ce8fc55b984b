"""
Tests for the asset type and product moniker vocabularies.

Tests verify that:
1. Each asset type rule claims the descriptions it is written for
2. Earlier asset type rules take precedence over later, more general ones
3. Assets without start or end dates are dropped, not tagged
4. Product groups map to monikers exactly (case-insensitive), with Unassigned as fallback
"""

from __future__ import annotations

import pandas as pd
import pytest

from reportkit.tagging.asset_rules import (
    ASSET_TYPE_ORDER,
    ASSET_TYPE_RULES,
    MONIKER_ORDER,
    add_asset_moniker,
    add_asset_type,
)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def assets():
    rows = [
        ("Red Hat Enterprise Linux Developer Suite", "Standard"),
        ("RHUI Employee Subscription", "Standard"),
        ("Partner Evaluation", "Standard"),
        ("RHEL L3 Support", "Standard"),
        ("Academic Site Subscription", "Standard"),
        ("RHEL Self-Support", "Standard"),
        ("RHEL Server Standard", "Self-Support"),
        ("RHEL 60 Day Evaluation", "Standard"),
        ("RHEL Server Premium", "Premium"),
    ]
    return pd.DataFrame({
        "description": [d for d, _ in rows],
        "product_support_type": [s for _, s in rows],
        "startdate": ["2016-03-01"] * len(rows),
        "enddate": ["2017-02-28"] * len(rows),
    })


# ============================================================================
# Test: Asset types
# ============================================================================

def test_asset_types(assets):
    tagged = add_asset_type(assets)
    assert tagged["asset_type"].tolist() == [
        "dev suite",
        "employee",
        "partner",
        "L3",
        "academic",
        "self-support",
        "self-support",
        "free",
        "customer",
    ]
    assert tagged["asset_type_num"].tolist() == [6, 4, 7, 3, 2, 5, 5, 1, 8]


def test_partner_evaluation_is_not_free(assets):
    """The partner rule runs before the free rule."""
    tagged = add_asset_type(assets)
    assert tagged.loc[2, "asset_type"] == "partner"


def test_asset_type_filter(assets):
    tagged = add_asset_type(assets, filter={"free", "L3"})
    assert len(tagged) == len(assets) - 2
    assert not tagged["asset_type"].isin({"free", "L3"}).any()


def test_asset_type_filter_single_name(assets):
    tagged = add_asset_type(assets, filter="free")
    assert "free" not in tagged["asset_type"].tolist()
    assert len(tagged) == len(assets) - 1


def test_assets_without_dates_are_dropped(assets):
    assets.loc[0, "startdate"] = None
    assets.loc[8, "enddate"] = None
    tagged = add_asset_type(assets)
    assert len(tagged) == len(assets) - 2
    assert 0 not in tagged.index
    assert 8 not in tagged.index


def test_asset_type_vocabulary_is_ranked():
    """Every rule category has a rank, and the default ranks last."""
    assert {rule.category for rule in ASSET_TYPE_RULES} <= set(ASSET_TYPE_ORDER)
    assert ASSET_TYPE_ORDER[-1] == "customer"


# ============================================================================
# Test: Product monikers
# ============================================================================

def test_product_monikers():
    assets = pd.DataFrame({
        "product_group_detail": [
            "OPENSHIFT",
            "rhel",
            "ACCELERATION",
            "TRAINING (CLOUD)",
            "RHEL WITH SMART VIRTUALIZATION",
            "SOMETHING ELSE",
            None,
        ],
    })
    tagged = add_asset_moniker(assets)
    assert tagged["product_moniker"].tolist() == [
        "Emerging",
        "Platform",
        "Middleware",
        "Other",
        "Platform",
        "Unassigned",
        "Unassigned",
    ]
    assert tagged["product_moniker_num"].tolist() == [1, 3, 2, 4, 3, 5, 5]


def test_moniker_match_is_whole_value():
    """'RHEL - OSP' is Emerging even though it starts with a Platform name."""
    tagged = add_asset_moniker(pd.DataFrame({"product_group_detail": ["RHEL - OSP", "RHEL SERVER"]}))
    assert tagged["product_moniker"].tolist() == ["Emerging", "Unassigned"]


def test_moniker_filter():
    assets = pd.DataFrame({"product_group_detail": ["OPENSHIFT", "TRAINING (STORAGE)"]})
    tagged = add_asset_moniker(assets, filter=["Other"])
    assert tagged["product_moniker"].tolist() == ["Emerging"]
    assert MONIKER_ORDER[-1] == "Unassigned"
