"""
Tests for brand color lookup and swatch rendering.
"""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from reportkit.branding.colors import BRAND_COLORS, brand_colors, show_brand_colors  # noqa: E402


# ============================================================================
# Test: Lookup
# ============================================================================

def test_exact_lookup():
    assert brand_colors("Purple") == ["#3B0083"]
    assert brand_colors(["Storage 2", "Gray 3"]) == ["#B58100", "#DCDCDC"]


def test_exact_lookup_ignores_case():
    assert brand_colors("red hat red") == ["#CC0000"]


def test_unknown_name_is_none():
    assert brand_colors(["Purple", "Chartreuse"]) == ["#3B0083", None]


def test_partial_lookup():
    assert brand_colors("storage", mode="partial") == {
        "Storage 1": "#F0AB00",
        "Storage 2": "#B58100",
    }
    both = brand_colors(["storage", "cloud"], mode="partial")
    assert set(both) == {"Storage 1", "Storage 2", "Cloud 1", "Cloud 2"}
    assert brand_colors("chartreuse", mode="partial") == {}


def test_exclude_lookup():
    rest = brand_colors(["Black", "white"], mode="exclude")
    assert len(rest) == len(BRAND_COLORS) - 2
    assert "Black" not in rest
    assert "White" not in rest


def test_full_palette_is_a_copy():
    palette = brand_colors()
    palette["Purple"] = "#000000"
    assert BRAND_COLORS["Purple"] == "#3B0083"


def test_unknown_mode():
    with pytest.raises(ValueError):
        brand_colors("Purple", mode="fuzzy")


# ============================================================================
# Test: Swatches
# ============================================================================

def test_show_full_palette():
    fig = show_brand_colors()
    ax = fig.axes[0]
    assert len(ax.patches) == len(BRAND_COLORS)
    assert len(ax.texts) == len(BRAND_COLORS)
    plt.close(fig)


def test_show_selected_colors_on_given_axes():
    fig, ax = plt.subplots()
    result = show_brand_colors(brand_colors(["storage", "cloud"], mode="partial"), ax=ax)
    assert result is fig
    assert len(ax.patches) == 4
    assert ax.texts[0].get_text() == "Cloud\n1"
    plt.close(fig)
