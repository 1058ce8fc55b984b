"""
colors.py — Brand color palette lookup and swatch rendering.

Purpose:
- Keep the brand palette (name -> hex) in one place for charts and reports.
- Look colors up by exact name, by name fragment, or everything except some names.
- Render the palette as a labelled swatch grid.

Unknown names never raise: exact lookups return None in their place.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Union

import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from reportkit.core.logging import get_logger

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# Palette (display order)
# -----------------------------------------------------------------------------

BRAND_COLORS: Dict[str, str] = {
    "Red Hat Red": "#CC0000",
    "Red Hat Red Dark": "#A30000",
    "Red Hat Red Light": "#EE0000",
    "Gray 1": "#F0F0F0",
    "Gray 2": "#E7E7E7",
    "Gray 3": "#DCDCDC",
    "Gray 4": "#D1D1D1",
    "Gray 5": "#BEBEBE",
    "Gray 6": "#A3A3A3",
    "Gray 7": "#8C8C8C",
    "Gray 8": "#646464",
    "Gray 9": "#4C4C4C",
    "Gray 10": "#252525",
    "Black": "#000000",
    "White": "#FFFFFF",
    "Purple": "#3B0083",
    "Purple Light": "#7551A6",
    "Teal": "#004153",
    "Teal Light": "#3A8CA1",
    "Blue": "#0088CE",
    "Blue Light": "#7DC3E8",
    "Green": "#3F9C35",
    "Green Light": "#92D400",
    "Orange": "#EC7A08",
    "Gold": "#F0AB00",
    "Platform 1": "#CC0000",
    "Platform 2": "#820000",
    "Middleware 1": "#0088CE",
    "Middleware 2": "#004368",
    "Cloud 1": "#3B0083",
    "Cloud 2": "#1F0044",
    "Storage 1": "#F0AB00",
    "Storage 2": "#B58100",
    "Mobile 1": "#92D400",
    "Mobile 2": "#3F9C35",
}

LOOKUP_MODES = ("exact", "partial", "exclude")


def _as_list(names: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


def brand_colors(
    names: Optional[Union[str, Iterable[str]]] = None,
    mode: str = "exact",
) -> Union[List[Optional[str]], Dict[str, str]]:
    """
    Look up brand colors. Name comparisons ignore case.

    Args:
        names: One color name or several; None returns the whole palette
        mode:
            "exact"   -> list of hex codes aligned with `names`, None for unknown names
            "partial" -> {name: hex} for palette names containing any given fragment
            "exclude" -> {name: hex} for every palette color not named

    Returns:
        List (exact) or dict (partial, exclude, names=None)

    Example:
        brand_colors("Purple")                          # ["#3B0083"]
        brand_colors(["Storage 2", "Gray 3"])           # ["#B58100", "#DCDCDC"]
        brand_colors(["storage", "cloud"], "partial")   # {"Cloud 1": ..., "Storage 1": ...}
    """
    if mode not in LOOKUP_MODES:
        raise ValueError(f"mode must be one of {LOOKUP_MODES}, got {mode!r}")

    if names is None:
        return dict(BRAND_COLORS)

    wanted = _as_list(names)
    by_lower = {name.lower(): hex_code for name, hex_code in BRAND_COLORS.items()}

    if mode == "exact":
        found = [by_lower.get(str(name).lower()) for name in wanted]
        missing = [name for name, hex_code in zip(wanted, found) if hex_code is None]
        if missing:
            logger.debug("Unknown brand colors: %s", missing)
        return found

    fragments = [str(name).lower() for name in wanted]
    if mode == "partial":
        return {
            name: hex_code for name, hex_code in BRAND_COLORS.items()
            if any(fragment in name.lower() for fragment in fragments)
        }

    return {
        name: hex_code for name, hex_code in BRAND_COLORS.items()
        if name.lower() not in fragments
    }


def _label_color(hex_code: str) -> str:
    """Black or white, whichever reads better on the swatch."""
    r, g, b = to_rgb(hex_code)
    return "black" if (0.299 * r + 0.587 * g + 0.114 * b) > 0.5 else "white"


def show_brand_colors(colors: Optional[Dict[str, str]] = None, ax=None) -> Figure:
    """
    Draw a near-square grid of labelled color swatches.

    Args:
        colors: {name: hex} to draw; defaults to the whole palette
        ax: Matplotlib Axes to draw into; a new figure is created if None

    Returns:
        The matplotlib Figure containing the swatches
    """
    colors = dict(BRAND_COLORS if colors is None else colors)
    n = len(colors)
    ncol = max(1, math.ceil(math.sqrt(n)))
    nrow = max(1, math.ceil(n / ncol))

    if ax is None:
        fig, ax = plt.subplots(figsize=(ncol * 1.5, nrow * 1.5))
    else:
        fig = ax.figure

    for i, (name, hex_code) in enumerate(colors.items()):
        row, col = divmod(i, ncol)
        ax.add_patch(Rectangle((col, -row - 1), 1, 1, facecolor=hex_code, edgecolor="#FFFFFF"))
        ax.text(
            col + 0.5, -row - 0.5, name.replace(" ", "\n"),
            ha="center", va="center", fontsize=7, color=_label_color(hex_code),
        )

    size = max(nrow, ncol)
    ax.set_xlim(0, size)
    ax.set_ylim(-size, 0)
    ax.set_aspect("equal")
    ax.axis("off")
    return fig
