"""
fiscal — fiscal quarter arithmetic and labelling.
"""

from reportkit.fiscal.calendar import (
    FISCAL_MONTH_OFFSET,
    fiscal_year_end,
    fiscal_year_start,
    format_quarter,
    next_quarter,
    parse_quarter,
    previous_quarter,
    quarter_end,
    quarter_for,
    quarter_history,
    quarter_history_frame,
    quarter_label,
    quarter_labels,
    quarter_range,
    quarter_start,
    to_fiscal_quarter,
    trailing_year_bounds,
)
from reportkit.fiscal.models import MAX_FISCAL_YEAR, MIN_FISCAL_YEAR, FiscalQuarter, QuarterRange

__all__ = [
    "FISCAL_MONTH_OFFSET",
    "FiscalQuarter",
    "MAX_FISCAL_YEAR",
    "MIN_FISCAL_YEAR",
    "QuarterRange",
    "fiscal_year_end",
    "fiscal_year_start",
    "format_quarter",
    "next_quarter",
    "parse_quarter",
    "previous_quarter",
    "quarter_end",
    "quarter_for",
    "quarter_history",
    "quarter_history_frame",
    "quarter_label",
    "quarter_labels",
    "quarter_range",
    "quarter_start",
    "to_fiscal_quarter",
    "trailing_year_bounds",
]
