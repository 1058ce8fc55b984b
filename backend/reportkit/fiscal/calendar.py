"""
calendar.py — Fiscal calendar conversions.

The fiscal year runs March-February. Fiscal quarters line up with calendar
quarters once a date is shifted forward by FISCAL_MONTH_OFFSET months:

- Q1: March-May        (shifted: January-March)
- Q2: June-August      (shifted: April-June)
- Q3: September-November
- Q4: December-February

The calendar year of the shifted date is the fiscal year, so FY17 runs from
2016-03-01 to 2017-02-28.

Quarters are written either as FY17Q1 (current) or Q1FY17 (legacy).
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from reportkit.core.errors import InvalidFormat, InvalidInput
from reportkit.core.logging import get_logger
from reportkit.fiscal.models import FiscalQuarter, QuarterRange

logger = get_logger(__name__)

# Months added to a calendar date to align fiscal quarters with calendar quarters.
# Derived from the historical reporting arithmetic; confirm against the official
# fiscal calendar before relying on boundary dates in production.
FISCAL_MONTH_OFFSET = 10

Reference = Union[date, datetime, pd.Timestamp, pd.Period, FiscalQuarter, str, int]

EXPECTED_REFERENCE_SHAPES = (
    "date / datetime / pandas.Timestamp",
    "pandas.Period or 'YYYY-MM' month",
    "'YYYY-MM-DD' date string",
    "quarter label 'FY17Q1' or 'Q1FY17'",
    "four-digit fiscal year like '2017'",
)
EXPECTED_LABEL_SHAPES = ("FY{yy}Q{q} (e.g. FY17Q1)", "Q{q}FY{yy} (e.g. Q1FY17)")

_CURRENT_LABEL_RE = re.compile(r"^FY(\d{2})Q([1-4])$", re.IGNORECASE)
_LEGACY_LABEL_RE = re.compile(r"^Q([1-4])FY(\d{2})$", re.IGNORECASE)
_BARE_YEAR_RE = re.compile(r"^\d{4}$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


# =============================================================================
# Internal helpers
# =============================================================================

def _month_index(year: int, month: int) -> int:
    """Months since year 0; month is 1-12."""
    return year * 12 + (month - 1)


def _from_month_index(index: int) -> date:
    year, month0 = divmod(index, 12)
    return date(year, month0 + 1, 1)


def _expand_two_digit_year(yy: str) -> int:
    # Same pivot as strptime("%y"): 00-68 -> 20xx, 69-99 -> 19xx
    value = int(yy)
    return 2000 + value if value < 69 else 1900 + value


def _require_date(value) -> date:
    if value is None or not isinstance(value, date) or pd.isna(value):
        raise InvalidInput(value, EXPECTED_REFERENCE_SHAPES[:1])
    return value


def _range_for(q: FiscalQuarter) -> QuarterRange:
    return QuarterRange(fiscal_quarter=q, start_date=quarter_start(q), end_date=quarter_end(q))


# =============================================================================
# Conversions
# =============================================================================

def to_fiscal_quarter(d: date) -> FiscalQuarter:
    """
    Get the fiscal quarter containing a calendar date.

    The date's month is shifted forward by FISCAL_MONTH_OFFSET and truncated to
    its calendar quarter; the shifted year and quarter are the fiscal ones. The
    first day of a fiscal quarter belongs to the quarter it starts.

    Args:
        d: date, datetime or pandas.Timestamp

    Returns:
        FiscalQuarter containing d

    Raises:
        InvalidInput: If d is not a date (or is NaT), or falls outside fiscal
            years MIN_FISCAL_YEAR-MAX_FISCAL_YEAR (before 0001-03-01 or after 9999-02-28)
    """
    d = _require_date(d)
    year, month0 = divmod(_month_index(d.year, d.month) + FISCAL_MONTH_OFFSET, 12)
    return FiscalQuarter(fiscal_year=year, quarter=month0 // 3 + 1)


def quarter_start(q: FiscalQuarter) -> date:
    """First calendar day of a fiscal quarter."""
    shifted_start = _month_index(q.fiscal_year, (q.quarter - 1) * 3 + 1)
    return _from_month_index(shifted_start - FISCAL_MONTH_OFFSET)


def quarter_end(q: FiscalQuarter) -> date:
    """Last calendar day of a fiscal quarter (next quarter's start minus one day)."""
    shifted_next = _month_index(q.fiscal_year, (q.quarter - 1) * 3 + 1) + 3
    return _from_month_index(shifted_next - FISCAL_MONTH_OFFSET) - timedelta(days=1)


def previous_quarter(q: FiscalQuarter) -> FiscalQuarter:
    """Quarter immediately before q; Q1 rolls back to Q4 of the prior fiscal year."""
    if q.quarter == 1:
        return FiscalQuarter(q.fiscal_year - 1, 4)
    return FiscalQuarter(q.fiscal_year, q.quarter - 1)


def next_quarter(q: FiscalQuarter) -> FiscalQuarter:
    if q.quarter == 4:
        return FiscalQuarter(q.fiscal_year + 1, 1)
    return FiscalQuarter(q.fiscal_year, q.quarter + 1)


# =============================================================================
# Labels
# =============================================================================

def format_quarter(q: FiscalQuarter, legacy: bool = False) -> str:
    """
    Render a fiscal quarter as text.

    Args:
        q: Fiscal quarter
        legacy: If True use the old Q{q}FY{yy} form, otherwise FY{yy}Q{q}

    Returns:
        e.g. "FY17Q1" or "Q1FY17"
    """
    return q.legacy_label if legacy else q.label


def parse_quarter(label: str) -> FiscalQuarter:
    """
    Parse a quarter label in either the current or the legacy format.

    Args:
        label: "FY17Q1" or "Q1FY17" (case-insensitive, surrounding whitespace ignored)

    Returns:
        FiscalQuarter

    Raises:
        InvalidFormat: If the label matches neither format (an InvalidInput)
    """
    if not isinstance(label, str):
        raise InvalidFormat(label, EXPECTED_LABEL_SHAPES)
    text = label.strip()

    match = _CURRENT_LABEL_RE.match(text)
    if match:
        return FiscalQuarter(_expand_two_digit_year(match.group(1)), int(match.group(2)))

    match = _LEGACY_LABEL_RE.match(text)
    if match:
        return FiscalQuarter(_expand_two_digit_year(match.group(2)), int(match.group(1)))

    raise InvalidFormat(label, EXPECTED_LABEL_SHAPES)


def _parse_reference_string(text: str) -> FiscalQuarter:
    value = text.strip()

    # A bare year is a fiscal year, never a day count or date fragment
    if _BARE_YEAR_RE.match(value):
        return FiscalQuarter(int(value), 1)

    if _CURRENT_LABEL_RE.match(value) or _LEGACY_LABEL_RE.match(value):
        return parse_quarter(value)

    if _ISO_DATE_RE.match(value):
        try:
            return to_fiscal_quarter(date.fromisoformat(value))
        except ValueError:
            raise InvalidInput(text, EXPECTED_REFERENCE_SHAPES) from None

    match = _YEAR_MONTH_RE.match(value)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise InvalidInput(text, EXPECTED_REFERENCE_SHAPES)
        return to_fiscal_quarter(date(year, month, 1))

    raise InvalidInput(text, EXPECTED_REFERENCE_SHAPES)


def quarter_for(reference: Reference) -> FiscalQuarter:
    """
    Normalize any accepted reference value to a fiscal quarter.

    Accepted references:
    - date, datetime or pandas.Timestamp
    - a month: pandas.Period (any frequency, its start is used) or "YYYY-MM"
    - an ISO date string "YYYY-MM-DD"
    - a quarter label, "FY17Q1" or "Q1FY17"
    - a four-digit fiscal year, "2017" or 2017, meaning that year's Q1
    - a FiscalQuarter (returned unchanged)

    Raises:
        InvalidInput: For anything else, naming the accepted shapes
    """
    if isinstance(reference, FiscalQuarter):
        return reference
    if isinstance(reference, pd.Period):
        return to_fiscal_quarter(reference.start_time.date())
    if isinstance(reference, date):
        return to_fiscal_quarter(reference)
    if isinstance(reference, str):
        return _parse_reference_string(reference)
    if isinstance(reference, int) and not isinstance(reference, bool) and 1000 <= reference <= 9999:
        return FiscalQuarter(reference, 1)

    raise InvalidInput(reference, EXPECTED_REFERENCE_SHAPES)


def quarter_label(
    reference: Optional[Reference] = None,
    previous: bool = False,
    legacy: bool = False,
) -> str:
    """
    Label the fiscal quarter of a reference value.

    Args:
        reference: Any value accepted by quarter_for(); None means today
        previous: Label the quarter before the reference's quarter instead
        legacy: Use the Q{q}FY{yy} form

    Returns:
        Quarter label string

    Example:
        quarter_label("2016-04-25")                 # "FY17Q1"
        quarter_label("2016-04-25", previous=True)  # "FY16Q4"
    """
    q = quarter_for(date.today() if reference is None else reference)
    if previous:
        q = previous_quarter(q)
    return format_quarter(q, legacy=legacy)


def quarter_labels(
    values: Iterable,
    previous: bool = False,
    legacy: bool = False,
) -> pd.Series:
    """
    Label every value of a column; missing values stay missing.

    Args:
        values: pandas Series or any iterable of accepted references

    Returns:
        Series of labels (object dtype), same index as the input Series
    """
    series = values if isinstance(values, pd.Series) else pd.Series(list(values), dtype=object)

    def _label(value):
        if value is None or (not isinstance(value, (str, pd.Period)) and pd.isna(value)):
            return None
        return quarter_label(value, previous=previous, legacy=legacy)

    return series.map(_label).astype(object)


# =============================================================================
# Ranges
# =============================================================================

def quarter_range(reference: Reference) -> QuarterRange:
    """Start date, end date and labels of the quarter containing the reference."""
    return _range_for(quarter_for(reference))


def quarter_history(reference: Reference, count: int = 4) -> List[QuarterRange]:
    """
    Build a table of consecutive fiscal quarters.

    Args:
        reference: Any value accepted by quarter_for()
        count: Number of quarters, including the reference's own quarter

    Returns:
        `count` QuarterRange objects ending with the reference's quarter,
        oldest first. Ranges are contiguous and non-overlapping.

    Raises:
        InvalidInput: If count is not a positive integer or reference is malformed
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidInput(count, ["positive integer count"])

    quarters = [quarter_for(reference)]
    for _ in range(count - 1):
        quarters.append(previous_quarter(quarters[-1]))

    logger.debug("Built %d quarter ranges ending %s", count, quarters[0].label)
    return [_range_for(q) for q in reversed(quarters)]


def quarter_history_frame(reference: Reference, count: int = 4) -> pd.DataFrame:
    """
    quarter_history() as a DataFrame.

    Columns: qtr_start, qtr_end (datetime64), qtr_name (FY17Q1), old_qtr_name (Q1FY17)
    """
    rows = [r.to_dict() for r in quarter_history(reference, count)]
    frame = pd.DataFrame(rows, columns=["qtr_start", "qtr_end", "qtr_name", "old_qtr_name"])
    frame["qtr_start"] = pd.to_datetime(frame["qtr_start"])
    frame["qtr_end"] = pd.to_datetime(frame["qtr_end"])
    return frame


def fiscal_year_start(fiscal_year: int) -> date:
    """First day of a fiscal year (FY17 -> 2016-03-01)."""
    return quarter_start(FiscalQuarter(fiscal_year, 1))


def fiscal_year_end(fiscal_year: int) -> date:
    """Last day of a fiscal year (FY17 -> 2017-02-28)."""
    return quarter_end(FiscalQuarter(fiscal_year, 4))


def trailing_year_bounds(reference: Reference) -> Tuple[date, date]:
    """
    Bounds of the four complete fiscal quarters before the reference's quarter.

    Returns:
        (start, end) where start is one year before the reference quarter's
        start and end is the day before it
    """
    q = quarter_for(reference)
    year_earlier = FiscalQuarter(q.fiscal_year - 1, q.quarter)
    return quarter_start(year_earlier), quarter_start(q) - timedelta(days=1)
