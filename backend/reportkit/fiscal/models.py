"""
models.py — Value types for the fiscal calendar.

FiscalQuarter is the (fiscal_year, quarter) pair every conversion goes through;
QuarterRange carries its calendar boundaries and both textual labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict

from reportkit.core.errors import InvalidInput

# Fiscal years whose every quarter boundary is a representable date
# (FY2 Q1 starts 0001-03-01, FY9999 Q4 ends 9999-02-28).
MIN_FISCAL_YEAR = 2
MAX_FISCAL_YEAR = 9999


@dataclass(frozen=True, order=True)
class FiscalQuarter:
    """
    A fiscal quarter.

    Attributes:
        fiscal_year: Full fiscal year (e.g. 2017 for FY17), MIN_FISCAL_YEAR-MAX_FISCAL_YEAR
        quarter: Quarter number, 1-4
    """
    fiscal_year: int
    quarter: int

    def __post_init__(self):
        if isinstance(self.quarter, bool) or not isinstance(self.quarter, int) or not 1 <= self.quarter <= 4:
            raise InvalidInput(self.quarter, ["quarter number 1-4"])
        if (
            isinstance(self.fiscal_year, bool)
            or not isinstance(self.fiscal_year, int)
            or not MIN_FISCAL_YEAR <= self.fiscal_year <= MAX_FISCAL_YEAR
        ):
            raise InvalidInput(
                self.fiscal_year, [f"integer fiscal year {MIN_FISCAL_YEAR}-{MAX_FISCAL_YEAR}"]
            )

    @property
    def label(self) -> str:
        """Current-style label, e.g. FY17Q1."""
        return f"FY{self.fiscal_year % 100:02d}Q{self.quarter}"

    @property
    def legacy_label(self) -> str:
        """Legacy-style label, e.g. Q1FY17."""
        return f"Q{self.quarter}FY{self.fiscal_year % 100:02d}"

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class QuarterRange:
    """Calendar boundaries of one fiscal quarter, both dates inclusive."""
    fiscal_quarter: FiscalQuarter
    start_date: date
    end_date: date

    @property
    def quarter_label_current(self) -> str:
        return self.fiscal_quarter.label

    @property
    def quarter_label_legacy(self) -> str:
        return self.fiscal_quarter.legacy_label

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def contains(self, d: date) -> bool:
        return self.start_date <= d <= self.end_date

    def to_dict(self) -> Dict[str, Any]:
        """Row shape used by quarter_history_frame()."""
        return {
            "qtr_start": self.start_date,
            "qtr_end": self.end_date,
            "qtr_name": self.quarter_label_current,
            "old_qtr_name": self.quarter_label_legacy,
        }
