"""
models.py — Data models for keyword-rule tagging.

This module defines the KeywordRule dataclass that the tagging engine applies in
priority order, and the TaggingResult it returns.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Pattern, Tuple

import pandas as pd

from reportkit.core.errors import InvalidRule


class MatchMode(Enum):
    """How a rule's patterns are compared with a field value (always case-insensitive)."""
    SUBSTRING = "substring"
    REGEX = "regex"
    EXACT = "exact"


@dataclass(frozen=True)
class KeywordRule:
    """
    One classification rule.

    Attributes:
        category: Label assigned to records this rule matches
        field: Column inspected by the rule
        patterns: Keywords or regular expressions; any one matching is enough
        mode: MatchMode (or its string value)
    """
    category: str
    field: str
    patterns: Tuple[str, ...]
    mode: MatchMode = MatchMode.SUBSTRING

    def __post_init__(self):
        if isinstance(self.patterns, str):
            object.__setattr__(self, "patterns", (self.patterns,))
        else:
            object.__setattr__(self, "patterns", tuple(self.patterns))
        if not self.patterns:
            raise InvalidRule(f"Rule for category {self.category!r} has no patterns")

        if not isinstance(self.mode, MatchMode):
            try:
                object.__setattr__(self, "mode", MatchMode(self.mode))
            except ValueError:
                raise InvalidRule(
                    f"Unknown match mode {self.mode!r}; valid modes: {[m.value for m in MatchMode]}"
                ) from None

        if self.mode is MatchMode.REGEX:
            try:
                self.compiled()
            except re.error as e:
                raise InvalidRule(f"Bad regex in rule for category {self.category!r}: {e}") from e

    def compiled(self) -> Pattern:
        """Single case-insensitive alternation of all patterns (REGEX mode)."""
        return re.compile("|".join(self.patterns), re.IGNORECASE)

    def matches(self, values: pd.Series) -> pd.Series:
        """
        Boolean mask of values matched by this rule.

        Args:
            values: Column values (any dtype); NA never matches

        Returns:
            Boolean Series aligned with values
        """
        present = values.notna()
        text = values.where(present, "").astype(str).str.lower()

        if self.mode is MatchMode.EXACT:
            wanted = {p.lower() for p in self.patterns}
            hits = text.isin(wanted)
        elif self.mode is MatchMode.REGEX:
            hits = text.str.contains("|".join(self.patterns), case=False, regex=True, na=False)
        else:
            hits = pd.Series(False, index=values.index)
            for pattern in self.patterns:
                hits = hits | text.str.contains(pattern.lower(), regex=False, na=False)

        return hits & present


@dataclass
class RuleTally:
    """Records classified by one rule, and the running total after it."""
    position: int
    category: str
    field: str
    matched: int
    cumulative: int


@dataclass
class TaggingResult:
    """
    Output of one tagging pass.

    Attributes:
        records: Tagged records (input columns plus label and rank columns),
            in input order, with filtered categories removed
        dropped: Records excluded for missing required fields
        tally: Per-rule classification counts, in rule order
        default_count: Records that fell through to the default category
        filtered_count: Records removed by the filter
        label_column: Name of the category label column
        rank_column: Name of the category rank column
    """
    records: pd.DataFrame
    dropped: pd.DataFrame
    tally: List[RuleTally] = field(default_factory=list)
    default_count: int = 0
    filtered_count: int = 0
    label_column: str = "category_label"
    rank_column: str = "category_rank"

    def category_counts(self) -> pd.Series:
        """Number of surviving records per category label."""
        return self.records[self.label_column].value_counts()

    def labels(self) -> List[Optional[str]]:
        return self.records[self.label_column].tolist()
