"""
rule_based_tagger.py — Priority-ordered keyword tagging of tabular records.

Each record receives exactly one category: rules are applied in list order, the
first rule whose patterns match the rule's field claims the record, and later
rules never see it again. Records no rule claims get the default category.

Rule order is a correctness-relevant total order. The same records and rules
always produce the same labels in the same row order.
"""

from __future__ import annotations

from typing import Any, Collection, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

import pandas as pd

from reportkit.core.errors import InvalidRule, MissingRequiredField, UnresolvedCategory
from reportkit.core.logging import get_logger
from reportkit.tagging.models import KeywordRule, RuleTally, TaggingResult

logger = get_logger(__name__)

Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


def _to_frame(records: Records) -> pd.DataFrame:
    """Copy of the records as a DataFrame; the caller's table is never mutated."""
    if isinstance(records, pd.DataFrame):
        return records.copy()
    return pd.DataFrame(list(records))


def _as_labels(labels: Optional[Union[str, Collection[str]]]) -> Set[str]:
    """A single label or a collection of labels, as a set."""
    if labels is None:
        return set()
    if isinstance(labels, str):
        return {labels}
    return set(labels)


def _resolve_ranks(
    rules: Sequence[KeywordRule],
    default_category: Optional[str],
    category_order: Sequence[str],
) -> Dict[str, int]:
    """
    Map every category label to its 1-based rank.

    Raises:
        UnresolvedCategory: If no default category is given, the order has
            duplicates, or a rule/default category is missing from the order
    """
    if not default_category:
        raise UnresolvedCategory(
            "No default category configured; unmatched records would have no category"
        )

    order = list(category_order)
    if len(set(order)) != len(order):
        raise UnresolvedCategory(f"Category order contains duplicates: {order}")

    ranks = {label: position for position, label in enumerate(order, start=1)}

    used = [rule.category for rule in rules] + [default_category]
    unranked = sorted({label for label in used if label not in ranks})
    if unranked:
        raise UnresolvedCategory(
            f"Categories without a rank: {unranked}. Category order: {order}"
        )
    return ranks


def check_required_fields(
    records: pd.DataFrame,
    required_fields: Collection[str],
    strict: bool = False,
) -> pd.Series:
    """
    Find records that have a value in every required field.

    Args:
        records: Table to check
        required_fields: Column names that must be present and non-missing
        strict: Raise instead of just reporting

    Returns:
        Boolean Series, True for complete records. If a required column is
        absent from the table no record is complete.

    Raises:
        MissingRequiredField: If strict and any record is incomplete
    """
    required = list(required_fields)
    absent = [name for name in required if name not in records.columns]

    if absent:
        complete = pd.Series(False, index=records.index)
    else:
        complete = records[required].notna().all(axis=1)

    incomplete = int((~complete).sum())
    if strict and incomplete:
        raise MissingRequiredField(required, incomplete)
    return complete


def split_missing_required(
    records: pd.DataFrame,
    required_fields: Collection[str],
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Split records into (complete, dropped) by required field presence."""
    complete = check_required_fields(records, required_fields)
    kept = records[complete]
    dropped = records[~complete]

    if len(dropped):
        absent = [name for name in required_fields if name not in records.columns]
        if absent:
            logger.warning(
                "Required column(s) %s absent; dropping all %d records", absent, len(dropped)
            )
        else:
            logger.warning(
                "Dropping %d of %d records missing required field(s) %s",
                len(dropped), len(records), list(required_fields),
            )
    return kept, dropped


def tag(
    records: Records,
    rules: Sequence[KeywordRule],
    *,
    default_category: str,
    category_order: Sequence[str],
    filter: Optional[Union[str, Collection[str]]] = None,
    required_fields: Collection[str] = (),
    label_column: str = "category_label",
    rank_column: str = "category_rank",
) -> TaggingResult:
    """
    Classify every record into exactly one category.

    Steps:
    1. Drop records missing any required field (reported in result.dropped).
    2. Apply rules in order; the first matching rule assigns its category.
    3. Assign default_category to records no rule matched.
    4. Rank each record by its category's position in category_order.
    5. Remove records whose category is in `filter` (exclusion).

    Args:
        records: DataFrame or iterable of mappings (not mutated)
        rules: Priority-ordered KeywordRule list
        default_category: Catch-all category for unmatched records
        category_order: Every category label, in rank order (rank 1 first)
        filter: Category label, or labels, to exclude from the output
        required_fields: Columns every record must have a value in
        label_column: Output column for the category label
        rank_column: Output column for the category rank

    Returns:
        TaggingResult with tagged records, dropped records and per-rule tally

    Raises:
        UnresolvedCategory: If the default or a rule category cannot be ranked
        InvalidRule: If a rule inspects a column the records do not have
    """
    rules = list(rules)
    ranks = _resolve_ranks(rules, default_category, category_order)

    frame = _to_frame(records)
    kept, dropped = split_missing_required(frame, required_fields)

    if len(kept):
        for rule in rules:
            if rule.field not in kept.columns:
                raise InvalidRule(
                    f"Rule for category {rule.category!r} inspects missing column {rule.field!r}"
                )

    logger.info("Tagging %d records with %d rules", len(kept), len(rules))

    labels = pd.Series(None, index=kept.index, dtype=object)
    tally: List[RuleTally] = []
    cumulative = 0

    for position, rule in enumerate(rules, start=1):
        pending = labels.isna()
        if not len(kept):
            hits = pending
        else:
            hits = rule.matches(kept[rule.field]) & pending
        matched = int(hits.sum())
        if matched:
            labels[hits] = rule.category
        cumulative += matched

        tally.append(RuleTally(
            position=position,
            category=rule.category,
            field=rule.field,
            matched=matched,
            cumulative=cumulative,
        ))
        logger.debug(
            "after rule %d (%s on %s): %d matched, %d classified",
            position, rule.category, rule.field, matched, cumulative,
        )

    unmatched = labels.isna()
    default_count = int(unmatched.sum())
    labels[unmatched] = default_category

    tagged = kept.copy()
    tagged[label_column] = labels
    tagged[rank_column] = labels.map(ranks).astype("int64")

    filtered_count = 0
    excluded_labels = _as_labels(filter)
    if excluded_labels:
        excluded = tagged[label_column].isin(excluded_labels)
        filtered_count = int(excluded.sum())
        tagged = tagged[~excluded]

    logger.info(
        "Tagged %d records (%d by rules, %d default); %d filtered, %d dropped",
        len(kept), cumulative, default_count, filtered_count, len(dropped),
    )

    return TaggingResult(
        records=tagged,
        dropped=dropped,
        tally=tally,
        default_count=default_count,
        filtered_count=filtered_count,
        label_column=label_column,
        rank_column=rank_column,
    )
