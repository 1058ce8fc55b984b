"""
sanity_checks.py — Summary output for tagging results.

This module prints what each rule claimed so a rule list can be checked by eye
after a run.
"""

from reportkit.tagging.models import TaggingResult


def print_tagging_summary(result: TaggingResult, verbose: bool = False) -> None:
    """
    Print a summary of a tagging pass.

    Shows the per-rule running tally, the default fall-through count, the
    filtered and dropped counts, and the surviving records per category.

    Args:
        result: TaggingResult from tag()
        verbose: Whether to print the summary (if False, does nothing)
    """
    if not verbose:
        return

    total = len(result.records) + result.filtered_count
    if total == 0 and len(result.dropped) == 0:
        print("No records to summarize")
        return

    print("\n" + "=" * 80)
    print("Tagging Summary")
    print("=" * 80)

    print(f"\nRecords classified: {total}")
    print(f"Dropped (missing required fields): {len(result.dropped)}")
    print(f"Filtered out: {result.filtered_count}")

    print("\nRule tally (in priority order):")
    for entry in result.tally:
        print(
            f"  {entry.position:>2}. {entry.category} [{entry.field}]: "
            f"{entry.matched} matched, {entry.cumulative} classified so far"
        )
    print(f"  default: {result.default_count} record{'s' if result.default_count != 1 else ''}")

    counts = result.category_counts()
    if len(counts):
        print("\nRecords by category:")
        for label in sorted(counts.index, key=str):
            count = int(counts[label])
            print(f"  {label}: {count} record{'s' if count != 1 else ''}")
    else:
        print("\nNo records left after filtering")

    print("=" * 80 + "\n")
