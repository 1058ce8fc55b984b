"""
reportkit — analyst helpers for fiscal-quarter reporting.

Fiscal calendar conversions, keyword-rule tagging of asset tables, and the
small I/O helpers (database connections, SQL scripts, CSV export, brand colors,
file discovery) that surround them.
"""

__version__ = "0.1.0"
