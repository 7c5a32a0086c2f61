"""Post-extraction audit of a reconstructed table.

Flags rows with suspiciously long cells outside free-text columns, a sign
that a column boundary fell in the wrong place and neighbouring values were
swallowed.  The audit is informational; it never modifies the table.
"""

import logging

from invoice_tables.patterns import DESCRIPTION_HEADER_HINTS
from invoice_tables.schema import ExtractedTable

logger = logging.getLogger(__name__)

# Cells longer than this outside a description column are reported
OVERFLOW_CELL_LENGTH = 50


def is_description_column(header: str) -> bool:
    """Return True for free-text columns where long cells are expected."""
    lower = header.lower()
    return any(hint in lower for hint in DESCRIPTION_HEADER_HINTS)


def overflow_row_count(table: ExtractedTable) -> int:
    """Return how many rows hold an over-long cell in a non-description column."""
    free_text = [is_description_column(h) for h in table.headers]
    return sum(
        1
        for row in table.rows
        if any(len(cell) > OVERFLOW_CELL_LENGTH and not free_text[i] for i, cell in enumerate(row))
    )


def audit_table(table: ExtractedTable) -> list[str]:
    """Return human-readable warnings about the table's likely extraction problems."""
    issues: list[str] = []

    overflow = overflow_row_count(table)
    if overflow:
        issues.append(f"{overflow} row(s) with possible column overflow")

    for issue in issues:
        logger.warning("Table audit: %s", issue)
    return issues
