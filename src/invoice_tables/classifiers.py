"""Line classification helpers for invoice table detection.

Each function takes an assembled Line and returns True/False to classify it
as a table header, a second header row, or the end of the table region.
Matching is case-insensitive substring search against the vocabularies held
by the ExtractionConfig.
"""

from invoice_tables.config import DEFAULT_CONFIG, ExtractionConfig
from invoice_tables.patterns import DIGIT_RE
from invoice_tables.schema import Line

# Replaces a matched keyword; never part of any keyword
KEYWORD_MASK = "\x00"


def count_header_keywords(line: Line, config: ExtractionConfig = DEFAULT_CONFIG) -> int:
    """Return how many distinct header keywords occur in the line's text.

    Longer keywords are matched first and their spans blanked out, so text
    such as "Subtotal" or "Unit price" scores once rather than also counting
    the shorter "total" or "price" inside it.
    """
    remaining = line.text.lower()
    count = 0
    for kw in sorted(set(config.header_keywords), key=lambda k: (-len(k), k)):
        if kw in remaining:
            count += 1
            remaining = remaining.replace(kw, KEYWORD_MASK)
    return count


def is_header_line(line: Line, config: ExtractionConfig = DEFAULT_CONFIG) -> bool:
    """Return True if the line looks like the table's column-title row."""
    # A single fragment full of keywords is a title or a sentence, not a header row
    if len(line.items) < 2:
        return False
    return count_header_keywords(line, config) >= config.min_header_keywords


def is_header_continuation(line: Line, config: ExtractionConfig = DEFAULT_CONFIG) -> bool:
    """Return True if the line is a second header row (e.g. 'Unit of measure', 'Total')."""
    lower_text = line.text.lower()
    return any(kw in lower_text for kw in config.continuation_keywords)


def is_end_line(line: Line, config: ExtractionConfig = DEFAULT_CONFIG) -> bool:
    """Return True if the line closes the table (subtotals, payment terms, signatures...)."""
    lower_text = line.text.lower()
    return any(kw in lower_text for kw in config.end_keywords)


def has_digit(line: Line) -> bool:
    """Return True if the line carries at least one digit."""
    return DIGIT_RE.search(line.text) is not None
