"""Group text fragments into horizontal lines by vertical proximity.

Grouping is first-fit: each fragment joins the earliest-created line whose
representative y is within tolerance, even when a later line is closer.  On
skewed scans this occasionally attaches a fragment to the wrong neighbour.
"""

import logging
from itertools import groupby

from invoice_tables.schema import Line, TextFragment

logger = logging.getLogger(__name__)


def _group_page(fragments: list[TextFragment], tolerance: float) -> list[Line]:
    """Cluster one page's fragments and return its lines sorted top to bottom."""
    # dicts keep insertion order, which is the scan order for first-fit
    line_map: dict[float, list[TextFragment]] = {}

    for fragment in fragments:
        for line_y, line_items in line_map.items():
            if abs(fragment.y - line_y) <= tolerance:
                line_items.append(fragment)
                break
        else:
            line_map[fragment.y] = [fragment]

    lines: list[Line] = []
    for line_y in sorted(line_map):
        items = tuple(sorted(line_map[line_y], key=lambda f: f.x))
        lines.append(
            Line(
                y=line_y,
                items=items,
                text=" ".join(f.text for f in items),
                page=items[0].page,
            )
        )
    return lines


def group_into_lines(fragments: list[TextFragment], tolerance: float = 5.0) -> list[Line]:
    """Return the document's lines: page by page, each page top to bottom.

    *fragments* must be in page order, then source order within a page.
    """
    lines: list[Line] = []
    for page_number, page_items in groupby(fragments, key=lambda f: f.page):
        page_lines = _group_page(list(page_items), tolerance)
        logger.debug("Page %d: %d lines", page_number, len(page_lines))
        lines.extend(page_lines)

    logger.info("Assembled %d lines from %d fragments", len(lines), len(fragments))
    return lines


def lines_to_text(lines: list[Line]) -> str:
    """Join every line's text, top to bottom, one line per row."""
    return "\n".join(line.text for line in lines)
