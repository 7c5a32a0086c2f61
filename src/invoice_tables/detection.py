"""Table region location: header line(s) and the terminating line.

Operates on the ordered line stream to find where the product table starts,
whether its header spans two rows, and where trailing boilerplate begins.
"""

import logging
from dataclasses import dataclass

from invoice_tables.classifiers import is_end_line, is_header_continuation, is_header_line
from invoice_tables.config import DEFAULT_CONFIG, ExtractionConfig
from invoice_tables.schema import Line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableRegion:
    """Header rows, first candidate data line, and the (exclusive) end line index."""

    header_lines: tuple[Line, ...]
    data_start: int
    end_index: int | None


# ─── Header Detection ────────────────────────────────────────────────────────


def find_header_index(lines: list[Line], config: ExtractionConfig = DEFAULT_CONFIG) -> int | None:
    """Return the index of the first header line, or None when the document has no table."""
    for i, line in enumerate(lines):
        if is_header_line(line, config):
            return i
    return None


def collect_header_lines(
    lines: list[Line],
    header_index: int,
    config: ExtractionConfig = DEFAULT_CONFIG,
) -> tuple[list[Line], int]:
    """Return the header rows and the index of the first line after them.

    The line right below the header is folded in when it is a continuation
    row, so two-row headers ("Vr." over "Unitario") produce one column set.
    """
    header_lines = [lines[header_index]]
    data_start = header_index + 1

    if data_start < len(lines) and is_header_continuation(lines[data_start], config):
        logger.debug("Folding continuation header: %r", lines[data_start].text)
        header_lines.append(lines[data_start])
        data_start += 1

    return header_lines, data_start


# ─── End Detection ───────────────────────────────────────────────────────────


def find_end_index(lines: list[Line], data_start: int, config: ExtractionConfig = DEFAULT_CONFIG) -> int | None:
    """Return the index of the first end line at or after *data_start*, or None."""
    for i in range(data_start, len(lines)):
        if is_end_line(lines[i], config):
            return i
    return None


def locate_table(lines: list[Line], config: ExtractionConfig = DEFAULT_CONFIG) -> TableRegion | None:
    """Find the header rows and end line of the product table, or None if absent."""
    header_index = find_header_index(lines, config)
    if header_index is None:
        logger.info("No header line among %d lines", len(lines))
        return None

    header_lines, data_start = collect_header_lines(lines, header_index, config)
    end_index = find_end_index(lines, data_start, config)
    logger.info(
        "Header at line %d (%d row%s), end line %s",
        header_index,
        len(header_lines),
        "" if len(header_lines) == 1 else "s",
        end_index if end_index is not None else "not found",
    )
    return TableRegion(header_lines=tuple(header_lines), data_start=data_start, end_index=end_index)
