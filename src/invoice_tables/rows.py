"""Data row classification, cell assignment, and the table extraction scan.

Cell assignment is purely visual: every fragment lands in the column whose
band contains its horizontal centre, and fragments sharing a cell are joined
left to right.  No cell is ever re-ordered or re-sorted.
"""

import logging
from dataclasses import dataclass

from invoice_tables.classifiers import has_digit, is_end_line, is_header_line
from invoice_tables.columns import detect_columns, find_column_index
from invoice_tables.config import DEFAULT_CONFIG, ExtractionConfig
from invoice_tables.detection import locate_table
from invoice_tables.schema import Column, ExtractedTable, Line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineDiagnosis:
    """Why a line was (or was not) accepted as a data row."""

    long_enough: bool
    is_header: bool
    is_end: bool
    has_digit: bool
    used_columns: int

    @property
    def is_data_row(self) -> bool:
        return self.reason is None

    @property
    def reason(self) -> str | None:
        """Return the first failed check, or None for a data row."""
        if not self.long_enough:
            return "too short"
        if self.is_header:
            return "header line"
        if self.is_end:
            return "end line"
        if not self.has_digit:
            return "no digit"
        if self.used_columns < 2:
            return f"spans {self.used_columns} column(s)"
        return None


def used_column_indices(line: Line, columns: list[Column]) -> set[int]:
    """Return the distinct columns hit by the line's fragment centres."""
    return {find_column_index(f.center_x, columns) for f in line.items}


def diagnose_line(line: Line, columns: list[Column], config: ExtractionConfig = DEFAULT_CONFIG) -> LineDiagnosis:
    """Evaluate every data-row check for *line* against the detected columns."""
    return LineDiagnosis(
        long_enough=bool(line.items) and len(line.text.strip()) >= config.min_row_text_length,
        is_header=is_header_line(line, config),
        is_end=is_end_line(line, config),
        has_digit=has_digit(line),
        used_columns=len(used_column_indices(line, columns)) if columns else 0,
    )


def is_data_row(line: Line, columns: list[Column], config: ExtractionConfig = DEFAULT_CONFIG) -> bool:
    """Return True if the line holds table values rather than header or boilerplate text."""
    return diagnose_line(line, columns, config).is_data_row


def assign_to_columns(line: Line, columns: list[Column]) -> list[str]:
    """Project the line's fragments onto *columns* and return one cell per column."""
    row = [""] * len(columns)
    for fragment in sorted(line.items, key=lambda f: f.x):
        idx = find_column_index(fragment.center_x, columns)
        row[idx] = f"{row[idx]} {fragment.text}" if row[idx] else fragment.text
    return row


def scan_rows(
    lines: list[Line],
    columns: list[Column],
    data_start: int,
    end_index: int | None,
    config: ExtractionConfig = DEFAULT_CONFIG,
) -> list[list[str]]:
    """Collect data rows from *data_start* up to (not including) *end_index*.

    Stops early once ``config.max_rejected_lines`` consecutive lines fail the
    data-row test, which keeps footers without end keywords out of the table.
    """
    stop = end_index if end_index is not None else len(lines)
    rows: list[list[str]] = []
    consecutive_rejected = 0

    for i in range(data_start, stop):
        line = lines[i]
        diagnosis = diagnose_line(line, columns, config)
        if diagnosis.is_data_row:
            rows.append(assign_to_columns(line, columns))
            consecutive_rejected = 0
            continue

        consecutive_rejected += 1
        logger.debug("Rejected line %d (%s): %r", i, diagnosis.reason, line.text)
        if consecutive_rejected >= config.max_rejected_lines:
            logger.info("Stopping scan after %d consecutive rejected lines (line %d)", consecutive_rejected, i)
            break

    return rows


def extract_table(lines: list[Line], config: ExtractionConfig = DEFAULT_CONFIG) -> ExtractedTable | None:
    """Reconstruct the product table from the document's lines.

    Returns None when no header line exists or the header yields no columns.
    A table with zero data rows is a valid result.
    """
    region = locate_table(lines, config)
    if region is None:
        return None

    columns = detect_columns(list(region.header_lines), config)
    if not columns:
        logger.warning("Header produced no columns; treating as no table")
        return None

    rows = scan_rows(lines, columns, region.data_start, region.end_index, config)
    logger.info("Extracted %d rows x %d columns", len(rows), len(columns))
    return ExtractedTable(
        columns=columns,
        headers=[c.header_text.strip() for c in columns],
        rows=rows,
    )
