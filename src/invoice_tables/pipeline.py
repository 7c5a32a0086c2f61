"""Public entry points: PDF bytes in, a tagged conversion result out.

Stages run strictly in sequence and every intermediate value is local to
the call, so concurrent conversions need no coordination:

  1. extraction.extract_fragments  -- positioned text fragments, page by page
  2. lines.group_into_lines        -- fragments clustered into text lines
  3. rows.extract_table            -- header / end location, columns, data rows
  4. formatting.render_docx        -- one-table .docx, plus the text preview

Bad input never raises: every failure becomes a ConversionFailure that still
carries the raw line text assembled so far (empty only when the PDF itself
could not be read).
"""

import logging

from invoice_tables.config import DEFAULT_CONFIG, ExtractionConfig
from invoice_tables.errors import SerializationFailure, UnreadablePDF
from invoice_tables.extraction import extract_fragments
from invoice_tables.formatting import render_docx, render_preview
from invoice_tables.lines import group_into_lines, lines_to_text
from invoice_tables.patterns import PDF_SUFFIX_RE
from invoice_tables.quality import audit_table
from invoice_tables.rows import extract_table
from invoice_tables.schema import ConversionFailure, ConversionResult, ConversionSuccess, FailureReason

logger = logging.getLogger(__name__)

DOCX_EXTENSION = ".docx"
NO_TABLE_MESSAGE = "No product table found in the PDF"
PREVIEW_ERROR_TEXT = "Unable to extract text from PDF"


def suggest_output_name(filename: str) -> str:
    """Replace a trailing '.pdf' (any case) with '.docx'."""
    stem = PDF_SUFFIX_RE.sub("", filename)
    return stem + DOCX_EXTENSION


def convert_pdf_to_docx(
    data: bytes,
    filename: str = "document.pdf",
    config: ExtractionConfig | None = None,
) -> ConversionResult:
    """Convert an invoice PDF into a .docx holding its product table.

    A header with zero surviving data rows is still a success (row_count == 0).
    """
    config = config or DEFAULT_CONFIG
    logger.info("Converting %s (%d bytes)", filename, len(data))

    # ── 1. Fragments and lines ────────────────────────────────────────────
    try:
        fragments = extract_fragments(data, config)
    except UnreadablePDF as exc:
        return ConversionFailure(raw_text="", reason=exc.reason, message=str(exc))

    lines = group_into_lines(fragments, config.line_tolerance)
    raw_text = lines_to_text(lines)

    # ── 2. Table reconstruction ──────────────────────────────────────────
    table = extract_table(lines, config)
    if table is None:
        logger.info("%s: no table found, returning raw text (%d lines)", filename, len(lines))
        return ConversionFailure(raw_text=raw_text, reason=FailureReason.NO_TABLE_FOUND, message=NO_TABLE_MESSAGE)

    if not table.rows:
        logger.warning("%s: header found but no data rows survived", filename)
    issues = audit_table(table)

    # ── 3. Rendering ─────────────────────────────────────────────────────
    preview = render_preview(table)
    try:
        document = render_docx(table)
    except SerializationFailure as exc:
        return ConversionFailure(raw_text=raw_text, reason=exc.reason, message=str(exc), preview=preview)

    logger.info("%s: %d columns, %d rows", filename, len(table.headers), len(table.rows))
    return ConversionSuccess(
        document=document,
        output_name=suggest_output_name(filename),
        headers=table.headers,
        row_count=len(table.rows),
        raw_text=raw_text,
        preview=preview,
        issues=issues,
    )


def extract_pdf_text(data: bytes, config: ExtractionConfig | None = None) -> str:
    """Return the document's lines as text, for inspecting a file before converting it."""
    config = config or DEFAULT_CONFIG
    try:
        fragments = extract_fragments(data, config)
    except UnreadablePDF:
        logger.warning("Text preview failed for %d-byte input", len(data))
        return PREVIEW_ERROR_TEXT
    return lines_to_text(group_into_lines(fragments, config.line_tolerance))
