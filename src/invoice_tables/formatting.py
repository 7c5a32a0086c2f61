"""Word (.docx) rendering and plain-text preview of an extracted table.

The document holds exactly one table: a bold, shaded header row followed by
the data rows in source order.  Cell text is written verbatim.  The saved
package is re-zipped with fixed timestamps so the same table always renders
to the same bytes.
"""

import io
import logging
import zipfile
from datetime import datetime

from docx import Document
from docx.document import Document as DocxDocument
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from invoice_tables.errors import SerializationFailure
from invoice_tables.schema import ExtractedTable

logger = logging.getLogger(__name__)


# ─── Document Styling ────────────────────────────────────────────────────────

HEADER_FILL = "D9E2F3"
HEADER_FONT_SIZE = Pt(10)
BODY_FONT_SIZE = Pt(9)
PAGE_MARGIN = Twips(720)
TABLE_STYLE = "Table Grid"

# Fixed package metadata
DOCUMENT_AUTHOR = "invoice-tables"
DOCUMENT_TIMESTAMP = datetime(2000, 1, 1)
_ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def _shade_cell(cell, fill: str) -> None:
    """Apply a solid background colour to a table cell."""
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), fill)
    cell._tc.get_or_add_tcPr().append(shading)  # pylint: disable=protected-access


def _set_full_width(table) -> None:
    """Stretch the table to 100% of the text width."""
    tbl_pr = table._tbl.tblPr  # pylint: disable=protected-access
    tbl_w = tbl_pr.find(qn("w:tblW"))
    if tbl_w is None:
        tbl_w = OxmlElement("w:tblW")
        tbl_pr.append(tbl_w)
    # Percentages are expressed in fiftieths of a percent
    tbl_w.set(qn("w:type"), "pct")
    tbl_w.set(qn("w:w"), "5000")


def _fill_cell(cell, text: str, is_header: bool) -> None:
    run = cell.paragraphs[0].add_run(text or "")
    run.bold = is_header
    run.font.size = HEADER_FONT_SIZE if is_header else BODY_FONT_SIZE
    if is_header:
        _shade_cell(cell, HEADER_FILL)


def build_document(table: ExtractedTable) -> DocxDocument:
    """Return a python-docx Document containing *table* as its only content."""
    document = Document()

    section = document.sections[0]
    section.top_margin = PAGE_MARGIN
    section.right_margin = PAGE_MARGIN
    section.bottom_margin = PAGE_MARGIN
    section.left_margin = PAGE_MARGIN

    props = document.core_properties
    props.author = DOCUMENT_AUTHOR
    props.last_modified_by = DOCUMENT_AUTHOR
    props.created = DOCUMENT_TIMESTAMP
    props.modified = DOCUMENT_TIMESTAMP
    props.revision = 1

    word_table = document.add_table(rows=1 + len(table.rows), cols=len(table.headers))
    word_table.style = TABLE_STYLE
    _set_full_width(word_table)

    for col_idx, header in enumerate(table.headers):
        _fill_cell(word_table.cell(0, col_idx), header, is_header=True)

    for row_idx, row in enumerate(table.rows, start=1):
        for col_idx, value in enumerate(row):
            _fill_cell(word_table.cell(row_idx, col_idx), value, is_header=False)

    return document


def _normalise_package(blob: bytes) -> bytes:
    """Re-zip a saved package with fixed entry timestamps and permissions."""
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(blob)) as source, zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as target:
        for info in source.infolist():
            entry = zipfile.ZipInfo(info.filename, date_time=_ZIP_DATE_TIME)
            entry.compress_type = zipfile.ZIP_DEFLATED
            entry.external_attr = 0o644 << 16
            target.writestr(entry, source.read(info.filename))
    return out.getvalue()


def render_docx(table: ExtractedTable) -> bytes:
    """Render *table* to .docx bytes; identical tables give identical bytes.

    Raises SerializationFailure if python-docx cannot build or save the document.
    """
    try:
        document = build_document(table)
        buffer = io.BytesIO()
        document.save(buffer)
        blob = _normalise_package(buffer.getvalue())
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.error("Failed to render .docx for %d rows: %s", len(table.rows), exc)
        raise SerializationFailure(f"Could not render document: {exc}") from exc

    logger.debug("Rendered .docx: %d bytes", len(blob))
    return blob


# ─── Text Preview ────────────────────────────────────────────────────────────


def render_preview(table: ExtractedTable) -> str:
    """Return the operator-facing debug dump: counts, header list and a TSV of the table."""
    lines: list[str] = [
        f"COLUMNS DETECTED ({len(table.headers)}): {' | '.join(table.headers)}",
        "",
        f"ROWS EXTRACTED: {len(table.rows)}",
        "",
        "--- TABLE ---",
        "\t".join(table.headers),
    ]
    lines.extend("\t".join(row) for row in table.rows)
    return "\n".join(lines)
