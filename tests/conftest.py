"""Shared test configuration and fixtures.

``make_pdf`` writes a minimal uncompressed PDF using the built-in Helvetica
font, with one text run per ``(x, y, text)`` triple.  Coordinates are PDF
user space (origin bottom-left, 612x792 page), so a larger y is higher up.
"""

import pytest

PAGE_WIDTH = 612
PAGE_HEIGHT = 792


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: list[list[tuple[float, float, str]]]) -> bytes:
    """Return PDF bytes with one page per entry of *pages*."""
    page_ids = [4 + 2 * i for i in range(len(pages))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)

    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode("ascii"),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, items in zip(page_ids, pages):
        content = "".join(
            f"BT /F1 10 Tf 1 0 0 1 {x} {y} Tm ({_escape(text)}) Tj ET\n" for x, y, text in items
        ).encode("latin-1")
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
            ).encode("ascii")
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets: list[int] = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % num + body + b"\nendobj\n"

    xref_pos = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_pos)
    return bytes(out)


@pytest.fixture
def make_pdf():
    """Factory fixture: ``make_pdf([(x, y, text), ...], [...page 2...])`` -> PDF bytes."""

    def _make(*pages: list[tuple[float, float, str]]) -> bytes:
        return build_pdf(list(pages))

    return _make


# Five well-separated header runs and three product rows
HEADER_ROW = [
    (40, 700, "Item"),
    (100, 700, "Description"),
    (250, 700, "Qty"),
    (330, 700, "Unit Price"),
    (450, 700, "Total"),
]
PRODUCT_ROWS = [
    [(40, 680, "1"), (100, 680, "Bolt M8"), (250, 680, "10"), (330, 680, "0.50"), (450, 680, "5.00")],
    [(40, 660, "2"), (100, 660, "Hex nut"), (250, 660, "20"), (330, 660, "0.25"), (450, 660, "5.00")],
    [(40, 640, "3"), (100, 640, "Washer"), (250, 640, "40"), (330, 640, "0.10"), (450, 640, "4.00")],
]


@pytest.fixture
def invoice_page() -> list[tuple[float, float, str]]:
    """A single invoice page: title, header, three products, subtotal and signature."""
    items = [(40, 750, "ACME Supplies Invoice 0042")]
    items += HEADER_ROW
    for row in PRODUCT_ROWS:
        items += row
    items += [(330, 600, "Subtotal"), (450, 600, "14.00"), (40, 560, "Signature")]
    return items


@pytest.fixture
def header_row() -> list[tuple[float, float, str]]:
    return list(HEADER_ROW)


@pytest.fixture
def product_rows() -> list[list[tuple[float, float, str]]]:
    return [list(row) for row in PRODUCT_ROWS]
