"""Positioned text fragments from PDF pages.

pdfplumber (on top of pdfminer) decodes each page's content stream.  Words
are extracted with ``keep_blank_chars`` so a run like "Unit Price" stays one
fragment, and with ``use_text_flow`` so fragments keep content-stream order,
which the first-fit line grouping depends on.
"""

import io
import logging
import warnings

import pdfplumber

from invoice_tables.config import DEFAULT_CONFIG, ExtractionConfig
from invoice_tables.errors import UnreadablePDF
from invoice_tables.schema import TextFragment

logger = logging.getLogger(__name__)

logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", module="pdfminer")


def _word_to_fragment(word: dict, page_number: int, default_height: float) -> TextFragment | None:
    """Convert one pdfplumber word dict, or return None for whitespace-only runs."""
    text = word.get("text", "")
    if not text.strip():
        return None

    x0 = float(word["x0"])
    x1 = float(word.get("x1", x0))
    top = float(word.get("top", 0.0))
    bottom = float(word.get("bottom", top))

    height = bottom - top
    return TextFragment(
        text=text,
        x=x0,
        # pdfplumber already measures from the page top; "bottom" is the run's baseline side
        y=bottom,
        width=max(x1 - x0, 0.0),
        height=height if height > 0 else default_height,
        page=page_number,
    )


def page_fragments(
    page: pdfplumber.page.Page,
    default_height: float = 10.0,
    x_tolerance: float = 0.5,
) -> list[TextFragment]:
    """Return the fragments of a single page in content-stream order.

    Glyphs inside one text run abut exactly, so a small *x_tolerance* keeps
    neighbouring runs apart even when they almost touch.
    """
    words = page.extract_words(keep_blank_chars=True, use_text_flow=True, x_tolerance=x_tolerance)
    fragments: list[TextFragment] = []
    for word in words:
        fragment = _word_to_fragment(word, page.page_number, default_height)
        if fragment is not None:
            fragments.append(fragment)
    return fragments


def extract_fragments(data: bytes, config: ExtractionConfig = DEFAULT_CONFIG) -> list[TextFragment]:
    """Decode *data* and return every page's fragments, concatenated in page order.

    Raises UnreadablePDF when pdfminer cannot parse the file or any page.
    """
    fragments: list[TextFragment] = []
    try:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                page_items = page_fragments(page, config.default_height, config.word_x_tolerance)
                logger.debug("Page %d: %d fragments", page.page_number, len(page_items))
                fragments.extend(page_items)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.error("Could not decode PDF (%d bytes): %s", len(data), exc)
        raise UnreadablePDF(f"Could not decode PDF: {exc}") from exc

    logger.info("Extracted %d text fragments", len(fragments))
    return fragments
