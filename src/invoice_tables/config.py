"""Shared configuration for the invoice table extraction pipeline.

ExtractionConfig bundles the keyword vocabularies and every layout threshold
used by the stages.  The defaults are tuned for Spanish and English supplier
invoices; alternative document types pass their own instance instead
of editing module constants.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from invoice_tables.patterns import CONTINUATION_KEYWORDS, END_KEYWORDS, HEADER_KEYWORDS

logger = logging.getLogger(__name__)

ROOT = Path(__file__).parent.parent.parent.resolve()

# Environment variables that may override the numeric defaults
ENV_PREFIX = "INVOICE_TABLES_"
_ENV_OVERRIDES = {
    "LINE_TOLERANCE": "line_tolerance",
    "MIN_COLUMN_GAP": "min_column_gap",
    "MAX_REJECTED_LINES": "max_rejected_lines",
}


class ExtractionConfig(BaseModel):
    """Vocabularies and thresholds for one family of documents.

    Instances are immutable, so a single config can be shared by any number
    of concurrent conversions.
    """

    model_config = ConfigDict(frozen=True)

    header_keywords: tuple[str, ...] = HEADER_KEYWORDS
    continuation_keywords: tuple[str, ...] = CONTINUATION_KEYWORDS
    end_keywords: tuple[str, ...] = END_KEYWORDS

    # Fragment extraction
    word_x_tolerance: float = 0.5
    default_height: float = 10.0

    # Line assembly
    line_tolerance: float = 5.0

    # Table location
    min_header_keywords: int = 2

    # Column detection
    min_column_gap: float = 5.0
    gap_percentile: float = 0.3
    gap_factor: float = 0.5
    column_sentinel: float = 9999.0

    # Row scanning
    min_row_text_length: int = 3
    max_rejected_lines: int = 5

    @field_validator("header_keywords", "continuation_keywords", "end_keywords")
    @classmethod
    def normalise_keywords(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Lowercase every keyword and refuse an empty vocabulary."""
        keywords = tuple(kw.strip().lower() for kw in value if kw.strip())
        if not keywords:
            raise ValueError("keyword vocabulary must not be empty")
        return keywords

    @field_validator("gap_percentile")
    @classmethod
    def check_percentile(cls, value: float) -> float:
        """Percentile is a fraction in [0, 1)."""
        if not 0 <= value < 1:
            raise ValueError(f"gap_percentile must be in [0, 1), got {value}")
        return value

    @field_validator("max_rejected_lines", "min_header_keywords")
    @classmethod
    def check_positive(cls, value: int) -> int:
        """Counters must allow at least one line."""
        if value < 1:
            raise ValueError(f"expected a positive count, got {value}")
        return value

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "ExtractionConfig":
        """Build a config from defaults plus ``INVOICE_TABLES_*`` environment overrides."""
        load_dotenv(env_file or ROOT / ".env")
        overrides: dict[str, str] = {}
        for suffix, field in _ENV_OVERRIDES.items():
            raw = os.getenv(ENV_PREFIX + suffix)
            if raw:
                overrides[field] = raw
        if overrides:
            logger.info("Applying environment overrides: %s", overrides)
        return cls(**overrides)


DEFAULT_CONFIG = ExtractionConfig()
