"""Data model for the table extraction pipeline.

Geometry types (TextFragment, Line, Column) are frozen dataclasses: they are
produced in bulk by the early stages and never mutated afterwards.  The
structured outputs (ExtractedTable and the conversion results) are Pydantic
models so their shape invariants are checked once, at construction.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, model_validator


@dataclass(frozen=True)
class TextFragment:
    """A run of text and its bounding box on one page (top-left origin, y grows downward)."""

    text: str
    x: float
    y: float
    width: float
    height: float
    page: int = 1

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass(frozen=True)
class Line:
    """Fragments judged to sit on the same visual text row, sorted left to right."""

    y: float
    items: tuple[TextFragment, ...]
    text: str
    page: int = 1


@dataclass(frozen=True)
class Column:
    """One detected column band ``[start_x, end_x)`` and the header text above it."""

    start_x: float
    end_x: float
    center_x: float
    header_text: str

    def contains(self, x: float) -> bool:
        return self.start_x <= x < self.end_x


class ExtractedTable(BaseModel):
    """Header/row matrix reconstructed from one document.

    Row and column order follow the source document and are never re-sorted.
    """

    columns: list[Column]
    headers: list[str]
    rows: list[list[str]]

    @model_validator(mode="after")
    def validate_shape(self) -> "ExtractedTable":
        """Ensure one header per column and exactly len(headers) cells per row."""
        if len(self.headers) != len(self.columns):
            raise ValueError(f"{len(self.headers)} headers for {len(self.columns)} columns")
        n_cols = len(self.headers)
        for i, row in enumerate(self.rows):
            if len(row) != n_cols:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {n_cols} (matching headers)")
        return self


# ─── Conversion Results ──────────────────────────────────────────────────────


class FailureReason(str, Enum):
    NO_TABLE_FOUND = "NoTableFound"
    UNREADABLE_PDF = "UnreadablePDF"
    SERIALIZATION_FAILURE = "SerializationFailure"


class ConversionSuccess(BaseModel):
    """A rendered .docx plus the metadata summary shown to the operator."""

    status: Literal["success"] = "success"
    document: bytes
    output_name: str
    headers: list[str]
    row_count: int
    raw_text: str
    preview: str
    issues: list[str] = []

    @property
    def success(self) -> bool:
        return True


class ConversionFailure(BaseModel):
    """No document; the raw line dump is kept so callers can show a fallback preview."""

    status: Literal["failure"] = "failure"
    raw_text: str
    reason: FailureReason
    message: str
    # Set when a table was reconstructed but could not be rendered
    preview: str | None = None

    @property
    def success(self) -> bool:
        return False


ConversionResult = ConversionSuccess | ConversionFailure
