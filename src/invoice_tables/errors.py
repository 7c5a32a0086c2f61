"""Exceptions raised at stage boundaries.

pipeline.convert_pdf_to_docx() turns these into a ConversionFailure; they only
escape to callers that use the individual stages directly.
"""

from invoice_tables.schema import FailureReason


class ConversionError(Exception):
    """Base class for failures that abort a conversion attempt."""

    reason: FailureReason


class UnreadablePDF(ConversionError):
    """The PDF content stream could not be decoded; there is no partial result."""

    reason = FailureReason.UNREADABLE_PDF


class SerializationFailure(ConversionError):
    """The document builder could not render an otherwise valid table."""

    reason = FailureReason.SERIALIZATION_FAILURE
