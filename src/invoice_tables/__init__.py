"""Geometric table reconstruction for invoice-style PDFs.

Submodules:
  patterns     -- default keyword vocabularies and compiled regex patterns
  config       -- ExtractionConfig (vocabularies + layout thresholds) and .env overrides
  schema       -- fragment / line / column dataclasses, ExtractedTable and result models
  errors       -- ConversionError hierarchy raised at stage boundaries
  extraction   -- positioned text fragments from PDF pages (pdfplumber)
  lines        -- first-fit vertical clustering of fragments into lines
  classifiers  -- header, continuation, end-of-table and digit predicates
  detection    -- header / end line location
  columns      -- column bands derived from header fragment gaps
  rows         -- data row acceptance and cell assignment
  quality      -- post-extraction audit warnings
  formatting   -- .docx rendering and text preview
  pipeline     -- convert_pdf_to_docx() and extract_pdf_text() entry points
"""

from invoice_tables.config import ExtractionConfig
from invoice_tables.pipeline import convert_pdf_to_docx, extract_pdf_text, suggest_output_name
from invoice_tables.schema import ConversionFailure, ConversionResult, ConversionSuccess, FailureReason

__all__ = [
    "ConversionFailure",
    "ConversionResult",
    "ConversionSuccess",
    "ExtractionConfig",
    "FailureReason",
    "convert_pdf_to_docx",
    "extract_pdf_text",
    "suggest_output_name",
]
