"""Keyword vocabularies and compiled regex patterns for invoice table detection.

The vocabularies are the defaults loaded into ExtractionConfig; nothing reads
them directly except config.py.  Spanish terms come from the Colombian
invoices the engine was tuned on, English terms cover the same columns.
"""

import re

# ─── Header Vocabulary ────────────────────────────────────────────────────────

# A line matching at least two of these (and holding 2+ fragments) is the
# table's column-title row.  Kept specific to avoid false positives on prose.
HEADER_KEYWORDS = (
    "descripcion",
    "descripción",
    "description",
    "cantidad",
    "quantity",
    "qty",
    "precio",
    "price",
    "valor unitario",
    "vr unitario",
    "vr. unitario",
    "unit price",
    "valor total",
    "vr total",
    "vr. total",
    "total",
    "codigo",
    "código",
    "code",
    "item",
    "ítem",
    "impuesto",
    "impto",
    "tax",
    "subtotal",
    "detalle",
    "detail",
)

# Words that mark the line right below the header as a second header row
CONTINUATION_KEYWORDS = (
    "medida",
    "unit of measure",
    "unitario",
    "unit",
    "cargo",
    "charge",
    "total",
    "impto",
    "tax",
)


# ─── End-of-Table Vocabulary ──────────────────────────────────────────────────

# First line (after the header) containing any of these closes the table
END_KEYWORDS = (
    "subtotal",
    "sub-total",
    "sub total",
    "total factura",
    "total a pagar",
    "total due",
    "total neto",
    "net total",
    "total bruto",
    "gross total",
    "base gravable",
    "base iva",
    "tax base",
    "observaciones",
    "notas:",
    "notes:",
    "forma de pago",
    "condiciones de pago",
    "payment terms",
    "banco:",
    "bank:",
    "cuenta:",
    "account:",
    "firma",
    "signature",
    "elaborado por",
    "prepared by",
    "recibido por",
    "received by",
    "son:",
    "valor en letras",
    "amount in words",
    "moneda:",
    "currency:",
)


# ─── Audit Constants ──────────────────────────────────────────────────────────

# Header fragments that identify a free-text column (long cells are expected)
DESCRIPTION_HEADER_HINTS = ("desc", "item", "concepto", "detalle", "detail")


# ─── Regex Patterns ───────────────────────────────────────────────────────────

# Data rows always carry a quantity, price or code
DIGIT_RE = re.compile(r"\d")

# Trailing ".pdf" of an uploaded file name
PDF_SUFFIX_RE = re.compile(r"\.pdf$", re.IGNORECASE)
