"""CSV and PDF file helpers shared by the recordkit tools."""

# Module responsibilities:
# - Re-export the table and form helpers so services have one import surface.

from __future__ import annotations

from .csv_table import STDIO_MARKER, Row, Table, read_table, write_csv
from .paths import ensure_parent
from .pdf_forms import fill_form, read_form_fields

__all__ = [
    "STDIO_MARKER",
    "Row",
    "Table",
    "ensure_parent",
    "fill_form",
    "read_form_fields",
    "read_table",
    "write_csv",
]
