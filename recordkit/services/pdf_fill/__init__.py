"""CSV-to-PDF form filling service package."""

from .filler import FillReport, FilledDocument, field_values_for, fill_forms, fill_from_csv
from .template import PDF_PLACEHOLDER, resolve_template

__all__ = [
    "FillReport",
    "FilledDocument",
    "PDF_PLACEHOLDER",
    "field_values_for",
    "fill_forms",
    "fill_from_csv",
    "resolve_template",
]
