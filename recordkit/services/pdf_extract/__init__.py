"""PDF form-field extraction service package."""

from .extractor import (
    ExtractionResult,
    extract_fields,
    extract_to_csv,
    parse_field_list,
    read_pdf_list,
)

__all__ = [
    "ExtractionResult",
    "extract_fields",
    "extract_to_csv",
    "parse_field_list",
    "read_pdf_list",
]
