"""Extract PDF form-field values into CSV rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, TextIO, Tuple

from recordkit.core.logger import get_logger
from recordkit.files import read_form_fields, write_csv

SOURCE_COLUMN = "pdf"


@dataclass(slots=True)
class ExtractionResult:
    """Extracted rows and the (document, field) pairs that were absent."""

    columns: Tuple[str, ...]
    rows: List[Tuple[str, ...]] = field(default_factory=list)
    missing: List[Tuple[str, str]] = field(default_factory=list)


def parse_field_list(text: str) -> List[str]:
    """Split a comma-separated field list, dropping blank entries."""

    names = [part.strip() for part in text.split(",")]
    names = [name for name in names if name]
    if not names:
        raise ValueError("At least one field name is required")
    return names


def read_pdf_list(stream: TextIO) -> List[Path]:
    """Read PDF file names from a stream, one per line."""

    return [Path(line.strip()) for line in stream if line.strip()]


def extract_fields(
    pdf_paths: Iterable[Path],
    field_names: Sequence[str],
    *,
    include_source: bool = False,
) -> ExtractionResult:
    """Read ``field_names`` from every PDF, one row per document in input order.

    A field missing from a document yields an empty value and a warning; an unreadable
    document aborts the run with ``RecordIOError`` or ``FormatError``.
    """

    logger = get_logger("pdf_extract")
    columns = tuple(field_names)
    if include_source:
        columns = (SOURCE_COLUMN,) + columns
    result = ExtractionResult(columns=columns)

    for pdf_path in pdf_paths:
        values = read_form_fields(pdf_path)
        row: List[str] = [str(pdf_path)] if include_source else []
        for name in field_names:
            if name not in values:
                logger.warning("Field %r not found in %s", name, pdf_path)
                result.missing.append((str(pdf_path), name))
                row.append("")
                continue
            row.append(values[name])
        result.rows.append(tuple(row))
        logger.info("Extracted %d fields from %s", len(field_names), pdf_path)
    return result


def extract_to_csv(
    pdf_paths: Iterable[Path],
    field_names: Sequence[str],
    output: Path | TextIO | str | None,
    *,
    include_source: bool = False,
    encoding: str = "utf-8",
) -> ExtractionResult:
    """Extract fields from every PDF and write the rows to ``output``."""

    result = extract_fields(pdf_paths, field_names, include_source=include_source)
    write_csv(result.columns, result.rows, output, encoding=encoding)
    return result
