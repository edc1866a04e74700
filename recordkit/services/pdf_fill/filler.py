"""Fill PDF form templates from CSV rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

from recordkit.core.errors import DestinationExistsError
from recordkit.core.logger import get_logger
from recordkit.files import Row, ensure_parent, fill_form, read_form_fields, read_table

from .template import resolve_template


@dataclass(frozen=True)
class FilledDocument:
    row_index: int
    source: Path
    destination: Path
    fields: tuple[str, ...]


@dataclass(slots=True)
class FillReport:
    documents: List[FilledDocument] = field(default_factory=list)
    dry_run: bool = False

    @property
    def outputs(self) -> List[Path]:
        return [doc.destination for doc in self.documents]


def field_values_for(form_fields: Iterable[str], row: Mapping[str, str]) -> Dict[str, str]:
    """Values for the fields present both in the document and in the row."""

    return {name: row[name] for name in form_fields if name in row}


def fill_forms(
    rows: Sequence[Row],
    template: str,
    pdf_paths: Sequence[Path],
    *,
    dry_run: bool = False,
) -> FillReport:
    """Write one filled copy of every PDF for every row.

    Destinations come from ``template`` (see :func:`resolve_template`). The run stops
    at the first unresolved placeholder, existing destination or unreadable document.
    With ``dry_run`` the destinations are resolved and checked but nothing is written.
    """

    logger = get_logger("pdf_fill")
    form_fields = {path: list(read_form_fields(path)) for path in pdf_paths}
    report = FillReport(dry_run=dry_run)
    planned: set[Path] = set()

    for index, row in enumerate(rows, start=1):
        for pdf_path in pdf_paths:
            destination = Path(resolve_template(template, row, pdf_path.name))
            if destination.exists() or destination in planned:
                raise DestinationExistsError(destination)
            planned.add(destination)
            values = field_values_for(form_fields[pdf_path], row)

            if dry_run:
                logger.info("Dry run: would write %s from %s (row %d)", destination, pdf_path, index)
            else:
                ensure_parent(destination)
                fill_form(pdf_path, values, destination)
                logger.info("Wrote %s from %s (row %d)", destination, pdf_path, index)
            report.documents.append(
                FilledDocument(
                    row_index=index,
                    source=pdf_path,
                    destination=destination,
                    fields=tuple(values),
                )
            )

    logger.info("Filled %d documents from %d rows", len(report.documents), len(rows))
    return report


def fill_from_csv(
    csv_path: Path,
    template: str,
    pdf_paths: Sequence[Path],
    *,
    dry_run: bool = False,
    encoding: str = "utf-8",
) -> FillReport:
    """Load ``csv_path`` and fill every PDF for each of its rows."""

    table = read_table(csv_path, encoding=encoding)
    return fill_forms(list(table.rows), template, pdf_paths, dry_run=dry_run)
