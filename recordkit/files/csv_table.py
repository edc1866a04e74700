"""CSV input/output helpers."""

# Module responsibilities:
# - Load CSV tables with every cell kept as a string and the header order intact.
# - Write tables with RFC-4180 quoting and a single linefeed row terminator.
# - Translate pandas/OS failures into the recordkit error taxonomy.

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Sequence, TextIO, Tuple

import pandas as pd

from recordkit.core.errors import FormatError, RecordIOError, SchemaError
from recordkit.core.logger import get_logger

Row = Dict[str, str]

STDIO_MARKER = "-"


@dataclass(frozen=True)
class Table:
    """Header plus rows loaded from a CSV file."""

    columns: Tuple[str, ...]
    rows: Tuple[Row, ...]
    source: str = "<memory>"

    def __len__(self) -> int:
        return len(self.rows)

    def require_column(self, name: str) -> None:
        """Raise ``SchemaError`` unless ``name`` is part of the header."""

        if name not in self.columns:
            raise SchemaError(
                f"Column {name!r} not found in {self.source} (columns: {', '.join(self.columns)})"
            )


def read_table(path: Path, encoding: str = "utf-8") -> Table:
    """Load a CSV file into a :class:`Table`.

    Args:
        path: CSV file with a mandatory header row.
        encoding: Text encoding of the file.

    Returns:
        Table whose rows map every header column to a string (empty cells are ``""``).

    Raises:
        RecordIOError: When the file is missing or unreadable.
        FormatError: When the file has no header or cannot be parsed.
    """

    logger = get_logger("csv_table")
    if not path.exists():
        raise RecordIOError(f"CSV file not found: {path}")

    try:
        frame = pd.read_csv(path, dtype=str, keep_default_na=False, encoding=encoding)
    except pd.errors.EmptyDataError as exc:
        raise FormatError(f"CSV file has no header row: {path}") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise FormatError(f"Failed to parse CSV {path}: {exc}") from exc
    except OSError as exc:
        raise RecordIOError(f"Failed to read CSV {path}: {exc}") from exc

    columns = tuple(str(col) for col in frame.columns)
    rows = tuple(
        {column: value for column, value in zip(columns, record)}
        for record in frame.itertuples(index=False, name=None)
    )
    logger.debug("CSV loaded path=%s rows=%d columns=%s", path, len(rows), list(columns))
    return Table(columns=columns, rows=rows, source=str(path))


def write_csv(
    columns: Sequence[str],
    rows: Iterable[Sequence[str]],
    destination: Path | TextIO | str | None,
    encoding: str = "utf-8",
) -> None:
    """Write a header and positional rows as CSV.

    ``destination`` may be a path, an open text stream, or ``None``/``"-"`` for stdout.
    Duplicate header names are written as given.
    """

    logger = get_logger("csv_table")
    records = [list(row) for row in rows]
    for index, record in enumerate(records):
        if len(record) != len(columns):
            raise SchemaError(
                f"Row {index + 1} has {len(record)} values but the header has {len(columns)} columns"
            )
    frame = pd.DataFrame(records, columns=list(columns), dtype=object)

    if destination is None or (isinstance(destination, str) and destination == STDIO_MARKER):
        frame.to_csv(sys.stdout, index=False, lineterminator="\n")
        logger.debug("CSV written to stdout rows=%d", len(frame.index))
        return
    if not isinstance(destination, (str, Path)):
        frame.to_csv(destination, index=False, lineterminator="\n")
        return

    target = Path(destination)
    try:
        frame.to_csv(target, index=False, lineterminator="\n", encoding=encoding)
    except OSError as exc:
        raise RecordIOError(f"Failed to write CSV {target}: {exc}") from exc
    logger.info("CSV written path=%s rows=%d", target, len(frame.index))
