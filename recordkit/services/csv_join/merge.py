"""Case-insensitive full outer join of two CSV tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, TextIO, Tuple

from recordkit.core.errors import DuplicateKeyError
from recordkit.core.logger import get_logger
from recordkit.files import Row, Table, read_table, write_csv


@dataclass(frozen=True)
class KeySpec:
    """Join column on each side, parsed from ``<field1>:<field2>``."""

    left: str
    right: str

    @classmethod
    def parse(cls, text: str) -> "KeySpec":
        left, sep, right = text.partition(":")
        if not sep or ":" in right or not left.strip() or not right.strip():
            raise ValueError(f"Join key must look like <field1>:<field2>, got {text!r}")
        return cls(left=left.strip(), right=right.strip())


@dataclass(slots=True)
class JoinResult:
    """Merged header and rows, plus match statistics."""

    columns: Tuple[str, ...]
    rows: List[Tuple[str, ...]] = field(default_factory=list)
    matched: int = 0
    left_only: int = 0
    right_only: int = 0


def _join_key(row: Row, column: str) -> str:
    return row[column].lower()


def _sorted_rows(table: Table, column: str) -> List[Row]:
    table.require_column(column)
    ordered = sorted(table.rows, key=lambda row: _join_key(row, column))
    for previous, current in zip(ordered, ordered[1:]):
        if _join_key(previous, column) == _join_key(current, column):
            raise DuplicateKeyError(table.source, column, current[column])
    return ordered


def _values(row: Row, columns: Sequence[str]) -> Tuple[str, ...]:
    return tuple(row[column] for column in columns)


def outer_join(left: Table, right: Table, left_key: str, right_key: str) -> JoinResult:
    """Join ``left`` and ``right`` on lower-cased key values, keeping unmatched rows.

    Matched rows come first in key order, followed by unmatched left rows and then
    unmatched right rows; the missing side of an unmatched row is filled with empty
    strings. The input tables are not modified.

    Raises:
        SchemaError: When a key column is missing from its table.
        DuplicateKeyError: When a key value occurs twice within one table.
    """

    left_rows = _sorted_rows(left, left_key)
    right_rows = _sorted_rows(right, right_key)
    left_blank = ("",) * len(left.columns)
    right_blank = ("",) * len(right.columns)

    result = JoinResult(columns=left.columns + right.columns)
    left_unmatched: List[Row] = []
    right_unmatched: List[Row] = []

    i = j = 0
    while i < len(left_rows) or j < len(right_rows):
        if j >= len(right_rows):
            left_unmatched.append(left_rows[i])
            i += 1
            continue
        if i >= len(left_rows):
            right_unmatched.append(right_rows[j])
            j += 1
            continue

        left_value = _join_key(left_rows[i], left_key)
        right_value = _join_key(right_rows[j], right_key)
        if left_value == right_value:
            result.rows.append(
                _values(left_rows[i], left.columns) + _values(right_rows[j], right.columns)
            )
            result.matched += 1
            i += 1
            j += 1
        elif left_value < right_value:
            left_unmatched.append(left_rows[i])
            i += 1
        else:
            right_unmatched.append(right_rows[j])
            j += 1

    for row in left_unmatched:
        result.rows.append(_values(row, left.columns) + right_blank)
    for row in right_unmatched:
        result.rows.append(left_blank + _values(row, right.columns))
    result.left_only = len(left_unmatched)
    result.right_only = len(right_unmatched)
    return result


def join_files(
    left_path: Path,
    right_path: Path,
    key_spec: KeySpec,
    output: Path | TextIO | str | None = None,
    *,
    encoding: str = "utf-8",
) -> JoinResult:
    """Read two CSV files, join them and write the merged table to ``output``."""

    logger = get_logger("csv_join")
    left = read_table(left_path, encoding=encoding)
    right = read_table(right_path, encoding=encoding)
    logger.info(
        "Joining %s (%d rows) with %s (%d rows) on %s:%s",
        left_path,
        len(left),
        right_path,
        len(right),
        key_spec.left,
        key_spec.right,
    )

    result = outer_join(left, right, key_spec.left, key_spec.right)
    write_csv(result.columns, result.rows, output, encoding=encoding)
    logger.info(
        "Join finished: matched=%d left_only=%d right_only=%d",
        result.matched,
        result.left_only,
        result.right_only,
    )
    return result
