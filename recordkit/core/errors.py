"""Custom exceptions used across recordkit."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class RecordKitError(Exception):
    """Base error for the application."""


class ConfigError(RecordKitError):
    """Configuration related error."""


class RecordIOError(RecordKitError):
    """Raised when a file cannot be opened, read or written."""


class SchemaError(RecordKitError):
    """Raised when a required column or key is missing from a table."""


class DuplicateKeyError(SchemaError):
    """Raised when a join column holds the same key more than once."""

    def __init__(self, table: str, column: str, value: str) -> None:
        super().__init__(f"Duplicate value {value!r} in join column {column!r} of {table}")
        self.table = table
        self.column = column
        self.value = value


class FormatError(RecordKitError):
    """Raised when a CSV or PDF document cannot be parsed."""


class MissingFieldError(RecordKitError):
    """Raised when a path template references fields the row does not have."""

    def __init__(self, names: Iterable[str], template: str = "") -> None:
        self.names = list(names)
        self.template = template
        message = f"Unresolved template fields: {', '.join(self.names)}"
        if template:
            message += f" (template: {template})"
        super().__init__(message)


class DestinationExistsError(RecordKitError):
    """Raised when an output file is already present."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Destination already exists, refusing to overwrite: {path}")
        self.path = path
