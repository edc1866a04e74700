"""Filesystem helpers for output locations."""

from __future__ import annotations

from pathlib import Path

from recordkit.core.errors import RecordIOError


def ensure_parent(path: Path) -> Path:
    """Create the missing parent directories of ``path`` and return it.

    Raises:
        RecordIOError: When a parent directory cannot be created.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RecordIOError(f"Cannot create directory {path.parent}: {exc}") from exc
    return path
