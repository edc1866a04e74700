"""
RESPONSIBILITIES
- Copy every matching file N times with a zero-padded sequence suffix.
- Keep planning (pure) separate from copying (filesystem).
PROCESS OVERVIEW
1. find_sources() snapshots the matching files before any copy is made.
2. plan_copies() builds <stem>-<seq><suffix> names, sequence-major.
3. replicate() performs the copies and stops at the first failure.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from recordkit.core.errors import RecordIOError
from recordkit.core.logger import get_logger


@dataclass(frozen=True)
class CopyPlan:
    source: Path
    destination: Path
    sequence: int


def sequence_name(path: Path, sequence: int, width: int = 3) -> Path:
    """Return ``path`` renamed to ``<stem>-<seq><suffix>`` in the same directory."""

    return path.with_name(f"{path.stem}-{sequence:0{width}d}{path.suffix}")


def find_sources(directory: Path, pattern: str) -> List[Path]:
    return sorted(path for path in directory.glob(pattern) if path.is_file())


def plan_copies(files: Sequence[Path], count: int, width: int = 3) -> List[CopyPlan]:
    if count < 1:
        raise ValueError(f"Copy count must be a positive integer, got {count}")
    if width < 1:
        raise ValueError(f"Sequence width must be at least 1, got {width}")
    return [
        CopyPlan(source=path, destination=sequence_name(path, seq, width), sequence=seq)
        for seq in range(1, count + 1)
        for path in files
    ]


def replicate(
    count: int,
    directory: Path | None = None,
    *,
    pattern: str = "*.pdf",
    width: int = 3,
) -> List[CopyPlan]:
    """Copy every file matching ``pattern`` in ``directory`` ``count`` times.

    Copies already made are kept when a later copy fails.
    """

    logger = get_logger("copy_seq")
    base = directory or Path.cwd()
    sources = find_sources(base, pattern)
    plans = plan_copies(sources, count, width)
    if not sources:
        logger.warning("No files matching %r in %s", pattern, base)
        return plans

    for plan in plans:
        logger.info("copy %s -> %s", plan.source, plan.destination)
        try:
            shutil.copyfile(plan.source, plan.destination)
        except OSError as exc:
            raise RecordIOError(
                f"Error copying {plan.source} to {plan.destination}: {exc}"
            ) from exc

    logger.info("Made %d copies of %d files", len(plans), len(sources))
    return plans
