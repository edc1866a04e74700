from __future__ import annotations

from pathlib import Path

import pytest

from recordkit.core.errors import RecordIOError
from recordkit.services.copy_seq import plan_copies, replicate, sequence_name
from recordkit.services.copy_seq import replicator


def test_three_copies(tmp_path: Path) -> None:
    (tmp_path / "a.pdf").write_bytes(b"A")

    plans = replicate(3, tmp_path)

    assert [plan.destination.name for plan in plans] == ["a-001.pdf", "a-002.pdf", "a-003.pdf"]
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "a-001.pdf",
        "a-002.pdf",
        "a-003.pdf",
        "a.pdf",
    ]
    assert (tmp_path / "a-002.pdf").read_bytes() == b"A"


def test_order_is_sequence_major(tmp_path: Path) -> None:
    files = [tmp_path / "a.pdf", tmp_path / "b.pdf"]
    names = [plan.destination.name for plan in plan_copies(files, 2)]
    assert names == ["a-001.pdf", "b-001.pdf", "a-002.pdf", "b-002.pdf"]


def test_pattern_filters_files(tmp_path: Path) -> None:
    (tmp_path / "a.pdf").write_bytes(b"A")
    (tmp_path / "notes.txt").write_text("n")

    plans = replicate(1, tmp_path)

    assert [plan.source.name for plan in plans] == ["a.pdf"]
    assert not (tmp_path / "notes-001.txt").exists()


def test_no_matching_files(tmp_path: Path) -> None:
    assert replicate(2, tmp_path) == []


@pytest.mark.parametrize(
    ("name", "expected"),
    [("report.pdf", "report-007.pdf"), ("archive.tar.gz", "archive.tar-007.gz"), ("README", "README-007")],
)
def test_sequence_name(name: str, expected: str) -> None:
    assert sequence_name(Path(name), 7).name == expected


def test_width_and_count_validation(tmp_path: Path) -> None:
    assert sequence_name(Path("a.pdf"), 12, width=4).name == "a-0012.pdf"
    with pytest.raises(ValueError):
        plan_copies([tmp_path / "a.pdf"], 0)


def test_copy_failure_stops_run(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "a.pdf").write_bytes(b"A")
    calls: list[Path] = []

    def fake_copy(src: Path, dst: Path) -> None:
        calls.append(dst)
        if len(calls) == 2:
            raise PermissionError("read-only")
        Path(dst).write_bytes(Path(src).read_bytes())

    monkeypatch.setattr(replicator.shutil, "copyfile", fake_copy)

    with pytest.raises(RecordIOError, match="a-002.pdf"):
        replicate(3, tmp_path)
    assert (tmp_path / "a-001.pdf").exists()
    assert len(calls) == 2
