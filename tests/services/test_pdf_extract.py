from __future__ import annotations

import io
from pathlib import Path

import pytest

pytest.importorskip("PyPDF2")

from recordkit.core.errors import FormatError, RecordIOError
from recordkit.services.pdf_extract import (
    extract_fields,
    extract_to_csv,
    parse_field_list,
    read_pdf_list,
)


def test_rows_follow_document_and_field_order(tmp_path: Path, form_pdf) -> None:
    first = form_pdf(tmp_path / "a.pdf", {"name": "Ada", "grade": "A", "extra": "x"})
    second = form_pdf(tmp_path / "b.pdf", {"grade": "B", "name": "Bob"})

    result = extract_fields([first, second], ["grade", "name"])

    assert result.columns == ("grade", "name")
    assert result.rows == [("A", "Ada"), ("B", "Bob")]
    assert result.missing == []


def test_missing_field_leaves_empty_value(tmp_path: Path, form_pdf) -> None:
    pdf = form_pdf(tmp_path / "a.pdf", {"name": "Ada"})

    result = extract_fields([pdf], ["name", "grade"], include_source=True)

    assert result.columns == ("pdf", "name", "grade")
    assert result.rows == [(str(pdf), "Ada", "")]
    assert result.missing == [(str(pdf), "grade")]


def test_unreadable_document_is_fatal(tmp_path: Path, form_pdf) -> None:
    good = form_pdf(tmp_path / "a.pdf", {"name": "Ada"})
    plain = form_pdf(tmp_path / "plain.pdf", {}, with_form=False)

    with pytest.raises(RecordIOError):
        extract_fields([good, tmp_path / "gone.pdf"], ["name"])
    with pytest.raises(FormatError):
        extract_fields([good, plain], ["name"])


def test_extract_to_csv(tmp_path: Path, form_pdf) -> None:
    pdf = form_pdf(tmp_path / "a.pdf", {"name": "Ada, L.", "grade": "A"})
    out = tmp_path / "fields.csv"

    extract_to_csv([pdf], ["name", "grade"], out)

    assert out.read_text(encoding="utf-8") == 'name,grade\n"Ada, L.",A\n'


def test_parse_field_list() -> None:
    assert parse_field_list(" name, grade,,id ") == ["name", "grade", "id"]
    with pytest.raises(ValueError):
        parse_field_list(" , ")


def test_read_pdf_list() -> None:
    stream = io.StringIO("a.pdf\n\n  dir/b.pdf  \n")
    assert read_pdf_list(stream) == [Path("a.pdf"), Path("dir/b.pdf")]
