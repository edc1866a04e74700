from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterator, Mapping

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from recordkit.core import logger as core_logger
from recordkit.core import settings as core_settings


@pytest.fixture(autouse=True)
def _isolated_runtime(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Keep settings and log files in a per-test temporary home."""

    monkeypatch.setenv(core_settings.HOME_ENV, str(tmp_path_factory.mktemp("recordkit-home")))
    monkeypatch.delenv(core_settings.CONFIG_ENV, raising=False)
    core_settings.set_settings(core_settings.Settings())
    core_logger.reset_logger()
    # Bind the console handler now so CLI runners only see command output.
    core_logger.get_logger()
    yield
    core_logger.reset_logger()
    core_settings.set_settings(None)


def _pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", r"\(").replace(")", r"\)")


def build_form_pdf(path: Path, fields: Mapping[str, str], *, with_form: bool = True) -> Path:
    """Write a one-page PDF whose AcroForm holds one text field per ``fields`` entry."""

    names = list(fields)
    widget_ids = [5 + idx for idx in range(len(names))]
    refs = " ".join(f"{oid} 0 R" for oid in widget_ids)

    acro_form = (
        f" /AcroForm << /Fields [{refs}] /DA (/Helv 0 Tf 0 g) /DR << /Font << /Helv 4 0 R >> >> >>"
        if with_form
        else ""
    )
    annots = f" /Annots [{refs}]" if with_form else ""
    objects = [
        f"1 0 obj\n<< /Type /Catalog /Pages 2 0 R{acro_form} >>\nendobj\n",
        "2 0 obj\n<< /Type /Pages /Kids [3 0 R] /Count 1 >>\nendobj\n",
        f"3 0 obj\n<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792]{annots} >>\nendobj\n",
        "4 0 obj\n<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>\nendobj\n",
    ]
    if with_form:
        for idx, (oid, name) in enumerate(zip(widget_ids, names)):
            top = 740 - idx * 30
            objects.append(
                f"{oid} 0 obj\n<< /Type /Annot /Subtype /Widget /FT /Tx /F 4"
                f" /T ({_pdf_text(name)}) /V ({_pdf_text(fields[name])})"
                f" /DA (/Helv 0 Tf 0 g) /Rect [72 {top - 20} 360 {top}] >>\nendobj\n"
            )

    data = bytearray(b"%PDF-1.4\n")
    offsets = []
    for obj in objects:
        offsets.append(len(data))
        data.extend(obj.encode("latin-1"))
    xref_offset = len(data)
    data.extend(f"xref\n0 {len(objects) + 1}\n".encode("ascii"))
    data.extend(b"0000000000 65535 f \n")
    for offset in offsets:
        data.extend(f"{offset:010d} 00000 n \n".encode("ascii"))
    data.extend(f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n".encode("ascii"))
    data.extend(f"startxref\n{xref_offset}\n%%EOF\n".encode("ascii"))

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(bytes(data))
    return path


@pytest.fixture
def form_pdf() -> Callable[..., Path]:
    return build_form_pdf


@pytest.fixture
def write_csv_file() -> Callable[[Path, str], Path]:
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
