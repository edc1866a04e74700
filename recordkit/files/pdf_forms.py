"""PDF form-field read/write utilities."""

# Module responsibilities:
# - Read the interactive form fields of a PDF as a name -> string mapping.
# - Write a filled copy of a PDF that keeps the source catalog (and its field order).
# - Guard against encrypted, malformed or form-less PDFs with explicit failures.

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping

from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError
from PyPDF2.generic import NameObject

from recordkit.core.errors import DestinationExistsError, FormatError, RecordIOError
from recordkit.core.logger import get_logger


def _open_reader(path: Path) -> PdfReader:
    if not path.exists():
        raise RecordIOError(f"PDF file not found: {path}")
    try:
        reader = PdfReader(path)
    except PdfReadError as exc:
        raise FormatError(f"Failed to open PDF {path}: {exc}") from exc
    except OSError as exc:
        raise RecordIOError(f"Failed to read PDF {path}: {exc}") from exc
    if reader.is_encrypted:
        raise FormatError(f"Encrypted PDFs are not supported: {path}")
    return reader


def _field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, NameObject):
        # checkbox/radio states are stored as names, e.g. /Yes
        return str(value).lstrip("/")
    if isinstance(value, list):
        return ",".join(_field_text(item) for item in value)
    return str(value)


def _form_fields(reader: PdfReader, path: Path) -> Dict[str, Any]:
    try:
        fields = reader.get_fields()
    except PdfReadError as exc:
        raise FormatError(f"Failed to read form fields of {path}: {exc}") from exc
    if fields is None:
        raise FormatError(f"PDF has no interactive form: {path}")
    return fields


def read_form_fields(path: Path) -> Dict[str, str]:
    """Return the current value of every form field, keyed by field name.

    Raises:
        RecordIOError: When the file is missing or unreadable.
        FormatError: When the file is not a valid, unencrypted PDF with a form.
    """

    logger = get_logger("pdf_forms")
    reader = _open_reader(path)
    fields = _form_fields(reader, path)
    values = {name: _field_text(field.get("/V")) for name, field in fields.items()}
    logger.debug("PDF form read path=%s fields=%d", path, len(values))
    return values


def fill_form(source: Path, values: Mapping[str, str], destination: Path) -> Path:
    """Write a copy of ``source`` with ``values`` set on the matching form fields.

    The destination is opened in exclusive mode; an existing file is never replaced.
    """

    logger = get_logger("pdf_forms")
    reader = _open_reader(source)
    _form_fields(reader, source)

    writer = PdfWriter()
    writer.append_pages_from_reader(reader)
    # keep the source AcroForm so the field tree and its order survive
    writer._root_object.update(
        {NameObject("/AcroForm"): reader.trailer["/Root"]["/AcroForm"]}
    )
    text_values = {name: str(value) for name, value in values.items()}
    if text_values:
        for page in writer.pages:
            if "/Annots" in page:
                writer.update_page_form_field_values(page, text_values)

    try:
        with destination.open("xb") as fh:
            writer.write(fh)
    except FileExistsError as exc:
        raise DestinationExistsError(destination) from exc
    except OSError as exc:
        raise RecordIOError(f"Failed to write PDF {destination}: {exc}") from exc

    logger.debug(
        "PDF form written source=%s output=%s fields=%s",
        source,
        destination,
        sorted(text_values),
    )
    return destination
