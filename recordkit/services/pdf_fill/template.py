"""Destination path templates with ``%column%`` placeholders."""

from __future__ import annotations

import os
import re
from typing import List, Mapping

from recordkit.core.errors import MissingFieldError

PDF_PLACEHOLDER = "pdf"
_PDF_TOKEN = f"%{PDF_PLACEHOLDER}%"
# placeholders never span a path separator
_PLACEHOLDER = re.compile(r"%([^%/\\]+)%")
_SEPARATORS = tuple({"/", os.sep})


def _unique(names: List[str]) -> List[str]:
    return list(dict.fromkeys(names))


def resolve_template(template: str, row: Mapping[str, str], source_filename: str) -> str:
    """Resolve ``template`` for one CSV row and one source PDF.

    ``%pdf%`` stands for ``source_filename``; its extension is kept only when the
    placeholder ends the template. A template naming only a directory (trailing
    separator, no ``%pdf%``) keeps the source file name.

    Raises:
        MissingFieldError: When a placeholder matches neither ``pdf`` nor a row column.
    """

    if _PDF_TOKEN not in template and template.endswith(_SEPARATORS):
        template += _PDF_TOKEN

    pdf_name = os.path.basename(source_filename)
    if not template.endswith(_PDF_TOKEN):
        pdf_name = os.path.splitext(pdf_name)[0]

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name == PDF_PLACEHOLDER:
            return pdf_name
        if name in row:
            return str(row[name])
        return match.group(0)

    resolved = _PLACEHOLDER.sub(_substitute, template)
    unresolved = _unique(_PLACEHOLDER.findall(resolved))
    if unresolved:
        raise MissingFieldError(unresolved, template)
    return resolved


__all__ = ["PDF_PLACEHOLDER", "resolve_template"]
