"""Typer based command line entry points for recordkit."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from recordkit.core.errors import ConfigError, RecordKitError
from recordkit.core.logger import get_logger, reset_logger, set_level
from recordkit.core.settings import get_settings, load_settings, set_settings
from recordkit.files import STDIO_MARKER
from recordkit.services.copy_seq import replicate
from recordkit.services.csv_join import KeySpec, join_files
from recordkit.services.pdf_extract import extract_to_csv, parse_field_list, read_pdf_list
from recordkit.services.pdf_fill import fill_from_csv

app = typer.Typer(help="Command-line utilities for CSV and PDF form records.")


def _abort(exc: RecordKitError) -> NoReturn:
    typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
    # the logger itself depends on valid settings
    if not isinstance(exc, ConfigError):
        get_logger().error("%s", exc)
    raise typer.Exit(code=1) from exc


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Set logging level (e.g. DEBUG/INFO/WARNING).",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="YAML settings file (defaults to $RECORDKIT_CONFIG or ./recordkit.yaml).",
    ),
) -> None:
    """Configure settings and logging before executing commands."""

    if config is not None:
        try:
            set_settings(load_settings(config))
        except RecordKitError as exc:
            _abort(exc)
        reset_logger()
    if log_level is not None:
        try:
            set_level(log_level)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


@app.command("join-csv")
def join_csv(
    file1: Path = typer.Argument(..., help="Left CSV file."),
    file2: Path = typer.Argument(..., help="Right CSV file."),
    keys: str = typer.Argument(..., help="Join columns as <field1>:<field2>."),
    output: Optional[str] = typer.Argument(None, help="Output CSV file, or '-' for stdout (default)."),
) -> None:
    """Full outer join of two CSV files on a case-insensitive key."""

    try:
        key_spec = KeySpec.parse(keys)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="KEYS") from exc

    destination = None if output in (None, STDIO_MARKER) else Path(output)
    try:
        settings = get_settings()
        join_files(file1, file2, key_spec, destination, encoding=settings.encoding)
    except RecordKitError as exc:
        _abort(exc)


@app.command("extract-pdf")
def extract_pdf(
    output: str = typer.Argument(..., help="Output CSV file, or '-' for stdout."),
    fields: str = typer.Argument(..., help="Comma-separated form field names."),
    pdfs: Optional[List[Path]] = typer.Argument(
        None, help="PDF files; read one per line from stdin when omitted or '-'."
    ),
    include_source: bool = typer.Option(False, help="Prepend a 'pdf' column with the file name."),
) -> None:
    """Extract form-field values from PDFs into a CSV file."""

    try:
        field_names = parse_field_list(fields)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="FIELDS") from exc

    if not pdfs or [str(p) for p in pdfs] == [STDIO_MARKER]:
        pdfs = read_pdf_list(sys.stdin)

    destination = None if output == STDIO_MARKER else Path(output)
    try:
        settings = get_settings()
        result = extract_to_csv(
            pdfs,
            field_names,
            destination,
            include_source=include_source,
            encoding=settings.encoding,
        )
    except RecordKitError as exc:
        _abort(exc)
    if result.missing:
        get_logger().warning("%d field values were missing", len(result.missing))


@app.command("copy-seq")
def copy_seq(
    count: int = typer.Argument(..., min=1, help="Number of copies to make of each file."),
    pattern: Optional[str] = typer.Option(None, help="Glob of files to copy (default from settings, '*.pdf')."),
    width: Optional[int] = typer.Option(None, min=1, help="Digits in the sequence suffix (default 3)."),
    directory: Optional[Path] = typer.Option(
        None, file_okay=False, dir_okay=True, help="Directory to work in (default: current)."
    ),
) -> None:
    """Copy every matching file COUNT times as <name>-001.<ext>, <name>-002.<ext>, ..."""

    try:
        settings = get_settings()
        plans = replicate(
            count,
            directory,
            pattern=pattern or settings.copy_pattern,
            width=width or settings.sequence_width,
        )
    except RecordKitError as exc:
        _abort(exc)
    typer.echo(f"Copies made: {len(plans)}")


@app.command("merge-pdf")
def merge_pdf(
    csv_input: Path = typer.Argument(..., help="CSV file with one row per output set."),
    template: str = typer.Argument(..., help="Destination path template, e.g. out/%name%/%pdf%."),
    pdfs: List[Path] = typer.Argument(..., help="PDF form templates to fill."),
    dry_run: bool = typer.Option(False, help="Resolve and check destinations without writing."),
) -> None:
    """Fill PDF form fields from CSV rows into templated destination paths."""

    try:
        settings = get_settings()
        report = fill_from_csv(
            csv_input,
            template,
            pdfs,
            dry_run=dry_run,
            encoding=settings.encoding,
        )
    except RecordKitError as exc:
        _abort(exc)
    for path in report.outputs:
        typer.echo(str(path))
    verb = "Planned" if report.dry_run else "Written"
    typer.echo(f"{verb} documents: {len(report.outputs)}")


def _single(command) -> typer.Typer:  # type: ignore[no-untyped-def]
    standalone = typer.Typer(add_completion=False)
    standalone.command()(command)
    return standalone


join_csv_app = _single(join_csv)
extract_pdf_app = _single(extract_pdf)
copy_seq_app = _single(copy_seq)
merge_pdf_app = _single(merge_pdf)


def main() -> None:
    app()


def join_csv_main() -> None:
    join_csv_app()


def extract_pdf_main() -> None:
    extract_pdf_app()


def copy_seq_main() -> None:
    copy_seq_app()


def merge_pdf_main() -> None:
    merge_pdf_app()


if __name__ == "__main__":
    main()
