"""Typer based command line entry points for sheetmapper."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from sheetmapper.codecs import read_csv_sheet, read_workbook, write_csv_sheet, write_workbook
from sheetmapper.composer import SheetComposer, WorkbookComposer
from sheetmapper.errors import ConfigurationError, SheetMapperError
from sheetmapper.meta import SheetMeta
from sheetmapper.meta_loader import load_sheet_metas
from sheetmapper.model import Workbook
from sheetmapper.processor import ParseResult, SheetProcessor, WorkbookProcessor
from sheetmapper.utils.log import get_logger, set_level
from sheetmapper.utils.paths import prepare_output_path

app = typer.Typer(help="Map spreadsheets to records using declarative column metadata.")
logger = get_logger("cli")

CSV_SUFFIXES = {".csv"}


def _is_csv(path: Path) -> bool:
    return path.suffix.lower() in CSV_SUFFIXES


def _load_input(path: Path, metas: List[SheetMeta]) -> Workbook:
    if not _is_csv(path):
        return read_workbook(path)
    if len(metas) != 1:
        raise ConfigurationError("CSV input needs metadata describing exactly one sheet")
    workbook = Workbook()
    workbook.add_sheet(read_csv_sheet(path, sheet_index=metas[0].sheet_index))
    return workbook


def _parse(
    meta_path: Path, input_path: Path, strict_booleans: Optional[bool] = None
) -> List[ParseResult]:
    metas = load_sheet_metas(meta_path)
    workbook = _load_input(input_path, metas)
    processors = [SheetProcessor(meta, strict_booleans=strict_booleans) for meta in metas]
    return WorkbookProcessor(processors).process(workbook)


def _fail(exc: Exception) -> None:
    logger.error("Command failed", extra={"error": str(exc)})
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=2)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    try:
        set_level(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


@app.command("template")
def template_command(
    meta: Path = typer.Option(..., exists=True, dir_okay=False, help="Metadata YAML file."),
    out: Optional[Path] = typer.Option(
        None, help="Output .xlsx or .csv file; defaults to <home>/out/<meta name>.xlsx."
    ),
) -> None:
    """Write a header-only spreadsheet for the given metadata."""

    try:
        if out is None:
            out = prepare_output_path(f"{meta.stem}.xlsx")
        metas = load_sheet_metas(meta)
        if _is_csv(out):
            if len(metas) != 1:
                raise ConfigurationError("CSV output needs metadata describing exactly one sheet")
            write_csv_sheet(SheetComposer(metas[0]).compose(), out)
        else:
            workbook = WorkbookComposer(SheetComposer(item) for item in metas).compose()
            write_workbook(workbook, out)
    except (SheetMapperError, FileNotFoundError) as exc:
        _fail(exc)
    typer.echo(f"Template written: {out}")


@app.command("validate")
def validate_command(
    meta: Path = typer.Option(..., exists=True, dir_okay=False, help="Metadata YAML file."),
    input_path: Path = typer.Option(..., "--input", exists=True, dir_okay=False, help="Spreadsheet to check."),
    lenient_booleans: Optional[bool] = typer.Option(
        None,
        "--lenient-booleans/--strict-booleans",
        help="Read unknown boolean tokens as false; defaults to SHEETMAPPER_STRICT_BOOLEANS.",
    ),
) -> None:
    """Parse a spreadsheet and report every cell that fails coercion."""

    try:
        strict = None if lenient_booleans is None else not lenient_booleans
        results = _parse(meta, input_path, strict_booleans=strict)
    except (SheetMapperError, FileNotFoundError) as exc:
        _fail(exc)

    total_errors = 0
    for result in results:
        typer.echo(
            f"sheet {result.sheet_index}: {len(result.objects)} rows, {len(result.errors)} errors"
        )
        for error in result.errors:
            typer.echo(f"  {error}")
        total_errors += len(result.errors)
    if total_errors:
        raise typer.Exit(code=1)


@app.command("dump")
def dump_command(
    meta: Path = typer.Option(..., exists=True, dir_okay=False, help="Metadata YAML file."),
    input_path: Path = typer.Option(..., "--input", exists=True, dir_okay=False, help="Spreadsheet to read."),
) -> None:
    """Print parsed rows as JSON lines, one object per data row.

    Each line is ``{"sheet": <index>, "record": {...}}``. Cells that fail coercion
    are left unset and counted on stderr.
    """

    try:
        results = _parse(meta, input_path)
    except (SheetMapperError, FileNotFoundError) as exc:
        _fail(exc)

    for result in results:
        for obj in result.objects:
            line = {"sheet": result.sheet_index, "record": obj}
            typer.echo(json.dumps(line, default=str, ensure_ascii=False))
        if result.errors:
            typer.echo(
                f"sheet {result.sheet_index}: {len(result.errors)} cells failed coercion; "
                "run validate for details",
                err=True,
            )


if __name__ == "__main__":
    app()
