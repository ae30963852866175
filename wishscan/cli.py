#!/usr/bin/env python3
"""Command-line interface for wishlist embed scanning."""

import json
from pathlib import Path
from typing import Optional

from openai import OpenAI
from pydantic import ValidationError
import typer

from .classifier import classify
from .config import load_config
from .extractor import extract_report
from .models import Document, LayoutTag
from .ocr import OcrClient
from .sink import JsonLinesSink, emit
from .utils import ScanError, get_logger, iter_json_files, load_embeds, set_log_level

LOGGER = get_logger(__name__)

app = typer.Typer(help="Extract wishlist records from bot embeds.")


def _resolve(path: Path) -> Path:
    target = path.expanduser().resolve()
    if not target.exists():
        raise typer.BadParameter(f"Path not found: {target}", param_name="path")
    return target


def _documents(target: Path):
    for json_path in iter_json_files(target):
        try:
            embeds = load_embeds(json_path)
        except ScanError as exc:
            LOGGER.warning("%s", exc)
            continue
        for index, embed in enumerate(embeds):
            try:
                yield json_path, index, Document.model_validate(embed)
            except ValidationError as exc:
                LOGGER.warning("Embed %s of %s is not usable: %s", index, json_path.name, exc)


@app.command("classify")
def classify_command(
    path: Path = typer.Argument(..., help="JSON file or folder of embed dumps."),
) -> None:
    """Print the layout of every embed."""

    set_log_level(load_config().log_level)
    for json_path, index, document in _documents(_resolve(path)):
        typer.echo(f"{json_path.name}#{index}: {classify(document).value}")


@app.command("scan")
def scan_command(
    path: Path = typer.Argument(..., help="JSON file or folder of embed dumps."),
    out_dir: Optional[Path] = typer.Option(
        None,
        "--out-dir",
        help="Directory for the .jsonl record files (default: $WISHSCAN_OUT_DIR or ./output).",
    ),
    print_json: bool = typer.Option(
        False, "--print", help="Print each record as JSON.", show_default=False
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Extract without writing any files.", show_default=False
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.", show_default=False),
) -> None:
    """Classify every embed and write the extracted records."""

    config = load_config(out_dir=str(out_dir) if out_dir else None)
    set_log_level("DEBUG" if verbose else config.log_level)

    target = _resolve(path)
    sink = None if dry_run else JsonLinesSink(config.out_dir)

    total = skipped = 0
    for json_path, index, document in _documents(target):
        tag = classify(document)
        if tag is LayoutTag.NO_MATCH:
            LOGGER.debug("%s#%s: no known layout", json_path.name, index)
            continue

        report = extract_report(document, tag)
        skipped += len(report.diagnostics)

        if print_json or dry_run:
            for record in report.records:
                payload = {"kind": type(record).__name__, **record.model_dump()}
                typer.echo(json.dumps(payload, ensure_ascii=False))

        if sink is not None:
            emit(report.records, sink)
        total += len(report.records)
        typer.echo(f"{json_path.name}#{index}: {tag.value}, {len(report.records)} records")

    typer.echo(f"Extracted {total} records ({skipped} rows skipped).")
    if dry_run:
        typer.echo("Dry run enabled, nothing written.")
    elif sink is not None:
        typer.echo(f"Records written to {sink.output_dir}")


@app.command("drop")
def drop_command(
    source: str = typer.Argument(..., help="Drop image URL or local image file."),
    model: Optional[str] = typer.Option(None, "--model", help="OpenAI model to use."),
) -> None:
    """Read the cards of a drop image."""

    config = load_config(ocr_model=model)
    set_log_level(config.log_level)
    if not config.openai_api_key:
        typer.echo("OPENAI_API_KEY is not set.")
        raise typer.Exit(code=1)

    reader = OcrClient(OpenAI(api_key=config.openai_api_key), model=config.ocr_model)
    try:
        cards = reader.read_drop(source)
    except Exception as exc:
        typer.echo(f"ERROR while reading {source}: {exc}")
        raise typer.Exit(code=1)
    typer.echo(json.dumps([card.model_dump() for card in cards], indent=2, ensure_ascii=False))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
