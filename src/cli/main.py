"""CLI principal (Typer).

Comandos:
- `locate`: detecta (o fuerza) la ubicación y la muestra.
- `validate`: valida una respuesta SDL guardada en disco.
- `doctor`: diagnóstico de las sondas de metadata.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.json_exporter import export_accessions_json, export_error_json
from cli import doctor
from cli.ui_components import (
    build_detection_panel,
    build_files_table,
    build_locality_table,
    print_banner,
)
from core.config import AppSettings
from core.errors import DetectionError, LocatorError
from core.services.locality_resolver import generate_locator, traditional_location
from core.services.sdl_pipeline import load_accessions

app = typer.Typer(no_args_is_help=True, help="Cloud locality detection and SDL response validation.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log probes and validation at DEBUG level."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def locate(
    location: str | None = typer.Option(
        None,
        "--location",
        "-l",
        help="Force a location (e.g. 'ncbi' or 's3.us-east-1') instead of detecting it.",
    ),
    banner: bool = typer.Option(False, "--banner", help="Show the banner."),
) -> None:
    """Resolve where this process is running."""

    settings = AppSettings()
    if location:
        settings = settings.model_copy(update={"location": location})

    if banner:
        print_banner(_console)

    try:
        locator = generate_locator(settings)
        region = locator.region()
        full_location = traditional_location(locator, region=region)
    except DetectionError as exc:
        _console.print(build_detection_panel(exc))
        raise typer.Exit(code=1)
    except LocatorError as exc:
        _console.print(f"[red]{exc.code}[/red] {escape(exc.message)}")
        raise typer.Exit(code=1)

    _console.print(build_locality_table(locator=locator, region=region, location=full_location))


@app.command()
def validate(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="SDL response (JSON)."),
    accession: list[str] = typer.Option(
        ...,
        "--accession",
        "-a",
        help="Requested accession (repeatable).",
    ),
    json_out: Path | None = typer.Option(None, "--json-out", help="Write the accepted accessions, or the rejection, as JSON."),
) -> None:
    """Validate an SDL response against the requested accessions."""

    settings = AppSettings()
    requested = {a.strip() for a in accession if a.strip()}

    try:
        accessions = load_accessions(path.read_bytes(), requested=requested, settings=settings)
    except LocatorError as exc:
        _console.print(f"[red]{exc.code}[/red] {escape(exc.message)}")
        if json_out:
            export_error_json(error=exc, output_path=json_out)
        raise typer.Exit(code=1)

    _console.print(build_files_table(accessions))
    if json_out:
        out = export_accessions_json(accessions=accessions, output_path=json_out)
        _console.print(f"[green]Saved JSON to:[/green] {out}")


def run() -> None:
    app()
