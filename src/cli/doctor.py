"""Doctor command for environment diagnostics."""

from __future__ import annotations

from collections.abc import Callable

import typer
from rich.console import Console
from rich.table import Table

from adapters.locators import (
    resolve_aws_region,
    resolve_gcp_zone,
    retrieve_aws_pkcs7,
    retrieve_gcp_instance_token,
)
from core.config import AppSettings
from core.errors import ProbeError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_probe(probe: Callable[..., str], settings: AppSettings) -> tuple[bool, str]:
    try:
        value = probe(settings=settings)
    except ProbeError as exc:
        return False, exc.reason
    if len(value) > 40:
        return True, f"{len(value)} bytes"
    return True, value


@app.command()
def run() -> None:
    """Run each metadata probe independently and show the outcome."""

    settings = AppSettings()

    table = Table(title="SDL-Locator Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("SDL version", "OK", settings.sdl_version)
    if settings.location:
        table.add_row("Location", "FORCED", settings.location)
    else:
        table.add_row("Location", "AUTO", "detected from metadata services")
    table.add_row(
        "Probe timeouts",
        "OK",
        f"connect {settings.probe_connect_timeout_seconds}s, read {settings.probe_read_timeout_seconds}s",
    )

    probes: list[tuple[str, Callable[..., str]]] = [
        ("AWS region", resolve_aws_region),
        ("AWS signature", retrieve_aws_pkcs7),
        ("GCP zone", resolve_gcp_zone),
        ("GCP token", retrieve_gcp_instance_token),
    ]
    for label, probe in probes:
        ok, detail = _check_probe(probe, settings)
        table.add_row(label, "OK" if ok else "FAIL", detail)

    _console.print(table)
