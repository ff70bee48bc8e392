"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `locate`, `validate` y `doctor`.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Accession
from core.errors import DetectionError
from core.interfaces.locator import Locator


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("SDL-LOCATOR", style="bold cyan")
    subtitle = Text("Cloud locality • SDL validation", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_locality_table(*, locator: Locator, region: str, location: str) -> Table:
    locality = locator.locality()
    locality_type = locator.locality_type()
    if not locality:
        locality_detail = "unavailable"
    elif locality_type.requires_verification:
        locality_detail = f"present ({len(locality)} bytes)"
    else:
        locality_detail = locality

    table = Table(title="Locality")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Cloud", locator.cloud_name)
    table.add_row("Region", region)
    table.add_row("Location", location)
    table.add_row("Locality type", locality_type.value)
    table.add_row("Locality", locality_detail)
    return table


def build_files_table(accessions: Iterable[Accession]) -> Table:
    table = Table(title="SDL Files")
    table.add_column("Accession", style="cyan", no_wrap=True)
    table.add_column("File", style="white")
    table.add_column("Type", style="white")
    table.add_column("Size", style="white", justify="right")
    table.add_column("Service", style="green")
    table.add_column("Region", style="green")
    for accession in accessions:
        for name, file in sorted(accession.files.items()):
            table.add_row(
                accession.id,
                name,
                file.type,
                str(file.size),
                file.service if file.has_location else "-",
                file.region if file.has_location else "-",
            )
    return table


def build_detection_panel(error: DetectionError) -> Panel:
    """Panel con ambas causas para que el operador las distinga."""

    body = Text()
    body.append("Could not detect the cloud provider.\n\n", style="bold")
    body.append("aws: ", style="bold")
    body.append(f"{getattr(error.aws_cause, 'reason', error.aws_cause)}\n")
    body.append("gcp: ", style="bold")
    body.append(f"{getattr(error.gcp_cause, 'reason', error.gcp_cause)}\n")
    body.append("\nUse --location to force a location.", style="dim")
    return Panel(body, title=Text("Detection failed", style="bold red"), border_style="red")
