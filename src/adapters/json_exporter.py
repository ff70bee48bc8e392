"""Exportación JSON de las accesiones validadas.

Por qué JSON:
- Interoperabilidad con el sistema de ficheros y otras herramientas.
- Deja constancia de qué enlaces entregó el SDL para cada fichero.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from core.domain.models import Accession
from core.errors import LocatorError


def export_accessions_json(*, accessions: Iterable[Accession], output_path: Path) -> Path:
    """Exporta las accesiones a JSON UTF-8 con formato estable (indexado por id)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {accession.id: accession.model_dump(mode="json") for accession in accessions}
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path


def export_error_json(*, error: LocatorError, output_path: Path) -> Path:
    """Deja el motivo del rechazo en el mismo fichero que tendría las accesiones."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps({"error": error.to_dict()}, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
