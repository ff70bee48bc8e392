"""SDL response validation and transfiguration.

The pipeline is the top-level caller of the record validators: it owns the
duplicate-tracking set for exactly one envelope, runs the validators
top-down, aborts on the first failure and only then transfigures. There is no
partial acceptance of a batch.
"""

from __future__ import annotations

import logging
from collections.abc import Container, Mapping
from typing import Any

from adapters.sdl import SdlResponse, parse_response
from core.config import AppSettings
from core.domain.models import Accession
from core.errors import SdlValidationError

logger = logging.getLogger(__name__)


def verify_response(
    envelope: SdlResponse,
    *,
    requested: Container[str],
    expected_version: str,
) -> None:
    """Validate the envelope and every accession it carries."""

    seen: set[str] = set()
    try:
        envelope.verify(expected_version)
        for accession in envelope.results:
            accession.verify(requested, seen)
    except SdlValidationError as exc:
        logger.warning("Rejected SDL response: %s", exc)
        raise


def transfigure_response(
    envelope: SdlResponse,
    *,
    requested: Container[str],
    expected_version: str,
) -> list[Accession]:
    verify_response(envelope, requested=requested, expected_version=expected_version)
    accessions = [record.transfigure() for record in envelope.results]
    logger.info(
        "Accepted SDL v%s response: %d accession(s), %d file(s)",
        envelope.version,
        len(accessions),
        sum(len(a.files) for a in accessions),
    )
    return accessions


def load_accessions(
    raw: bytes | str | Mapping[str, Any],
    *,
    requested: Container[str],
    settings: AppSettings | None = None,
) -> list[Accession]:
    """Decode a raw SDL body and return the validated domain accessions."""

    settings = settings or AppSettings()
    envelope = parse_response(raw)
    return transfigure_response(envelope, requested=requested, expected_version=settings.sdl_version)
