"""Localizador: GCP (servidor de metadata de Compute Engine).

Implementación:
- La zona llega como string JSON `projects/<id>/zones/<zona>`; la región es el
  último segmento.
- La localidad es un JWT de identidad de instancia con audience fija.

Notas:
- Todas las peticiones requieren la cabecera `Metadata-Flavor: Google`.
- Si el token falla, `locality()` devuelve "" y el localizador sigue siendo
  válido.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath

import httpx
from pydantic import TypeAdapter, ValidationError

from adapters.http_client import build_metadata_client
from core.config import AppSettings
from core.domain.locality import CloudName, LocalityType
from core.errors import ProbeError

logger = logging.getLogger(__name__)

ZONE_URL = "http://metadata.google.internal/computeMetadata/v1/instance/zone?alt=json"
IDENTITY_TOKEN_URL = "http://metadata/computeMetadata/v1/instance/service-accounts/default/identity"
METADATA_HEADERS = {"Metadata-Flavor": "Google"}

_PROVIDER = "gcp"
_zone_payload = TypeAdapter(str)


def _get(
    url: str,
    *,
    settings: AppSettings,
    transport: httpx.BaseTransport | None,
    params: dict[str, str] | None = None,
) -> httpx.Response:
    try:
        with build_metadata_client(settings, extra_headers=METADATA_HEADERS, transport=transport) as client:
            return client.get(url, params=params)
    except httpx.HTTPError as exc:
        raise ProbeError(
            _PROVIDER,
            f"could not reach the metadata server, this only works on a google instance: {exc}",
        ) from exc


def zone_from_payload(payload: str) -> str:
    """`projects/123/zones/us-central1-a` -> `us-central1-a`."""

    zone = PurePosixPath(payload).name
    if len(zone) <= 1:
        raise ProbeError(_PROVIDER, "issue trying to resolve region, google returned empty region")
    return zone


def resolve_gcp_zone(
    *,
    settings: AppSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> str:
    settings = settings or AppSettings()
    resp = _get(ZONE_URL, settings=settings, transport=transport)
    if resp.status_code != 200:
        raise ProbeError(
            _PROVIDER,
            f"issue trying to resolve region, got: {resp.status_code}: {resp.reason_phrase}",
        )

    try:
        payload = _zone_payload.validate_json(resp.content)
    except ValidationError as exc:
        raise ProbeError(_PROVIDER, "issue trying to resolve region, couldn't decode response from google") from exc
    return zone_from_payload(payload)


def retrieve_gcp_instance_token(
    *,
    settings: AppSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> str:
    settings = settings or AppSettings()
    params = {"audience": settings.gcp_token_audience, "format": "full"}
    resp = _get(IDENTITY_TOKEN_URL, settings=settings, transport=transport, params=params)
    if resp.status_code != 200:
        raise ProbeError(
            _PROVIDER,
            f"issue trying to retrieve GCP instance token, got: {resp.status_code}: {resp.reason_phrase}",
        )
    return resp.text


class GcpLocator:
    """Ubicación para un entorno GCP."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def cloud_name(self) -> str:
        return CloudName.GCP.value

    def region(self) -> str:
        return resolve_gcp_zone(settings=self._settings, transport=self._transport)

    def locality(self) -> str:
        try:
            return retrieve_gcp_instance_token(settings=self._settings, transport=self._transport)
        except ProbeError as exc:
            logger.debug("GCP locality unavailable: %s", exc)
            return ""

    def locality_type(self) -> LocalityType:
        return LocalityType.GCP_JWT
