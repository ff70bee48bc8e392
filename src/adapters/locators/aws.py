"""Localizador: AWS (servicio de metadata de instancia EC2).

Implementación:
- La región sale del documento de identidad de instancia.
- La localidad es el documento firmado PKCS7 (blob opaco para el SDL).

Notas:
- 169.254.169.254 solo responde dentro de EC2; fuera falla por timeout de
  conexión (1s).
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ValidationError
from pydantic.config import ConfigDict

from adapters.http_client import build_metadata_client
from core.config import AppSettings
from core.domain.locality import CloudName, LocalityType
from core.errors import ProbeError

logger = logging.getLogger(__name__)

IDENTITY_DOCUMENT_URL = "http://169.254.169.254/latest/dynamic/instance-identity/document"
IDENTITY_PKCS7_URL = "http://169.254.169.254/latest/dynamic/instance-identity/pkcs7"

_PROVIDER = "aws"


class InstanceIdentityDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    region: str = ""


def _get(url: str, *, settings: AppSettings, transport: httpx.BaseTransport | None) -> httpx.Response:
    try:
        with build_metadata_client(settings, transport=transport) as client:
            return client.get(url)
    except httpx.HTTPError as exc:
        raise ProbeError(
            _PROVIDER,
            f"could not reach the instance metadata service, this only works on an amazon instance: {exc}",
        ) from exc


def resolve_aws_region(
    *,
    settings: AppSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Devuelve la región EC2 o levanta `ProbeError`."""

    settings = settings or AppSettings()
    resp = _get(IDENTITY_DOCUMENT_URL, settings=settings, transport=transport)
    if resp.status_code != 200:
        raise ProbeError(
            _PROVIDER,
            f"issue trying to resolve region, got: {resp.status_code}: {resp.reason_phrase}",
        )

    try:
        document = InstanceIdentityDocument.model_validate_json(resp.content)
    except ValidationError as exc:
        raise ProbeError(_PROVIDER, "issue trying to resolve region, couldn't decode response from amazon") from exc

    if not document.region:
        raise ProbeError(_PROVIDER, "issue trying to resolve region, amazon returned empty region")
    return document.region


def retrieve_aws_pkcs7(
    *,
    settings: AppSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Devuelve la firma PKCS7 del documento de identidad, sin saltos de línea."""

    settings = settings or AppSettings()
    resp = _get(IDENTITY_PKCS7_URL, settings=settings, transport=transport)
    if resp.status_code != 200:
        raise ProbeError(
            _PROVIDER,
            f"issue trying to retrieve instance signature, got: {resp.status_code}: {resp.reason_phrase}",
        )
    return "".join(resp.text.split())


class AwsLocator:
    """Ubicación para un entorno AWS."""

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
        return CloudName.AWS.value

    def region(self) -> str:
        return resolve_aws_region(settings=self._settings, transport=self._transport)

    def locality(self) -> str:
        try:
            return retrieve_aws_pkcs7(settings=self._settings, transport=self._transport)
        except ProbeError as exc:
            logger.debug("AWS locality unavailable: %s", exc)
            return ""

    def locality_type(self) -> LocalityType:
        return LocalityType.AWS_PKCS7
