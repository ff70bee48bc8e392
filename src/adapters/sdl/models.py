"""Modelos del wire SDL y su validación/transfiguración.

Idea:
- Los modelos aceptan campos ausentes o nulos con valores cero: así un campo
  que falta se reporta como error de dominio (`MissingFieldError`, ...) en
  lugar de como error de decodificación.
- Cada registro se valida a sí mismo (`verify`) sin bajar al nivel inferior
  excepto donde la cascada es parte del contrato (accesión -> ficheros ->
  ubicación). El sobre no recorre sus accesiones: eso lo hace el pipeline.

Importante:
- `verify` se detiene en la primera regla violada.
"""

from __future__ import annotations

import json
from collections.abc import Container, Mapping
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, ValidationError
from pydantic.config import ConfigDict

from core.domain.models import Accession, File
from core.errors import (
    DuplicateAccessionError,
    EmptyFilesError,
    EmptyResultError,
    MissingFieldError,
    MultipleLocationsError,
    SdlDecodeError,
    StatusError,
    UnrequestedAccessionError,
    UpstreamApiError,
    VersionMismatchError,
)

STATUS_OK = 200


def _none_to(default: Any):
    return BeforeValidator(lambda value: default if value is None else value)


WireStr = Annotated[str, _none_to("")]
WireInt = Annotated[int, _none_to(0)]


class SdlLocation(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    link: WireStr = Field(default="", description="URL de descarga.")
    service: WireStr = Field(default="", description="Servicio de nube (s3, gs...).")
    region: WireStr = Field(default="", description="Región del servicio.")
    expiration_date: datetime | None = Field(
        default=None,
        alias="expirationDate",
        description="Caducidad del enlace firmado.",
    )
    bucket: WireStr = ""
    key: WireStr = ""

    def verify(self, *, owner: str = "") -> None:
        """link, service y region no vacíos, en ese orden."""

        for field in ("link", "service", "region"):
            if not getattr(self, field):
                raise MissingFieldError("location", field, owner)


class SdlFile(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: WireStr = ""
    size: Annotated[int, Field(ge=0), _none_to(0)] = 0
    type: WireStr = ""
    modified_date: datetime | None = Field(default=None, alias="modificationDate")
    md5_hash: WireStr = Field(default="", alias="md5")
    locations: Annotated[list[SdlLocation], _none_to([])] = Field(default_factory=list)

    def verify(self) -> None:
        if not self.name:
            raise MissingFieldError("file", "name")
        if not self.type:
            raise MissingFieldError("file", "type", self.name)
        if len(self.locations) > 1:
            raise MultipleLocationsError(self.name, len(self.locations))
        if self.locations:
            self.locations[0].verify(owner=self.name)

    def transfigure(self) -> File:
        """Aplana la única ubicación (si existe) dentro del fichero."""

        file = File(
            name=self.name,
            size=self.size,
            type=self.type,
            modified_date=self.modified_date,
            md5_hash=self.md5_hash,
        )
        if self.locations:
            location = self.locations[0]
            file.link = location.link
            file.service = location.service
            file.region = location.region
        return file


class SdlAccession(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: WireStr = Field(default="", alias="bundle")
    status: WireInt = 0
    message: WireStr = Field(default="", alias="msg")
    files: Annotated[list[SdlFile], _none_to([])] = Field(default_factory=list)

    def verify(self, requested: Container[str], seen: set[str]) -> None:
        """Valida la accesión y sus ficheros.

        `seen` pertenece al llamador y vive lo que dura un sobre: la primera
        vez que una accesión pasa las comprobaciones su id se añade ahí.
        """

        if self.id not in requested:
            raise UnrequestedAccessionError(self.id)
        if self.status != STATUS_OK:
            raise StatusError(self.id, self.status, self.message)
        if not self.files:
            raise EmptyFilesError(self.id)
        if self.id in seen:
            raise DuplicateAccessionError(self.id)
        seen.add(self.id)

        for file in self.files:
            file.verify()

    def transfigure(self) -> Accession:
        # Nombres repetidos dentro de una accesión: gana el último.
        files = {file.name: file.transfigure() for file in self.files}
        return Accession(id=self.id, files=files)


class SdlResponse(BaseModel):
    """Sobre de la respuesta del SDL."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    version: WireStr = ""
    results: Annotated[list[SdlAccession], _none_to([])] = Field(default_factory=list, alias="result")

    def verify(self, expected_version: str) -> None:
        if self.version != expected_version:
            raise VersionMismatchError(expected_version, self.version)
        if not self.results:
            raise EmptyResultError(expected_version)


class SdlApiError(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: WireInt = 0
    message: WireStr = ""


def _is_api_error(data: Any) -> bool:
    return isinstance(data, Mapping) and "message" in data and "version" not in data and "result" not in data


def parse_response(raw: bytes | str | Mapping[str, Any]) -> SdlResponse:
    """Decodifica el cuerpo crudo del SDL.

    Levanta `UpstreamApiError` si el SDL devolvió su objeto de error y
    `SdlDecodeError` si el cuerpo no es JSON o no tiene forma de sobre.
    """

    if isinstance(raw, (bytes, bytearray, str)):
        try:
            data = json.loads(raw)
        except ValueError as exc:
            # JSONDecodeError y UnicodeDecodeError (bytes que no son UTF-8).
            raise SdlDecodeError(f"SDL API returned a body that is not JSON: {exc}") from exc
    else:
        data = raw

    try:
        if _is_api_error(data):
            api_error = SdlApiError.model_validate(data)
            raise UpstreamApiError(api_error.status, api_error.message)
        return SdlResponse.model_validate(data)
    except ValidationError as exc:
        raise SdlDecodeError(
            f"SDL API response does not have the expected shape ({exc.error_count()} error(s)): {exc}"
        ) from exc
