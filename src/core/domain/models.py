"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Es la forma que consume el sistema de ficheros: una accesión con sus
  ficheros indexados por nombre.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* llega del SDL.
  La forma del wire vive en `adapters.sdl.models`.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class File(BaseModel):
    """Fichero de una accesión, con su única ubicación aplanada.

    `link`, `service` y `region` quedan vacíos cuando el SDL aún no tiene
    ubicación para el fichero.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del fichero dentro de la accesión.",
    )
    size: int = Field(
        default=0,
        ge=0,
        description="Tamaño en bytes.",
    )
    type: str = Field(
        default="",
        description="Tipo de fichero declarado por el SDL (p.ej. 'bam', 'sra').",
    )
    modified_date: datetime | None = Field(
        default=None,
        description="Fecha de modificación declarada por el SDL.",
    )
    md5_hash: str = Field(
        default="",
        description="MD5 del contenido.",
    )
    link: str = Field(
        default="",
        description="URL de descarga (vacía si no hay ubicación).",
    )
    service: str = Field(
        default="",
        description="Servicio de nube que aloja el fichero (p.ej. 's3', 'gs').",
    )
    region: str = Field(
        default="",
        description="Región del servicio que aloja el fichero.",
    )

    @property
    def has_location(self) -> bool:
        return bool(self.link)


class Accession(BaseModel):
    """Agregado principal: una accesión y sus ficheros indexados por nombre."""

    id: str = Field(
        ...,
        min_length=1,
        description="Identificador de la accesión (p.ej. 'SRR000001').",
    )
    files: dict[str, File] = Field(
        default_factory=dict,
        description="Ficheros de la accesión, por nombre.",
    )
