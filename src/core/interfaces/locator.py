"""Contrato de los localizadores (¿dónde se está ejecutando el proceso?).

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El conjunto de variantes es cerrado (AWS, GCP, manual) pero los tests y la
  CLI solo dependen de este contrato.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.locality import LocalityType


@runtime_checkable
class Locator(Protocol):
    """Todo lo necesario para describir una ubicación ante el SDL.

    Reglas de diseño:
    - `region` puede hacer I/O y fallar (levanta `ProbeError`).
    - `locality` nunca falla: devuelve "" si el artefacto no está disponible.
    """

    @property
    def cloud_name(self) -> str:
        """Etiqueta corta del proveedor (p.ej. 's3', 'gs')."""

        ...

    def region(self) -> str:
        """Sububicación (región/zona) dentro del proveedor."""

        ...

    def locality(self) -> str:
        """Artefacto opaco de identidad (token o blob firmado)."""

        ...

    def locality_type(self) -> LocalityType:
        """Cómo debe interpretarse `locality()`."""

        ...
