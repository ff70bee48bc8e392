"""Localizador manual: el operador fuerza la ubicación."""

from __future__ import annotations

from core.domain.locality import LocalityType


class ManualLocator:
    """Devuelve el valor recibido como nube, región y localidad.

    `locality_type()` es "forced": el consumidor no debe intentar verificar
    identidad alguna.
    """

    def __init__(self, location: str) -> None:
        self._location = location

    @property
    def cloud_name(self) -> str:
        return self._location

    def region(self) -> str:
        return self._location

    def locality(self) -> str:
        return self._location

    def locality_type(self) -> LocalityType:
        return LocalityType.FORCED
