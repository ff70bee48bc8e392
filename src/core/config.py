"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los adaptadores (sondas de metadata, decodificación SDL) leen los mismos
  timeouts y la misma versión de protocolo.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "sdl-locator"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "sdl-locator"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sdl-locator"
    return Path.home() / ".config" / "sdl-locator"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Los timeouts de las sondas son deliberadamente cortos: los endpoints de
    metadata solo existen dentro de la nube correspondiente.
    """

    model_config = SettingsConfigDict(
        env_prefix="SDL_LOCATOR_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    sdl_version: str = Field(
        default="2",
        min_length=1,
        description="Versión del protocolo SDL que entiende este cliente.",
    )
    location: str | None = Field(
        default=None,
        description="Ubicación forzada (p.ej. 'ncbi' o 's3.us-east-1'); desactiva la detección.",
    )

    probe_connect_timeout_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Timeout de conexión TCP para las sondas de metadata.",
    )
    probe_keepalive_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Intervalo de keep-alive TCP para las sondas.",
    )
    probe_idle_timeout_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Expiración de conexiones inactivas en el pool.",
    )
    probe_pool_timeout_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Espera máxima por una conexión libre del pool de httpx.",
    )
    probe_write_timeout_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Timeout de escritura de la petición de metadata.",
    )
    probe_read_timeout_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Timeout de lectura de la respuesta de metadata.",
    )

    gcp_token_audience: str = Field(
        default="https://www.ncbi.nlm.nih.gov",
        min_length=8,
        description="Audience del token de identidad de instancia GCP.",
    )
    user_agent: str = Field(
        default="sdl-locator/0.1",
        min_length=1,
        description="User-Agent para las sondas.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING...).",
    )
