"""Wrapper de httpx para las sondas de metadata.

Por qué un wrapper:
- Estandariza timeouts, headers y keep-alive para que AWS y GCP fallen igual
  de rápido fuera de su nube.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import socket

import httpx

from core.config import AppSettings


def _keepalive_socket_options(seconds: float) -> list[tuple[int, int, int]]:
    interval = max(1, int(seconds))
    options = [(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)]
    # TCP_KEEPIDLE/TCP_KEEPINTVL no existen en todas las plataformas.
    if hasattr(socket, "TCP_KEEPIDLE"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, interval))
    if hasattr(socket, "TCP_KEEPINTVL"):
        options.append((socket.IPPROTO_TCP, socket.TCP_KEEPINTVL, interval))
    return options


def build_probe_timeout(settings: AppSettings) -> httpx.Timeout:
    """Timeouts de una sonda.

    httpx no separa el handshake TLS: queda dentro de `connect`.
    """

    return httpx.Timeout(
        connect=settings.probe_connect_timeout_seconds,
        read=settings.probe_read_timeout_seconds,
        write=settings.probe_write_timeout_seconds,
        pool=settings.probe_pool_timeout_seconds,
    )


def build_metadata_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono para un servicio de metadata.

    Las sondas son secuenciales y se ejecutan una vez por proceso, así que no
    hace falta un cliente asíncrono.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)

    limits = httpx.Limits(
        max_connections=1000,
        max_keepalive_connections=1000,
        keepalive_expiry=settings.probe_idle_timeout_seconds,
    )
    if transport is None:
        transport = httpx.HTTPTransport(
            limits=limits,
            socket_options=_keepalive_socket_options(settings.probe_keepalive_seconds),
        )

    return httpx.Client(
        timeout=build_probe_timeout(settings),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )
