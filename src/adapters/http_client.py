"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers de las comprobaciones HTTP (doctor).
- Facilita testeo: se puede sustituir por un stub/mocked client.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings, UpstreamServer


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/dns-message",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


async def check_upstream(client: httpx.AsyncClient, upstream: UpstreamServer) -> tuple[bool, str]:
    """Comprueba que el endpoint DoH responde por HTTPS.

    Un GET sin `?dns=` devuelve 400 en Quad9/Cloudflare: cualquier respuesta HTTP
    cuenta como alcanzable.
    """

    try:
        response = await client.get(upstream.url)
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__
    return True, f"HTTP {response.status_code}"
