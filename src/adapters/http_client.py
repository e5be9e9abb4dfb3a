"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y autenticación del backend de directorio.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    base_url: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
    follow_redirects: bool = True,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los lookups se comporten igual.
    - El existence-check es bloqueante por contrato: cliente síncrono.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.directory_token:
        headers["Authorization"] = f"Bearer {settings.directory_token}"
    if extra_headers:
        headers.update(extra_headers)

    resolved_base = base_url or settings.directory_base_url or ""
    if resolved_base and not resolved_base.endswith("/"):
        resolved_base += "/"

    return httpx.Client(
        base_url=resolved_base,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=follow_redirects,
        headers=headers,
        transport=transport,
    )
