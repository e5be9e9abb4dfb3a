"""Existence-check contra un endpoint HTTP de directorio.

Contrato del endpoint:
- `GET <base_url>/<identificador>` -> 200 si existe, 404 si está libre.
- Cualquier otro status (redirecciones incluidas, no se siguen) o error de
  transporte -> `DirectoryLookupError`.

Sin caché ni reintentos: una request por candidato.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from adapters.http_client import build_client
from core.config import AppSettings
from core.errors import DirectoryLookupError, ValidationError


class HttpDirectoryCheck:
    """Consulta el directorio por HTTP. Usable como context manager."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        resolved = base_url or self._settings.directory_base_url
        if not resolved:
            raise ValidationError(
                "Directory base URL is not configured.",
                field="directory_base_url",
            )
        self._client = build_client(
            self._settings,
            base_url=resolved,
            transport=transport,
            follow_redirects=False,
        )

    def __call__(self, candidate: str) -> bool:
        try:
            response = self._client.get(quote(candidate, safe=""))
        except httpx.HTTPError as exc:
            raise DirectoryLookupError(candidate, str(exc)) from exc

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        if 300 <= response.status_code < 400:
            location = response.headers.get("Location", "?")
            raise DirectoryLookupError(
                candidate,
                f"unexpected redirect (HTTP {response.status_code} -> {location})",
            )
        raise DirectoryLookupError(candidate, f"unexpected HTTP {response.status_code}")

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpDirectoryCheck":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
