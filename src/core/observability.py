"""Logging de la aplicación.

Por qué aquí:
- Un único punto de configuración para CLI y cualquier otro entrypoint.
- Los servicios solo hacen `logging.getLogger(__name__)`; no saben a dónde van
  los registros.

Formatos:
- `rich`: `RichHandler` legible en stderr (por defecto).
- `json`: una línea JSON por registro, para pipelines.

Regla: nunca se registran secretos generados (passwords/passphrases).
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from rich.console import Console
from rich.logging import RichHandler


_EXTRA_KEYS: tuple[str, ...] = ("attempt", "candidate", "path", "error_code")


class JSONFormatter(logging.Formatter):
    """Formatea registros como JSON (una línea por evento)."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val if isinstance(val, (int, float, bool)) else str(val)
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "WARNING", fmt: str = "rich") -> logging.Handler:
    """Configura el logger raíz. Idempotente: reemplaza el handler previo."""

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_acctsmith", False):
            root.removeHandler(existing)

    handler: logging.Handler
    if fmt == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    handler._acctsmith = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return handler
