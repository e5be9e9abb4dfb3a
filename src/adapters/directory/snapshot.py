"""Carga de snapshots del directorio.

Soporta formatos tipo:
- JSON: {"identifiers": ["ex-jdoe", ...]}
- Texto: un identificador por línea (líneas vacías y `#` se ignoran)

Nota:
- El snapshot es una foto: no ve altas posteriores. Para unicidad "en vivo"
  usar el adaptador HTTP.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as ModelValidationError

from adapters.directory.memory import InMemoryDirectory
from core.errors import ValidationError


class DirectorySnapshot(BaseModel):
    identifiers: list[str] = Field(default_factory=list)


def load_directory_snapshot(path: Path, *, encoding: str = "utf-8") -> InMemoryDirectory:
    raw = path.read_text(encoding=encoding)
    if path.suffix.lower() == ".json":
        try:
            snapshot = DirectorySnapshot.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ModelValidationError) as exc:
            raise ValidationError(
                f"Invalid directory snapshot {path}: {exc}",
                field="snapshot",
            ) from exc
        return InMemoryDirectory(snapshot.identifiers)

    lines = (line.strip() for line in raw.splitlines())
    return InMemoryDirectory(line for line in lines if line and not line.startswith("#"))
