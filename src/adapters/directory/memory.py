"""Existence-check en memoria.

Útil para snapshots exportados del directorio, pruebas y dry-runs.
"""

from __future__ import annotations

from typing import Iterable


class InMemoryDirectory:
    """Conjunto de identificadores existentes (comparación sin caja)."""

    def __init__(self, identifiers: Iterable[str] = ()) -> None:
        self._identifiers = {i.strip().lower() for i in identifiers if i.strip()}
        self.lookups: list[str] = []

    def __call__(self, candidate: str) -> bool:
        self.lookups.append(candidate)
        return candidate.lower() in self._identifiers

    def __len__(self) -> int:
        return len(self._identifiers)

    def add(self, identifier: str) -> None:
        self._identifiers.add(identifier.strip().lower())
