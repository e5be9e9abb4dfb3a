"""Adaptadores de existence-check (directorio).

Por qué un paquete:
- Agrupa las fuentes de "¿existe este identificador?" (memoria, snapshot, HTTP).
- Todas cumplen `core.interfaces.existence.ExistenceCheck`.
"""

from adapters.directory.http_directory import HttpDirectoryCheck
from adapters.directory.memory import InMemoryDirectory
from adapters.directory.snapshot import DirectorySnapshot, load_directory_snapshot

__all__ = [
	"DirectorySnapshot",
	"HttpDirectoryCheck",
	"InMemoryDirectory",
	"load_directory_snapshot",
]
