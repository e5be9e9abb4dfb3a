"""Cargador de listas de palabras (corpus para passphrases).

Este módulo vive en `core/` porque:
- centraliza el *qué* datos necesitamos (ruta configurada o descubierta)
  sin acoplarse a la CLI
- evita duplicar lógica de paths/caché en cada entrypoint.

No incluye listas en el repo; el usuario apunta a una ruta o deja una
`*wordlist*.txt` bajo el directorio de trabajo.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.errors import MissingWordList


logger = logging.getLogger(__name__)

DEFAULT_WORD_LIST_PATTERN = "*wordlist*.txt"


def find_word_list(
    *,
    search_root: Path | None = None,
    pattern: str = DEFAULT_WORD_LIST_PATTERN,
    recursive: bool = True,
) -> Path | None:
    """Busca un fichero que encaje con `pattern` bajo `search_root`.

    Orden:
    - Los candidatos se ordenan (profundidad, ruta) para que el "primer match"
      sea estable entre sistemas de ficheros.
    """

    root = search_root or Path.cwd()
    if not root.is_dir():
        return None

    matches = root.rglob(pattern) if recursive else root.glob(pattern)
    files = sorted(
        (p for p in matches if p.is_file()),
        key=lambda p: (len(p.relative_to(root).parts), str(p)),
    )
    return files[0] if files else None


def resolve_word_list_path(
    configured: Path | None,
    *,
    search_root: Path | None = None,
    pattern: str = DEFAULT_WORD_LIST_PATTERN,
    recursive: bool = True,
) -> Path:
    """Devuelve la ruta efectiva de la lista de palabras.

    Reglas:
    1) Si `configured` existe y es fichero, se usa tal cual.
    2) Si no, se busca por patrón en `search_root` (cwd por defecto).
    3) Si no hay nada, `MissingWordList`.
    """

    if configured is not None and configured.is_file():
        return configured

    found = find_word_list(search_root=search_root, pattern=pattern, recursive=recursive)
    if found is not None:
        if configured is not None:
            logger.info(
                "Configured word list %s not found, using %s",
                configured,
                found,
                extra={"path": str(found)},
            )
        return found

    root = search_root or Path.cwd()
    searched = [str(configured)] if configured is not None else []
    searched.append(str(root / ("**/" + pattern if recursive else pattern)))
    raise MissingWordList(
        f"No word list found (configured: {configured or '-'}; pattern: {pattern!r} under {root}).",
        searched=searched,
    )


def read_word_list(path: Path, *, encoding: str = "utf-8") -> tuple[str, ...]:
    """Lee una palabra por línea, ignorando líneas vacías.

    Los errores de I/O y de decodificación se propagan sin envolver.
    """

    text = path.read_text(encoding=encoding)
    return tuple(word for word in (line.strip() for line in text.splitlines()) if word)


class WordListCache:
    """Caché explícita de corpus, propiedad del caller.

    Por qué un objeto y no un global:
    - El caller decide el ciclo de vida (una CLI, un worker, un test).
    - `invalidate`/`reload` permiten refrescar sin reiniciar el proceso.

    Tras la carga, el corpus es una tupla inmutable: lecturas concurrentes
    son seguras.
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._corpora: dict[Path, tuple[str, ...]] = {}

    def __contains__(self, path: object) -> bool:
        return isinstance(path, Path) and self._key(path) in self._corpora

    def __len__(self) -> int:
        return len(self._corpora)

    @staticmethod
    def _key(path: Path) -> Path:
        return path.expanduser().resolve()

    def load(self, path: Path) -> tuple[str, ...]:
        """Devuelve el corpus de `path`, leyéndolo solo la primera vez."""

        key = self._key(path)
        cached = self._corpora.get(key)
        if cached is not None:
            return cached

        corpus = read_word_list(key, encoding=self._encoding)
        logger.debug(
            "Loaded %d words from %s",
            len(corpus),
            key,
            extra={"path": str(key)},
        )
        self._corpora[key] = corpus
        return corpus

    def invalidate(self, path: Path | None = None) -> None:
        """Olvida un corpus (o todos si `path` es None)."""

        if path is None:
            self._corpora.clear()
            return
        self._corpora.pop(self._key(path), None)

    def reload(self, path: Path) -> tuple[str, ...]:
        self.invalidate(path)
        return self.load(path)
