"""Jerarquía de errores del Core.

Por qué una jerarquía propia:
- La CLI captura una sola base (`AcctSmithError`) en el borde y decide el
  código de salida sin conocer cada caso.
- Cada error lleva un `code` estable para logs JSON y tests.

Nota:
- Los errores de I/O al leer una lista de palabras (OSError,
  UnicodeDecodeError) NO se envuelven: se propagan tal cual.
"""

from __future__ import annotations


class AcctSmithError(Exception):
    """Base de todos los errores del dominio."""

    code = "ACCTSMITH_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ValidationError(AcctSmithError):
    """Entrada inválida (p.ej. nombre vacío). No se reintenta."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ResolutionExhausted(AcctSmithError):
    """El resolver agotó su cota de sufijos sin encontrar un identificador libre."""

    code = "RESOLUTION_EXHAUSTED"

    def __init__(self, base: str, max_attempts: int) -> None:
        super().__init__(
            f"Could not find a free identifier for '{base}' after {max_attempts} suffixes."
        )
        self.base = base
        self.max_attempts = max_attempts


class ConstraintUnsatisfiable(AcctSmithError):
    """El generador de passwords agotó los intentos de rejection sampling."""

    code = "CONSTRAINT_UNSATISFIABLE"

    def __init__(self, max_attempts: int) -> None:
        super().__init__(
            f"No password satisfied the character-class rules after {max_attempts} attempts."
        )
        self.max_attempts = max_attempts


class MissingWordList(AcctSmithError):
    """No hay lista de palabras configurada ni descubrible."""

    code = "MISSING_WORD_LIST"

    def __init__(self, message: str, *, searched: list[str] | None = None) -> None:
        super().__init__(message)
        self.searched = searched or []


class NoSafeWordAvailable(AcctSmithError):
    """El corpus no ofrece (en la cota de intentos) ninguna palabra permitida."""

    code = "NO_SAFE_WORD_AVAILABLE"

    def __init__(self, max_attempts: int, *, corpus_size: int) -> None:
        super().__init__(
            f"No word outside the banned list was drawn after {max_attempts} attempts "
            f"(corpus size: {corpus_size})."
        )
        self.max_attempts = max_attempts
        self.corpus_size = corpus_size


class DirectoryLookupError(AcctSmithError):
    """El backend de directorio respondió algo que no es 'existe' / 'no existe'."""

    code = "DIRECTORY_LOOKUP_ERROR"

    def __init__(self, candidate: str, detail: str) -> None:
        super().__init__(f"Directory lookup for '{candidate}' failed: {detail}")
        self.candidate = candidate
        self.detail = detail
