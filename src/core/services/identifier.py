"""Derivación y resolución de identificadores de directorio.

Flujo:
1) `derive_identifier(given, surname)` -> candidato base, p.ej. `ex-jdoe`.
2) `resolve_identifier(base, exists)` -> primer candidato libre probando
   sufijos `1, 2, 3...` recortados para no pasar del tope de longitud.

La unicidad es consultiva: entre la última consulta y el alta real otro
proceso puede ocupar el identificador. El Core no reserva nada.
"""

from __future__ import annotations

import logging
import unicodedata

from core.domain.models import IdentifierPolicy, ResolvedIdentifier
from core.errors import ResolutionExhausted, ValidationError
from core.interfaces.existence import ExistenceCheck


logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 9999


def fold_accents(value: str) -> str:
    """Quita diacríticos (NFKD). Caracteres sin descomposición pasan tal cual."""

    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def derive_identifier(
    given_name: str,
    surname: str,
    *,
    policy: IdentifierPolicy | None = None,
) -> str:
    """Construye `prefix + inicial + apellido[:N]` en minúsculas."""

    policy = policy or IdentifierPolicy()
    given = (given_name or "").strip()
    family = (surname or "").strip()
    if not given:
        raise ValidationError("Given name must not be empty.", field="given_name")
    if not family:
        raise ValidationError("Surname must not be empty.", field="surname")

    if policy.fold_accents:
        given = fold_accents(given) or given
        family = fold_accents(family) or family

    initial = given.lower()[0]
    surname_part = family.lower()[: policy.surname_chars]
    return f"{policy.prefix}{initial}{surname_part}"


def suffixed_candidate(base: str, counter: int, *, max_length: int) -> str:
    """Añade `counter` a `base`, recortando la base según el ancho del sufijo."""

    suffix = str(counter)
    if len(base) + len(suffix) > max_length:
        return base[: max_length - len(suffix)] + suffix
    return base + suffix


def resolve_identifier(
    base: str,
    exists: ExistenceCheck,
    *,
    max_length: int = 11,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> ResolvedIdentifier:
    """Devuelve el primer candidato para el que `exists` responde False.

    - Una consulta por candidato, sin caché.
    - Tras `max_attempts` sufijos ocupados: `ResolutionExhausted`.
    """

    if not base:
        raise ValidationError("Base identifier must not be empty.", field="base")
    if len(base) > max_length:
        raise ValidationError(
            f"Base identifier '{base}' exceeds {max_length} characters.",
            field="base",
        )
    if max_attempts < 1:
        raise ValidationError("max_attempts must be >= 1.", field="max_attempts")

    final = base
    checks = 1
    counter = 0
    while exists(final):
        counter += 1
        if counter > max_attempts:
            raise ResolutionExhausted(base, max_attempts)
        logger.debug(
            "Identifier %s already taken, trying suffix %d",
            final,
            counter,
            extra={"candidate": final, "attempt": counter},
        )
        final = suffixed_candidate(base, counter, max_length=max_length)
        checks += 1

    logger.info(
        "Resolved identifier %s -> %s after %d lookup(s)",
        base,
        final,
        checks,
        extra={"candidate": final, "attempt": checks},
    )
    return ResolvedIdentifier(base=base, final=final, attempts=checks)
