"""Generador de passwords con reglas posicionales.

Reglas (posiciones 1-indexadas, longitud uniforme en [min, max]):
- 1 y última: Alpha.
- 2..special_window_end: Alpha + Numeric + Special.
- resto: Alpha + Numeric.

Tras construir el candidato se exige al menos una mayúscula, una minúscula,
un dígito y un especial. Si falla, se descarta y se reconstruye (rejection
sampling acotado por `policy.max_attempts`).

Aleatoriedad: `secrets` (CSPRNG del sistema).
"""

from __future__ import annotations

import logging
import secrets

from core.domain.models import CharacterClass, PasswordPolicy
from core.errors import ConstraintUnsatisfiable


logger = logging.getLogger(__name__)


def position_alphabet(position: int, length: int, policy: PasswordPolicy) -> str:
    """Alfabeto permitido en `position` (1-indexada) para un password de `length`."""

    alpha = CharacterClass.ALPHA.characters()
    numeric = CharacterClass.NUMERIC.characters()
    if position == 1 or position == length:
        return alpha
    if 2 <= position <= policy.special_window_end:
        return alpha + numeric + CharacterClass.SPECIAL.characters(policy.special_chars)
    return alpha + numeric


def meets_class_coverage(candidate: str, special_chars: str) -> bool:
    has_upper = any(c.isascii() and c.isupper() for c in candidate)
    has_lower = any(c.isascii() and c.islower() for c in candidate)
    has_digit = any(c.isascii() and c.isdigit() for c in candidate)
    has_special = any(c in special_chars for c in candidate)
    return has_upper and has_lower and has_digit and has_special


def _build_candidate(length: int, policy: PasswordPolicy) -> str:
    return "".join(
        secrets.choice(position_alphabet(position, length, policy))
        for position in range(1, length + 1)
    )


def generate_password(
    *,
    policy: PasswordPolicy | None = None,
    username: str | None = None,
) -> str:
    """Genera un password que cumple las reglas posicionales y de cobertura.

    `username` es solo contexto para logs; no afecta a la generación.
    """

    policy = policy or PasswordPolicy()
    span = policy.max_length - policy.min_length + 1
    length = policy.min_length + secrets.randbelow(span)

    for attempt in range(1, policy.max_attempts + 1):
        candidate = _build_candidate(length, policy)
        if meets_class_coverage(candidate, policy.special_chars):
            logger.debug(
                "Generated %d-char password for %s on attempt %d",
                length,
                username or "-",
                attempt,
                extra={"attempt": attempt},
            )
            return candidate

    logger.warning(
        "Password generation exhausted %d attempts (length %d)",
        policy.max_attempts,
        length,
        extra={"attempt": policy.max_attempts, "error_code": ConstraintUnsatisfiable.code},
    )
    raise ConstraintUnsatisfiable(policy.max_attempts)
