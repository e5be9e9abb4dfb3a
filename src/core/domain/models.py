"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Las políticas (identificador, password, passphrase) se validan una sola vez
  en el borde; los algoritmos asumen datos correctos.

Nota:
- Estos modelos describen *qué* reglas aplican, no *cómo* se genera nada.
"""

from __future__ import annotations

import string
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.config import ConfigDict

from core.config import DEFAULT_BANNED_WORDS, DEFAULT_SPECIAL_CHARS

if TYPE_CHECKING:
    from core.config import AppSettings


PLAIN_PADS: tuple[str, ...] = (" ",)
COMPLEX_PADS: tuple[str, ...] = (" ", "-", "_", ".", ",", "!", "?", ";", ":", "+", "=")


class CharacterClass(str, Enum):
    """Clases de caracteres admitidas por posición en un password."""

    ALPHA = "alpha"
    NUMERIC = "numeric"
    SPECIAL = "special"

    def characters(self, special_chars: str = DEFAULT_SPECIAL_CHARS) -> str:
        """Conjunto fijo de code points de la clase."""

        if self is CharacterClass.ALPHA:
            return string.ascii_letters
        if self is CharacterClass.NUMERIC:
            return string.digits
        return special_chars


class IdentifierPolicy(BaseModel):
    """Forma de los identificadores: `prefix + inicial + apellido[:surname_chars]`."""

    model_config = ConfigDict(frozen=True)

    prefix: str = Field(default="ex-", max_length=8)
    max_length: int = Field(default=11, ge=4, le=64)
    surname_chars: int = Field(default=7, ge=1, le=32)
    fold_accents: bool = Field(default=True)

    @model_validator(mode="after")
    def check_fits(self) -> "IdentifierPolicy":
        if len(self.prefix) + 1 + self.surname_chars > self.max_length:
            raise ValueError("prefix + initial + surname_chars must fit in max_length")
        return self

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "IdentifierPolicy":
        return cls(
            prefix=settings.identifier_prefix,
            max_length=settings.identifier_max_length,
            surname_chars=settings.surname_chars,
            fold_accents=settings.fold_accents,
        )


class PasswordPolicy(BaseModel):
    """Reglas posicionales del generador de passwords.

    - Posición 1 y última: solo Alpha.
    - Posiciones 2..`special_window_end`: Alpha + Numeric + Special.
    - Resto: Alpha + Numeric.
    """

    model_config = ConfigDict(frozen=True)

    min_length: int = Field(default=14, ge=2, le=256)
    max_length: int = Field(default=20, ge=2, le=256)
    special_window_end: int = Field(default=7, ge=2)
    special_chars: str = Field(default=DEFAULT_SPECIAL_CHARS, min_length=1)
    max_attempts: int = Field(default=1000, ge=1)

    @model_validator(mode="after")
    def check_bounds(self) -> "PasswordPolicy":
        if self.min_length > self.max_length:
            raise ValueError("min_length must be <= max_length")
        overlap = set(self.special_chars) & set(string.ascii_letters + string.digits)
        if overlap:
            raise ValueError("special_chars must not contain letters or digits")
        return self

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "PasswordPolicy":
        return cls(
            min_length=settings.password_min_length,
            max_length=settings.password_max_length,
            special_window_end=settings.password_special_window_end,
            special_chars=settings.password_special_chars,
            max_attempts=settings.password_max_attempts,
        )


class PassphraseOptions(BaseModel):
    """Parámetros de composición de passphrases."""

    model_config = ConfigDict(frozen=True)

    min_length: int = Field(default=20, ge=1, le=1024)
    iterations: int = Field(default=1, ge=0, le=1000)
    complex: bool = Field(default=False)
    banned_words: tuple[str, ...] = Field(default=DEFAULT_BANNED_WORDS)
    max_word_attempts: int = Field(default=1000, ge=1)
    plain_pads: tuple[str, ...] = Field(default=PLAIN_PADS, min_length=1)
    complex_pads: tuple[str, ...] = Field(default=COMPLEX_PADS, min_length=1)

    @field_validator("banned_words", mode="before")
    @classmethod
    def normalize_banned(cls, value: object) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        words = {str(w).strip().lower() for w in value}  # type: ignore[union-attr]
        return tuple(sorted(w for w in words if w))

    @field_validator("plain_pads", "complex_pads")
    @classmethod
    def check_single_chars(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(len(pad) != 1 for pad in value):
            raise ValueError("padding entries must be single characters")
        return value

    @property
    def pads(self) -> tuple[str, ...]:
        return self.complex_pads if self.complex else self.plain_pads

    @classmethod
    def from_settings(
        cls,
        settings: "AppSettings",
        **overrides: object,
    ) -> "PassphraseOptions":
        data: dict[str, object] = {
            "min_length": settings.passphrase_min_length,
            "iterations": settings.passphrase_iterations,
            "banned_words": settings.banned_words,
            "max_word_attempts": settings.passphrase_max_word_attempts,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(data)


class ResolvedIdentifier(BaseModel):
    """Resultado del resolver: candidato base, final y nº de consultas."""

    base: str = Field(..., min_length=1)
    final: str = Field(..., min_length=1)
    attempts: int = Field(
        ...,
        ge=1,
        description="Consultas al existence-check (incluye la del candidato base).",
    )

    @property
    def suffixed(self) -> bool:
        return self.final != self.base
