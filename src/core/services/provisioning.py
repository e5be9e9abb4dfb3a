"""Superficie pública del Core (funciones, no CLI).

This module is the single entry-point the CLI (and any future API or batch
job) calls. It wires the pure services together and keeps the two halves
independent: identifier provisioning and credential generation share no
runtime state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from pydantic import ValidationError as ModelValidationError

from core.domain.models import IdentifierPolicy, PassphraseOptions, PasswordPolicy
from core.errors import ValidationError
from core.interfaces.existence import ExistenceCheck
from core.resources_loader import (
    DEFAULT_WORD_LIST_PATTERN,
    WordListCache,
    resolve_word_list_path,
)
from core.services import passphrase as passphrase_service
from core.services import password as password_service
from core.services.identifier import (
    DEFAULT_MAX_ATTEMPTS,
    derive_identifier,
    resolve_identifier,
)


def derive_and_resolve_identifier(
    given_name: str,
    surname: str,
    exists: ExistenceCheck,
    *,
    policy: IdentifierPolicy | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """Deriva el candidato base y lo resuelve contra `exists`."""

    policy = policy or IdentifierPolicy()
    base = derive_identifier(given_name, surname, policy=policy)
    resolved = resolve_identifier(
        base,
        exists,
        max_length=policy.max_length,
        max_attempts=max_attempts,
    )
    return resolved.final


def generate_password(
    *,
    policy: PasswordPolicy | None = None,
    username: str | None = None,
) -> str:
    return password_service.generate_password(policy=policy, username=username)


def generate_passphrases(
    min_length: int,
    word_list_path: str | Path | None,
    iterations: int,
    complex: bool,
    banned_words: str | Sequence[str],
    *,
    cache: WordListCache | None = None,
    search_root: Path | None = None,
    pattern: str = DEFAULT_WORD_LIST_PATTERN,
    recursive: bool = True,
    max_word_attempts: int = 1000,
    encoding: str = "utf-8",
) -> list[str]:
    """Genera `iterations` passphrases usando la lista en `word_list_path`.

    Si la ruta no existe, se descubre una lista por patrón bajo `search_root`.
    Sin `cache`, el corpus se lee en cada llamada.
    """

    try:
        options = PassphraseOptions(
            min_length=min_length,
            iterations=iterations,
            complex=complex,
            banned_words=banned_words,
            max_word_attempts=max_word_attempts,
        )
    except ModelValidationError as exc:
        raise ValidationError(f"Invalid passphrase parameters: {exc}") from exc
    configured = Path(word_list_path) if word_list_path is not None else None
    path = resolve_word_list_path(
        configured,
        search_root=search_root,
        pattern=pattern,
        recursive=recursive,
    )
    if cache is None:
        cache = WordListCache(encoding=encoding)
    corpus = cache.load(path)
    return passphrase_service.generate_passphrases(corpus, options)
