"""Generador de passphrases a partir de un corpus de palabras.

Por iteración:
1) Se sortea una palabra del corpus.
2) Si contiene (case-insensitive) cualquier palabra prohibida, se descarta y
   se sortea otra. Sin transformar nada de la palabra rechazada.
3) En modo `complex` se aplica una de cuatro transformaciones de caja.
4) Se añade la palabra; si aún no se llega a `min_length`, se añade un
   carácter de relleno y se vuelve a 1.
5) Si el resultado termina en relleno (la palabra lo traía), se recorta o,
   si el recorte lo dejaría corto, se añade relleno + palabra y se recorta.

Cotas:
- `max_word_attempts` por sorteo de palabra -> `NoSafeWordAvailable`.
- La misma cota limita las recomposiciones completas si una prohibida
  aparece cruzando palabra + relleno.
"""

from __future__ import annotations

import logging
import secrets
from typing import Callable, Sequence

from core.domain.models import PassphraseOptions
from core.errors import NoSafeWordAvailable


logger = logging.getLogger(__name__)


CASE_TRANSFORMS: tuple[Callable[[str], str], ...] = (
    str.lower,
    lambda word: word,
    str.title,
    str.upper,
)


def contains_banned(text: str, banned_words: Sequence[str]) -> bool:
    """True si alguna palabra prohibida aparece como subcadena (sin caja)."""

    lowered = text.lower()
    return any(banned in lowered for banned in banned_words)


def draw_safe_word(
    corpus: Sequence[str],
    banned_words: Sequence[str],
    *,
    max_attempts: int,
) -> str:
    """Sortea palabras hasta dar con una permitida (acotado)."""

    for _ in range(max_attempts):
        word = secrets.choice(corpus)
        if not contains_banned(word, banned_words):
            return word
    raise NoSafeWordAvailable(max_attempts, corpus_size=len(corpus))


def _next_word(corpus: Sequence[str], options: PassphraseOptions) -> str:
    word = draw_safe_word(
        corpus,
        options.banned_words,
        max_attempts=options.max_word_attempts,
    )
    if options.complex:
        word = secrets.choice(CASE_TRANSFORMS)(word)
    return word


def compose_passphrase(corpus: Sequence[str], options: PassphraseOptions) -> str:
    """Compone un único passphrase de longitud >= `options.min_length`.

    Si la última palabra termina en un carácter de relleno, se recorta; si el
    recorte dejaría el passphrase por debajo del mínimo, se añade relleno y
    otra palabra antes de recortar. Acotado por `max_word_attempts`.
    """

    pads = options.pads
    phrase = ""
    while True:
        phrase += _next_word(corpus, options)
        if len(phrase) >= options.min_length:
            break
        phrase += secrets.choice(pads)

    for _ in range(options.max_word_attempts):
        if phrase[-1] not in pads:
            return phrase
        if len(phrase) - 1 >= options.min_length:
            phrase = phrase[:-1]
        else:
            phrase += secrets.choice(pads) + _next_word(corpus, options)
    raise NoSafeWordAvailable(options.max_word_attempts, corpus_size=len(corpus))


def generate_passphrases(
    corpus: Sequence[str],
    options: PassphraseOptions,
) -> list[str]:
    """Genera `options.iterations` passphrases independientes."""

    if not corpus:
        raise NoSafeWordAvailable(options.max_word_attempts, corpus_size=0)

    results: list[str] = []
    for index in range(options.iterations):
        for attempt in range(1, options.max_word_attempts + 1):
            phrase = compose_passphrase(corpus, options)
            if not contains_banned(phrase, options.banned_words):
                break
            logger.debug(
                "Passphrase %d contained a banned word across a boundary, recomposing",
                index + 1,
                extra={"attempt": attempt},
            )
        else:
            raise NoSafeWordAvailable(options.max_word_attempts, corpus_size=len(corpus))
        results.append(phrase)

    logger.info(
        "Generated %d passphrase(s) (min_length=%d, complex=%s)",
        len(results),
        options.min_length,
        options.complex,
    )
    return results
