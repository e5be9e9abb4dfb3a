"""Contrato del existence-check de directorio.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Cualquier callable `(str) -> bool` sirve (un `set.__contains__`, un lambda,
  un adaptador HTTP), así que el resolver es testeable sin red.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ExistenceCheck(Protocol):
    """Contrato mínimo para consultar si un identificador ya está en uso.

    Reglas de diseño:
    - Síncrono y bloqueante: el caller aplica timeouts/cancelación.
    - Una llamada por candidato; el Core no cachea respuestas.
    """

    def __call__(self, candidate: str) -> bool:
        """Devuelve True si `candidate` ya existe en el directorio."""

        ...
