"""Respostas a interações (variante fechada).

Pong | ImmediateMessage | Deferred respondem ao webhook (uma única vez
por interação); Followup é enviado depois, pelo token de continuação.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class CallbackType(IntEnum):
    """Tipos de callback do webhook de interações."""

    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5


# Flag de mensagem visível só para quem invocou
EPHEMERAL_FLAG = 1 << 6


@dataclass(frozen=True, slots=True)
class Pong:
    pass


@dataclass(frozen=True, slots=True)
class ImmediateMessage:
    content: str
    ephemeral: bool = False


@dataclass(frozen=True, slots=True)
class Deferred:
    ephemeral: bool = False


@dataclass(frozen=True, slots=True)
class Followup:
    content: str


Acknowledgement = Pong | ImmediateMessage | Deferred
InteractionResponse = Pong | ImmediateMessage | Deferred | Followup
