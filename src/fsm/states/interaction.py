"""
Estados de resposta de uma interação.

Received → Acknowledged(Pong | Immediate | Deferred) → [FollowedUp]*

Um acknowledgement Pong encerra a interação; os demais permitem
follow-ups enquanto o token de continuação for válido.
"""

from enum import StrEnum


class InteractionState(StrEnum):
    """
    Estados de resposta de uma interação.

    Estados:
        - RECEIVED: Interação decodificada, nenhum acknowledgement enviado
        - ACKNOWLEDGED_PONG: Respondido PING com PONG (terminal)
        - ACKNOWLEDGED_IMMEDIATE: Mensagem imediata enviada
        - ACKNOWLEDGED_DEFERRED: Resposta adiada, follow-up esperado
        - FOLLOWED_UP: Ao menos um follow-up enviado
    """

    RECEIVED = "RECEIVED"
    ACKNOWLEDGED_PONG = "ACKNOWLEDGED_PONG"
    ACKNOWLEDGED_IMMEDIATE = "ACKNOWLEDGED_IMMEDIATE"
    ACKNOWLEDGED_DEFERRED = "ACKNOWLEDGED_DEFERRED"
    FOLLOWED_UP = "FOLLOWED_UP"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[InteractionState] = frozenset({
    InteractionState.ACKNOWLEDGED_PONG,
})

ACKNOWLEDGED_STATES: frozenset[InteractionState] = frozenset({
    InteractionState.ACKNOWLEDGED_PONG,
    InteractionState.ACKNOWLEDGED_IMMEDIATE,
    InteractionState.ACKNOWLEDGED_DEFERRED,
})

DEFAULT_INITIAL_STATE: InteractionState = InteractionState.RECEIVED


def is_terminal(state: InteractionState) -> bool:
    """Verifica se o estado é terminal."""
    return state in TERMINAL_STATES


def is_acknowledgement(state: InteractionState) -> bool:
    """Verifica se o estado representa um acknowledgement."""
    return state in ACKNOWLEDGED_STATES
