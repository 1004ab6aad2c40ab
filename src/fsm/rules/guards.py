"""
Guards para transições de resposta de uma interação.

Guards recebem o contexto da interação (tipo, instantes de recebimento e
criação, prazos) e podem bloquear transições permitidas pelo mapa.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from fsm.states.interaction import (
    TERMINAL_STATES,
    InteractionState,
    is_acknowledgement,
)

# Motivos de bloqueio (estáveis, usados pelo manager para classificar falhas)
REASON_TERMINAL = "terminal_state"
REASON_PONG_REQUIRES_PING = "pong_requires_ping"
REASON_PING_REQUIRES_PONG = "ping_requires_pong"
REASON_ACK_DEADLINE = "ack_deadline_exceeded"
REASON_TOKEN_EXPIRED = "continuation_token_expired"


@dataclass(frozen=True, slots=True)
class TransitionContext:
    """
    Contexto para avaliar guards.

    Attributes:
        is_ping: Se a interação é um PING
        elapsed_ms: Tempo desde o recebimento da interação
        ack_deadline_ms: Prazo para acknowledgement
        token_expires_at: Fim da validade do token de continuação
        now: Instante atual (UTC)
    """

    is_ping: bool
    elapsed_ms: float
    ack_deadline_ms: int
    token_expires_at: datetime
    now: datetime


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


Guard = Callable[[InteractionState, InteractionState, TransitionContext], GuardResult]


def guard_terminal_state(
    from_state: InteractionState,
    to_state: InteractionState,
    context: TransitionContext,
) -> GuardResult:
    """Guard: Estados terminais não permitem saída."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(REASON_TERMINAL)
    return GuardResult.allow()


def guard_ping_pong(
    from_state: InteractionState,
    to_state: InteractionState,
    context: TransitionContext,
) -> GuardResult:
    """
    Guard: PING só recebe PONG, e PONG só responde PING.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino
        context: Contexto da interação

    Returns:
        GuardResult indicando se transição é permitida
    """
    if not is_acknowledgement(to_state):
        return GuardResult.allow()
    is_pong = to_state == InteractionState.ACKNOWLEDGED_PONG
    if is_pong and not context.is_ping:
        return GuardResult.deny(REASON_PONG_REQUIRES_PING)
    if context.is_ping and not is_pong:
        return GuardResult.deny(REASON_PING_REQUIRES_PONG)
    return GuardResult.allow()


def guard_ack_deadline(
    from_state: InteractionState,
    to_state: InteractionState,
    context: TransitionContext,
) -> GuardResult:
    """Guard: Acknowledgement só dentro do prazo desde o recebimento."""
    if is_acknowledgement(to_state) and context.elapsed_ms > context.ack_deadline_ms:
        return GuardResult.deny(REASON_ACK_DEADLINE)
    return GuardResult.allow()


def guard_token_window(
    from_state: InteractionState,
    to_state: InteractionState,
    context: TransitionContext,
) -> GuardResult:
    """Guard: Follow-up só enquanto o token de continuação é válido."""
    if to_state == InteractionState.FOLLOWED_UP and context.now >= context.token_expires_at:
        return GuardResult.deny(REASON_TOKEN_EXPIRED)
    return GuardResult.allow()


# Todos devem retornar allow() para a transição prosseguir
DEFAULT_GUARDS: list[Guard] = [
    guard_terminal_state,
    guard_ping_pong,
    guard_ack_deadline,
    guard_token_window,
]


def token_expiry(anchor: datetime, ttl_seconds: int) -> datetime:
    """Fim da janela do token a partir do instante de criação."""
    return anchor + timedelta(seconds=ttl_seconds)


def evaluate_guards(
    from_state: InteractionState,
    to_state: InteractionState,
    context: TransitionContext,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia todos os guards para uma transição.

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state, context)
        if not result.allowed:
            return result

    return GuardResult.allow()
