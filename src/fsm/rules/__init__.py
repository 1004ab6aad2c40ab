"""
Exports públicos do módulo fsm/rules.

Guards para transições de resposta.
"""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    REASON_ACK_DEADLINE,
    REASON_PING_REQUIRES_PONG,
    REASON_PONG_REQUIRES_PING,
    REASON_TERMINAL,
    REASON_TOKEN_EXPIRED,
    Guard,
    GuardResult,
    TransitionContext,
    evaluate_guards,
    guard_ack_deadline,
    guard_ping_pong,
    guard_terminal_state,
    guard_token_window,
    token_expiry,
)

__all__ = [
    "DEFAULT_GUARDS",
    "REASON_ACK_DEADLINE",
    "REASON_PING_REQUIRES_PONG",
    "REASON_PONG_REQUIRES_PING",
    "REASON_TERMINAL",
    "REASON_TOKEN_EXPIRED",
    "Guard",
    "GuardResult",
    "TransitionContext",
    "evaluate_guards",
    "guard_ack_deadline",
    "guard_ping_pong",
    "guard_terminal_state",
    "guard_token_window",
    "token_expiry",
]
