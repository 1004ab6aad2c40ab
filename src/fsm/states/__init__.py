"""
Exports públicos do módulo fsm/states.

Estados de resposta de uma interação.
"""

from fsm.states.interaction import (
    ACKNOWLEDGED_STATES,
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    InteractionState,
    is_acknowledgement,
    is_terminal,
)

__all__ = [
    "ACKNOWLEDGED_STATES",
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "InteractionState",
    "is_acknowledgement",
    "is_terminal",
]
