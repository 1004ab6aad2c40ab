"""
Módulo FSM: Máquina de estados de resposta a interações.

Governa a sequência legal de respostas de cada interação:
um único acknowledgement (PONG, imediato ou adiado) dentro do prazo e,
depois dele, follow-ups enquanto o token de continuação for válido.

Estrutura:
    - states/: Estados de resposta (InteractionState enum)
    - transitions/: Regras de transição (VALID_TRANSITIONS)
    - rules/: Guards (ping/pong, prazo de ack, janela do token)
    - manager/: Máquina de estados (InteractionResponseMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

# Manager
from fsm.manager import (
    DEFAULT_ACK_DEADLINE_MS,
    DEFAULT_TOKEN_TTL_SECONDS,
    InteractionResponseMachine,
    create_machine,
)

# Guards/Rules
from fsm.rules import (
    GuardResult,
    TransitionContext,
    evaluate_guards,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    InteractionState,
    is_acknowledgement,
    is_terminal,
)

# Transições
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)

# Types
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_ACK_DEADLINE_MS",
    "DEFAULT_INITIAL_STATE",
    "DEFAULT_TOKEN_TTL_SECONDS",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "GuardResult",
    "InteractionResponseMachine",
    "InteractionState",
    "StateTransition",
    "TransitionContext",
    "TransitionResult",
    "create_machine",
    "evaluate_guards",
    "get_valid_targets",
    "is_acknowledgement",
    "is_terminal",
    "is_transition_valid",
    "validate_transition_map",
]
