"""
Exports públicos do módulo fsm/manager.

Máquina de estados de resposta de interações.
"""

from fsm.manager.machine import (
    DEFAULT_ACK_DEADLINE_MS,
    DEFAULT_TOKEN_TTL_SECONDS,
    InteractionResponseMachine,
    create_machine,
)

__all__ = [
    "DEFAULT_ACK_DEADLINE_MS",
    "DEFAULT_TOKEN_TTL_SECONDS",
    "InteractionResponseMachine",
    "create_machine",
]
