"""
Regras de transição válidas entre estados de resposta.

Somente RECEIVED aceita acknowledgement; FOLLOWED_UP aceita loop
(qualquer número de follow-ups).
"""

from fsm.states.interaction import TERMINAL_STATES, InteractionState

TransitionMap = dict[InteractionState, frozenset[InteractionState]]

VALID_TRANSITIONS: TransitionMap = {
    InteractionState.RECEIVED: frozenset({
        InteractionState.ACKNOWLEDGED_PONG,
        InteractionState.ACKNOWLEDGED_IMMEDIATE,
        InteractionState.ACKNOWLEDGED_DEFERRED,
    }),
    InteractionState.ACKNOWLEDGED_IMMEDIATE: frozenset({
        InteractionState.FOLLOWED_UP,
    }),
    InteractionState.ACKNOWLEDGED_DEFERRED: frozenset({
        InteractionState.FOLLOWED_UP,
    }),
    InteractionState.FOLLOWED_UP: frozenset({
        InteractionState.FOLLOWED_UP,
    }),
    # PONG: sem capacidade de follow-up
    InteractionState.ACKNOWLEDGED_PONG: frozenset(),
}


def get_valid_targets(state: InteractionState) -> frozenset[InteractionState]:
    """
    Retorna os estados de destino válidos para um estado de origem.

    Args:
        state: Estado de origem

    Returns:
        Conjunto de estados de destino permitidos (vazio se terminal)
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: InteractionState, to_state: InteractionState) -> bool:
    """Verifica se uma transição é permitida pelo mapa."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica:
    - Todos os estados do enum estão no mapa
    - Estados terminais têm conjunto vazio
    - Nenhum estado volta para RECEIVED

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in InteractionState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    for from_state, targets in VALID_TRANSITIONS.items():
        if InteractionState.RECEIVED in targets:
            errors.append(f"Transição {from_state.name} → RECEIVED não permitida")

    return errors
