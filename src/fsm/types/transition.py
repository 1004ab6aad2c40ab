"""Registros de transição da máquina de resposta.

Cada transição guarda quanto tempo se passou desde o recebimento da
interação; é esse número que mostra acknowledgements perto do prazo.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.interaction import InteractionState, is_acknowledgement


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Transição de estado de resposta (imutável).

    Attributes:
        from_state: Estado de origem
        to_state: Estado de destino
        trigger: Gatilho ('acknowledge', 'followup')
        elapsed_ms: Milissegundos desde o recebimento da interação
        timestamp: Momento da transição (UTC)
    """

    from_state: InteractionState
    to_state: InteractionState
    trigger: str
    elapsed_ms: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")
        if self.elapsed_ms < 0:
            raise ValueError("elapsed_ms não pode ser negativo")

    @property
    def is_acknowledgement(self) -> bool:
        return is_acknowledgement(self.to_state)

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": self.trigger,
            "elapsed_ms": round(self.elapsed_ms, 2),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transição.

    Sucesso sempre traz `transition`; falha sempre traz `error_reason`.
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
