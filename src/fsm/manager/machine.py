"""
Máquina de estados de resposta de uma interação.

Garante no máximo um acknowledgement por interação, dentro do prazo, e
follow-ups apenas enquanto o token de continuação for válido. Violações
são sinalizadas com exceções, nunca descartadas em silêncio.
"""

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from fsm.rules.guards import (
    REASON_TOKEN_EXPIRED,
    GuardResult,
    TransitionContext,
    evaluate_guards,
    token_expiry,
)
from fsm.states.interaction import (
    DEFAULT_INITIAL_STATE,
    InteractionState,
    is_acknowledgement,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult
from utils.errors import FollowupExpired, StateViolation

logger = logging.getLogger(__name__)

DEFAULT_ACK_DEADLINE_MS = 3000
DEFAULT_TOKEN_TTL_SECONDS = 900


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InteractionResponseMachine:
    """
    Máquina de estados de resposta de uma interação.

    Attributes:
        current_state: Estado atual da máquina
        history: Histórico de transições realizadas
    """

    __slots__ = (
        "_ack_deadline_ms",
        "_clock",
        "_current_state",
        "_history",
        "_interaction_id",
        "_is_ping",
        "_received_at",
        "_token_expires_at",
        "_wall_clock",
    )

    def __init__(
        self,
        interaction_id: str = "",
        *,
        is_ping: bool = False,
        created_at: datetime | None = None,
        ack_deadline_ms: int = DEFAULT_ACK_DEADLINE_MS,
        token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        received_at: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Inicializa a máquina no estado RECEIVED.

        Args:
            interaction_id: Identificador da interação para logs
            is_ping: Se a interação é um PING
            created_at: Criação da interação (âncora da janela do token);
                usa o instante de recebimento se None
            ack_deadline_ms: Prazo para acknowledgement desde o recebimento
            token_ttl_seconds: Validade do token de continuação
            received_at: Instante de recebimento no relógio monotônico
                (usa o instante da construção se None)
            clock: Relógio monotônico (segundos)
            wall_clock: Relógio de parede (UTC)
        """
        self._interaction_id = interaction_id
        self._is_ping = is_ping
        self._ack_deadline_ms = ack_deadline_ms
        self._clock = clock
        self._wall_clock = wall_clock
        self._received_at = received_at if received_at is not None else clock()
        anchor = created_at or wall_clock()
        self._token_expires_at = token_expiry(anchor, token_ttl_seconds)
        self._current_state = DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []

    @property
    def current_state(self) -> InteractionState:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def interaction_id(self) -> str:
        return self._interaction_id

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    @property
    def is_acknowledged(self) -> bool:
        return self._current_state != InteractionState.RECEIVED

    @property
    def token_expires_at(self) -> datetime:
        return self._token_expires_at

    def elapsed_ms(self) -> float:
        """Milissegundos desde o recebimento."""
        return (self._clock() - self._received_at) * 1000

    def can_follow_up(self) -> bool:
        """Verifica se um follow-up seria aceito agora."""
        return self._check(InteractionState.FOLLOWED_UP) is None

    def get_valid_targets(self) -> frozenset[InteractionState]:
        """Retorna estados de destino válidos a partir do estado atual."""
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: InteractionState,
        trigger: str,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho (ex: 'acknowledge', 'followup')

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        error_reason = self._check(target)
        if error_reason is not None:
            return TransitionResult(success=False, error_reason=error_reason)

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            elapsed_ms=max(self.elapsed_ms(), 0.0),
        )
        self._current_state = target
        self._history.append(transition)
        return TransitionResult(success=True, transition=transition)

    def acknowledge(self, target: InteractionState) -> StateTransition:
        """
        Registra o acknowledgement da interação.

        Raises:
            StateViolation: Se já houve acknowledgement, se o alvo não for
                um acknowledgement ou se algum guard negar.
        """
        if not is_acknowledgement(target):
            raise StateViolation("not_an_acknowledgement")
        if self.is_acknowledged:
            logger.error(
                "interaction_duplicate_acknowledgement",
                extra={
                    "interaction_id": self._interaction_id,
                    "current_state": self._current_state.name,
                    "target_state": target.name,
                },
            )
            raise StateViolation("duplicate_acknowledgement")

        result = self.transition(target, trigger="acknowledge")
        if not result.success or result.transition is None:
            raise StateViolation(result.error_reason or "acknowledge_denied")
        return result.transition

    def record_followup(self) -> StateTransition:
        """
        Registra um follow-up.

        Raises:
            FollowupExpired: Se o token de continuação expirou
            StateViolation: Se a interação não aceita follow-up no estado atual
        """
        result = self.transition(InteractionState.FOLLOWED_UP, trigger="followup")
        if result.success and result.transition is not None:
            return result.transition
        if result.error_reason == REASON_TOKEN_EXPIRED:
            raise FollowupExpired(REASON_TOKEN_EXPIRED)
        raise StateViolation(result.error_reason or "followup_denied")

    def get_state_summary(self) -> dict[str, Any]:
        """
        Retorna resumo do estado atual para observability.

        Returns:
            Dict com informações do estado (seguro para logs)
        """
        return {
            "interaction_id": self._interaction_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        """Retorna histórico em formato seguro para logs."""
        return [t.to_log_dict() for t in self._history]

    def _check(self, target: InteractionState) -> str | None:
        if not is_transition_valid(self._current_state, target):
            if self._current_state == InteractionState.RECEIVED:
                return "followup_before_acknowledgement"
            return f"invalid_transition:{self._current_state.name}->{target.name}"

        guard_result: GuardResult = evaluate_guards(
            self._current_state,
            target,
            TransitionContext(
                is_ping=self._is_ping,
                elapsed_ms=self.elapsed_ms(),
                ack_deadline_ms=self._ack_deadline_ms,
                token_expires_at=self._token_expires_at,
                now=self._wall_clock(),
            ),
        )
        if not guard_result.allowed:
            return guard_result.reason or "guard_denied"
        return None


def create_machine(
    interaction_id: str,
    *,
    is_ping: bool = False,
    created_at: datetime | None = None,
    ack_deadline_ms: int = DEFAULT_ACK_DEADLINE_MS,
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    received_at: float | None = None,
) -> InteractionResponseMachine:
    """Factory function para criar a máquina de uma interação."""
    return InteractionResponseMachine(
        interaction_id,
        is_ping=is_ping,
        created_at=created_at,
        ack_deadline_ms=ack_deadline_ms,
        token_ttl_seconds=token_ttl_seconds,
        received_at=received_at,
    )
