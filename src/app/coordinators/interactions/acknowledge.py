"""Acknowledgement de interações e execução do trabalho posterior.

O caminho do acknowledgement é puro CPU: cria a máquina de estados,
despacha, registra a transição. Follow-ups rodam depois, em task própria.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.interaction import InteractionKind
from app.domain.responses import Deferred, ImmediateMessage, Pong
from app.observability import record_latency
from app.services.followups import FollowupSender
from fsm import InteractionResponseMachine, InteractionState
from utils.errors import FollowupExpired, InternalFailure

if TYPE_CHECKING:
    from app.coordinators.interactions.dispatcher import InteractionDispatcher
    from app.domain.interaction import Interaction
    from app.domain.responses import Acknowledgement
    from app.protocols.interaction_webhook import InteractionWebhookClientProtocol
    from app.use_cases.commands.base import FollowupWork

logger = logging.getLogger(__name__)

_ACK_STATES: dict[type, InteractionState] = {
    Pong: InteractionState.ACKNOWLEDGED_PONG,
    ImmediateMessage: InteractionState.ACKNOWLEDGED_IMMEDIATE,
    Deferred: InteractionState.ACKNOWLEDGED_DEFERRED,
}


@dataclass(frozen=True, slots=True)
class AcknowledgedInteraction:
    """Interação já reconhecida, pronta para serialização."""

    interaction: Interaction
    response: Acknowledgement
    machine: InteractionResponseMachine
    after_ack: FollowupWork | None = None


def acknowledge_interaction(
    interaction: Interaction,
    dispatcher: InteractionDispatcher,
    machine: InteractionResponseMachine,
) -> AcknowledgedInteraction:
    """Despacha a interação e registra o acknowledgement.

    Raises:
        StateViolation: Acknowledgement duplicado ou fora do prazo
        UnsupportedOperation: Tipo de interação sem despacho
    """
    outcome = dispatcher.dispatch(interaction)
    target = _ACK_STATES.get(type(outcome.response))
    if target is None:
        raise InternalFailure("handler_returned_non_acknowledgement")

    transition = machine.acknowledge(target)
    elapsed_ms = machine.elapsed_ms()
    record_latency("interactions", "acknowledge", elapsed_ms)
    logger.info(
        "interaction_acknowledged",
        extra={
            **interaction.to_log_dict(),
            "to_state": transition.to_state.name,
            "has_followup_work": outcome.after_ack is not None,
        },
    )
    # PING nunca agenda trabalho posterior
    after_ack = None if interaction.kind is InteractionKind.PING else outcome.after_ack
    return AcknowledgedInteraction(
        interaction=interaction,
        response=outcome.response,
        machine=machine,
        after_ack=after_ack,
    )


async def run_followup_work(
    acknowledged: AcknowledgedInteraction,
    client: InteractionWebhookClientProtocol,
) -> None:
    """Executa o trabalho posterior ao acknowledgement.

    FollowupExpired é reportado e encerra o trabalho sem retry; demais
    falhas propagam para o callback da task.
    """
    if acknowledged.after_ack is None:
        return
    sender = FollowupSender(acknowledged.interaction, acknowledged.machine, client)
    try:
        await acknowledged.after_ack(sender)
    except FollowupExpired:
        logger.warning(
            "interaction_followup_abandoned",
            extra={
                "interaction_id": acknowledged.interaction.id,
                "reason": "continuation_token_expired",
            },
        )
