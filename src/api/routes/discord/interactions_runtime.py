"""Runtime do webhook de interações: dependências e follow-ups em background."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.routes.discord.followup_tasks import FollowupTaskPool
from app.coordinators.interactions import run_followup_work
from app.observability import bound_correlation_id

if TYPE_CHECKING:
    from app.coordinators.interactions import AcknowledgedInteraction, InteractionDispatcher
    from app.protocols.interaction_webhook import InteractionWebhookClientProtocol

logger = logging.getLogger(__name__)

_dispatcher: InteractionDispatcher | None = None
_webhook_client: InteractionWebhookClientProtocol | None = None
_followup_pool: FollowupTaskPool | None = None


def get_dispatcher() -> InteractionDispatcher:
    """Obtém o dispatcher de interações (lazy-loading)."""
    global _dispatcher
    if _dispatcher is None:
        from app.bootstrap.dependencies import create_interaction_dispatcher

        _dispatcher = create_interaction_dispatcher()
    return _dispatcher


def get_webhook_client() -> InteractionWebhookClientProtocol:
    """Obtém o cliente de follow-ups (lazy-loading)."""
    global _webhook_client
    if _webhook_client is None:
        from app.bootstrap.dependencies import create_requester_client

        _webhook_client = create_requester_client()
    return _webhook_client


def get_followup_pool() -> FollowupTaskPool:
    global _followup_pool
    if _followup_pool is None:
        _followup_pool = FollowupTaskPool()
    return _followup_pool


async def process_followups_safe(
    *,
    acknowledged: AcknowledgedInteraction,
    client: InteractionWebhookClientProtocol,
    correlation_id: str,
) -> None:
    """Executa o trabalho pós-acknowledgement com correlation_id vinculado."""
    with bound_correlation_id(correlation_id):
        try:
            await run_followup_work(acknowledged, client)
        except Exception:
            logger.exception(
                "interaction_followup_failed",
                extra={
                    "interaction_id": acknowledged.interaction.id,
                    "correlation_id": correlation_id,
                },
            )
            raise


async def schedule_followups(
    acknowledged: AcknowledgedInteraction,
    correlation_id: str,
) -> None:
    """Agenda o trabalho pós-acknowledgement em task destacada.

    Chamado como background da resposta, depois do flush do acknowledgement.
    """
    get_followup_pool().submit(
        acknowledged.interaction.id,
        process_followups_safe(
            acknowledged=acknowledged,
            client=get_webhook_client(),
            correlation_id=correlation_id,
        ),
        correlation_id=correlation_id,
    )


async def drain_background_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda follow-ups pendentes durante shutdown e descarta o pool."""
    global _followup_pool
    if _followup_pool is None:
        return
    pool, _followup_pool = _followup_pool, None
    await pool.drain(timeout_seconds=timeout_seconds)
