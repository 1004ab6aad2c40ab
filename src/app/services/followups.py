"""Envio de follow-ups de uma interação já reconhecida.

Cada follow-up passa pela máquina de estados antes do envio: com o token
expirado a chamada falha com FollowupExpired e não é reenviada.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.responses import Followup
from app.observability import record_followup
from utils.errors import FollowupExpired

if TYPE_CHECKING:
    from app.domain.interaction import Interaction
    from app.protocols.interaction_webhook import InteractionWebhookClientProtocol
    from fsm import InteractionResponseMachine

logger = logging.getLogger(__name__)


class FollowupSender:
    """Follow-ups vinculados a uma interação e à sua máquina de estados."""

    def __init__(
        self,
        interaction: Interaction,
        machine: InteractionResponseMachine,
        client: InteractionWebhookClientProtocol,
    ) -> None:
        self._interaction = interaction
        self._machine = machine
        self._client = client

    @property
    def interaction(self) -> Interaction:
        return self._interaction

    async def send(self, content: str) -> dict[str, Any]:
        """Envia um novo follow-up pelo webhook da aplicação.

        Raises:
            FollowupExpired: Se a janela do token já terminou
            StateViolation: Se a interação não aceita follow-up
        """
        followup = Followup(content=content)
        self._record_transition()
        return await self._deliver(
            self._client.post_followup(
                self._interaction.application_id,
                self._interaction.token,
                followup,
            )
        )

    async def edit_original(self, content: str) -> dict[str, Any]:
        """Substitui o conteúdo da resposta original (útil após Deferred)."""
        followup = Followup(content=content)
        self._record_transition()
        return await self._deliver(
            self._client.edit_original(
                self._interaction.application_id,
                self._interaction.token,
                followup,
            )
        )

    async def send_channel_message(self, content: str, channel_id: str | None = None) -> dict[str, Any]:
        """Envia mensagem comum no canal, com credenciais do bot.

        Não usa o token de continuação, então não depende da janela.
        """
        target = channel_id or self._interaction.channel_id
        if not target:
            raise ValueError("channel_id ausente para mensagem de canal")
        return await self._client.create_channel_message(target, Followup(content=content))

    def _record_transition(self) -> None:
        try:
            self._machine.record_followup()
        except FollowupExpired:
            record_followup("expired", self._interaction.id)
            logger.warning(
                "followup_token_expired",
                extra={
                    "interaction_id": self._interaction.id,
                    "token_expires_at": self._machine.token_expires_at.isoformat(),
                },
            )
            raise

    async def _deliver(self, call: Any) -> dict[str, Any]:
        try:
            result = await call
        except Exception:
            record_followup("failed", self._interaction.id)
            raise
        record_followup("sent", self._interaction.id)
        return result
