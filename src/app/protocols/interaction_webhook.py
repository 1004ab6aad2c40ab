"""Protocolo do cliente que envia follow-ups pelo proxy.

Evita dependência direta de app/ na camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.responses import Followup


class InteractionWebhookClientProtocol(Protocol):
    """Contrato mínimo para follow-ups e mensagens de canal."""

    async def post_followup(
        self,
        application_id: str,
        token: str,
        followup: Followup,
    ) -> dict[str, Any]: ...

    async def edit_original(
        self,
        application_id: str,
        token: str,
        followup: Followup,
    ) -> dict[str, Any]: ...

    async def create_channel_message(
        self,
        channel_id: str,
        followup: Followup,
    ) -> dict[str, Any]: ...
