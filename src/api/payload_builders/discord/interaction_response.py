"""Builders do corpo JSON de respostas a interações.

Cada variante tem seu builder; campos irrelevantes à variante são omitidos
(Pong não carrega `data`).
"""

from __future__ import annotations

from typing import Any, Protocol

from app.domain.responses import (
    EPHEMERAL_FLAG,
    CallbackType,
    Deferred,
    Followup,
    ImmediateMessage,
    InteractionResponse,
    Pong,
)
from utils.errors import InternalFailure


class ResponseBuilder(Protocol):
    def build(self, response: Any) -> dict[str, Any]: ...


class PongBuilder:
    def build(self, response: Pong) -> dict[str, Any]:
        return {"type": CallbackType.PONG.value}


class ImmediateMessageBuilder:
    def build(self, response: ImmediateMessage) -> dict[str, Any]:
        data: dict[str, Any] = {"content": response.content}
        if response.ephemeral:
            data["flags"] = EPHEMERAL_FLAG
        return {"type": CallbackType.CHANNEL_MESSAGE_WITH_SOURCE.value, "data": data}


class DeferredBuilder:
    def build(self, response: Deferred) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": CallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE.value}
        if response.ephemeral:
            payload["data"] = {"flags": EPHEMERAL_FLAG}
        return payload


class FollowupBuilder:
    """Follow-ups vão para o webhook da aplicação, sem envelope de callback."""

    def build(self, response: Followup) -> dict[str, Any]:
        return {"content": response.content}


_BUILDERS: dict[type, ResponseBuilder] = {
    Pong: PongBuilder(),
    ImmediateMessage: ImmediateMessageBuilder(),
    Deferred: DeferredBuilder(),
    Followup: FollowupBuilder(),
}


def build_response_payload(response: InteractionResponse) -> dict[str, Any]:
    """Constrói o corpo JSON de uma resposta.

    Raises:
        InternalFailure: Se a variante não tiver builder registrado.
    """
    builder = _BUILDERS.get(type(response))
    if builder is None:
        raise InternalFailure("unknown_response_variant")
    return builder.build(response)
