"""Protocolo do transporte que fala com a REST API upstream."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.forwarding import ForwardRequest, ForwardResult
    from routing.types import BucketKey


class UpstreamTransportProtocol(Protocol):
    """Envia respeitando o bucket informado ("send respecting bucket X")."""

    async def send(self, request: ForwardRequest, bucket: BucketKey) -> ForwardResult: ...

    def defer(self, bucket: BucketKey, seconds: float, *, is_global: bool = False) -> None: ...
