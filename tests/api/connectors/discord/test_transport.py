"""Testes do DiscordTransport com httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from api.connectors.discord import DiscordTransport
from app.domain.forwarding import ForwardRequest
from routing import BucketKey
from utils.errors import UpstreamUnavailable

BUCKET = BucketKey("CreateMessage", "123")


def _request() -> ForwardRequest:
    return ForwardRequest(
        method="POST",
        url="https://discord.test/api/v10/channels/123/messages",
        headers={"Authorization": "Bot token", "Content-Type": "application/json"},
        body=b'{"content":"hi"}',
    )


async def test_send_relays_response_and_learns_bucket_state() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"id": "m1"},
            headers={"X-RateLimit-Remaining": "4", "X-RateLimit-Reset-After": "1.5"},
        )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        transport = DiscordTransport(client)
        result = await transport.send(_request(), BUCKET)

    assert result.status_code == 200
    assert result.body == b'{"id":"m1"}'
    assert seen[0].content == b'{"content":"hi"}'
    assert seen[0].headers["authorization"] == "Bot token"
    assert transport.limiter.state(BUCKET).remaining == 4


async def test_connection_failure_is_upstream_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(UpstreamUnavailable, match="upstream_transport_error"):
            await DiscordTransport(client).send(_request(), BUCKET)


async def test_timeout_is_upstream_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(UpstreamUnavailable, match="upstream_timeout"):
            await DiscordTransport(client).send(_request(), BUCKET)


async def test_defer_locks_bucket_or_global() -> None:
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200))) as client:
        transport = DiscordTransport(client)
        transport.defer(BUCKET, 2.0)
        transport.defer(BUCKET, 2.0, is_global=True)

    assert transport.limiter.state(BUCKET).remaining == 0
    assert transport.limiter.global_locked_until > 0
