"""Transporte HTTP para a REST API do Discord com throttling por bucket."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import httpx

from app.domain.forwarding import ForwardResult
from app.infra.ratelimit import InMemoryBucketLimiter, parse_rate_limit
from app.observability import record_latency
from utils.errors import UpstreamUnavailable

if TYPE_CHECKING:
    from app.domain.forwarding import ForwardRequest
    from routing.types import BucketKey

logger = logging.getLogger(__name__)


class DiscordTransport:
    """Envia requisições serializadas por bucket e aprende o estado dos headers."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        limiter: InMemoryBucketLimiter | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._client = client
        self._limiter = limiter or InMemoryBucketLimiter()
        self._timeout_seconds = timeout_seconds

    @property
    def limiter(self) -> InMemoryBucketLimiter:
        return self._limiter

    async def send(self, request: ForwardRequest, bucket: BucketKey) -> ForwardResult:
        """Envia a requisição dentro da reserva do bucket.

        Raises:
            UpstreamUnavailable: Em timeout ou falha de conexão.
        """
        async with self._limiter.acquire(bucket):
            start = time.perf_counter()
            try:
                response = await self._client.request(
                    request.method,
                    request.url,
                    headers=dict(request.headers),
                    content=request.body or None,
                    timeout=self._timeout_seconds,
                )
            except httpx.TimeoutException as exc:
                logger.warning("upstream_timeout", extra={"bucket": str(bucket)})
                raise UpstreamUnavailable("upstream_timeout") from exc
            except httpx.TransportError as exc:
                logger.warning(
                    "upstream_transport_error",
                    extra={"bucket": str(bucket), "error_type": type(exc).__name__},
                )
                raise UpstreamUnavailable("upstream_transport_error") from exc

            record_latency("forwarding", "upstream_send", (time.perf_counter() - start) * 1000)
            self._limiter.update(bucket, parse_rate_limit(response.headers))

        return ForwardResult(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    def defer(self, bucket: BucketKey, seconds: float, *, is_global: bool = False) -> None:
        """Registra um 429: bloqueia o bucket (ou todos, se global)."""
        if is_global:
            self._limiter.lock_global(seconds)
        else:
            self._limiter.defer(bucket, seconds)
