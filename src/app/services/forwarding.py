"""Pipeline de encaminhamento do proxy para a REST API upstream.

Monta a requisição (credenciais do bot, query string e corpo inalterados),
envia pelo transporte respeitando o bucket e relaya o resultado. 429 é
reenviado após a espera pedida pelo upstream, até o limite de tentativas;
5xx só é reenviado para métodos idempotentes; demais erros são repassados.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from app.domain.forwarding import ForwardRequest
from app.infra.ratelimit import parse_rate_limit, retry_delay
from app.observability import record_rate_limited
from utils.errors import UpstreamError, UpstreamRateLimited

if TYPE_CHECKING:
    from app.domain.forwarding import ForwardResult
    from app.protocols.upstream_transport import UpstreamTransportProtocol
    from routing.types import ResolvedRoute

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/json"
USER_AGENT = "DiscordBot (https://github.com/ponte-discord, 1.0)"

Sleep = Callable[[float], Awaitable[None]]


def build_forward_request(
    method: str,
    route: ResolvedRoute,
    *,
    api_endpoint: str,
    bot_token: str,
    query_string: str = "",
    content_type: str | None = None,
    body: bytes = b"",
    audit_log_reason: str | None = None,
) -> ForwardRequest:
    """Monta a requisição upstream a partir da rota resolvida."""
    url = f"{api_endpoint.rstrip('/')}/{route.path}"
    if query_string:
        url = f"{url}?{query_string}"

    headers = {
        "Authorization": f"Bot {bot_token}",
        "Content-Type": content_type or DEFAULT_CONTENT_TYPE,
        "User-Agent": USER_AGENT,
    }
    if audit_log_reason:
        headers["X-Audit-Log-Reason"] = audit_log_reason
    return ForwardRequest(method=method.upper(), url=url, headers=headers, body=body)


class ForwardingPipeline:
    """Encaminha requisições com retry limitado e ciente de idempotência."""

    def __init__(
        self,
        transport: UpstreamTransportProtocol,
        *,
        max_rate_limit_retries: int = 3,
        max_server_error_retries: int = 1,
        server_error_backoff_seconds: float = 0.5,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._max_rate_limit_retries = max_rate_limit_retries
        self._max_server_error_retries = max_server_error_retries
        self._server_error_backoff_seconds = server_error_backoff_seconds
        self._sleep = sleep

    async def forward(self, request: ForwardRequest, route: ResolvedRoute) -> ForwardResult:
        """Envia e devolve a resposta de sucesso do upstream.

        Raises:
            UpstreamRateLimited: Tentativas esgotadas em 429
            UpstreamError: Erro 4xx/5xx do upstream (repassado sem reinterpretação)
            UpstreamUnavailable: Falha de transporte
        """
        bucket = route.bucket
        rate_limit_attempts = 0
        server_error_attempts = 0

        while True:
            result = await self._transport.send(request, bucket)

            if result.is_rate_limited:
                info = parse_rate_limit(result.headers, result.body)
                delay = retry_delay(info)
                record_rate_limited(str(bucket), delay, info.is_global, rate_limit_attempts)
                self._transport.defer(bucket, delay, is_global=info.is_global)
                if rate_limit_attempts >= self._max_rate_limit_retries:
                    raise UpstreamRateLimited("rate_limit_retries_exhausted", retry_after=delay)
                rate_limit_attempts += 1
                await self._sleep(delay)
                continue

            if (
                result.is_server_error
                and request.is_idempotent
                and server_error_attempts < self._max_server_error_retries
            ):
                server_error_attempts += 1
                backoff = self._server_error_backoff_seconds * (2 ** (server_error_attempts - 1))
                logger.info(
                    "upstream_server_error_retry",
                    extra={
                        "route_id": route.identity.route_id,
                        "status_code": result.status_code,
                        "backoff_seconds": backoff,
                    },
                )
                await self._sleep(backoff)
                continue

            if not result.is_success:
                logger.info(
                    "upstream_error_relayed",
                    extra={
                        "route_id": route.identity.route_id,
                        "bucket": str(bucket),
                        "status_code": result.status_code,
                    },
                )
                raise UpstreamError(
                    "upstream_error",
                    status_code=result.status_code,
                    body=result.body,
                    headers=dict(result.headers),
                )

            return result
