"""Cliente HTTP do worker para o proxy requester.

Follow-ups e mensagens de canal saem pelo proxy, que aplica o rate limit
e as credenciais do bot no upstream.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from api.payload_builders.discord import build_response_payload
from app.domain.forwarding import IDEMPOTENT_METHODS
from utils.errors import UpstreamError, UpstreamUnavailable

if TYPE_CHECKING:
    from app.domain.responses import Followup

logger = logging.getLogger(__name__)


@dataclass
class RequesterClientConfig:
    """Configuração do cliente do proxy."""

    base_url: str = "http://localhost:8088"
    base_path: str = "/api"
    api_version: str = "v10"
    bot_token: str = field(default="", repr=False)
    timeout_seconds: float = 10.0
    max_retries: int = 2
    backoff_base_seconds: float = 0.5
    backoff_max_seconds: float = 5.0

    @property
    def endpoint(self) -> str:
        path = self.base_path.strip("/")
        return f"{self.base_url.rstrip('/')}/{path}/{self.api_version}"


class RequesterClient:
    """Implementa InteractionWebhookClientProtocol sobre o proxy."""

    def __init__(
        self,
        config: RequesterClientConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client

    async def post_followup(
        self,
        application_id: str,
        token: str,
        followup: Followup,
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            f"webhooks/{application_id}/{token}",
            build_response_payload(followup),
        )

    async def edit_original(
        self,
        application_id: str,
        token: str,
        followup: Followup,
    ) -> dict[str, Any]:
        return await self.request(
            "PATCH",
            f"webhooks/{application_id}/{token}/messages/@original",
            build_response_payload(followup),
        )

    async def create_channel_message(
        self,
        channel_id: str,
        followup: Followup,
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            f"channels/{channel_id}/messages",
            build_response_payload(followup),
        )

    async def request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | list[Any] | None = None,
    ) -> Any:
        """Envia ao proxy e devolve o JSON da resposta (ou {} sem corpo).

        Raises:
            UpstreamError: Resposta de erro do proxy (status e corpo preservados)
            UpstreamUnavailable: Proxy inacessível após retries
        """
        url = f"{self._config.endpoint}/{path.lstrip('/')}"
        headers = {
            "Authorization": f"Bot {self._config.bot_token}",
            "Content-Type": "application/json",
        }
        idempotent = method.upper() in IDEMPOTENT_METHODS
        for attempt in range(self._config.max_retries + 1):
            try:
                response = await self._send(method, url, payload, headers)
            except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
                # Request não saiu do worker: reenvio é seguro para qualquer método
                if attempt >= self._config.max_retries:
                    raise UpstreamUnavailable("requester_connection_error") from exc
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
                continue
            except httpx.TransportError as exc:
                # O proxy pode já ter encaminhado: só reenvia métodos idempotentes
                if not idempotent or attempt >= self._config.max_retries:
                    logger.warning(
                        "requester_call_interrupted",
                        extra={"method": method, "error_type": type(exc).__name__},
                    )
                    raise UpstreamUnavailable("requester_connection_error") from exc
                await _backoff_sleep(
                    attempt,
                    self._config.backoff_base_seconds,
                    self._config.backoff_max_seconds,
                )
                continue

            if response.status_code >= 400:
                logger.warning(
                    "requester_call_failed",
                    extra={"method": method, "status_code": response.status_code},
                )
                raise UpstreamError(
                    "requester_error",
                    status_code=response.status_code,
                    body=response.content,
                )
            if not response.content:
                return {}
            return response.json()
        raise UpstreamUnavailable("requester_retry_exhausted")

    async def _send(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | list[Any] | None,
        headers: dict[str, str],
    ) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(
                method, url, json=payload, headers=headers, timeout=self._config.timeout_seconds
            )
        async with httpx.AsyncClient() as client:
            return await client.request(
                method, url, json=payload, headers=headers, timeout=self._config.timeout_seconds
            )


async def _backoff_sleep(attempt: int, base: float, max_seconds: float) -> None:
    backoff = min((2**attempt) * base, max_seconds)
    logger.info("requester_backoff", extra={"backoff_seconds": backoff})
    await asyncio.sleep(backoff)
