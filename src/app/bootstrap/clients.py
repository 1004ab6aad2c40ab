"""Factories de clientes HTTP compartilhados.

Um cliente para a REST API (requester → upstream) e outro para o proxy
(worker → requester). Ambos vivem durante o processo e são fechados no
shutdown via close_http_clients().
"""

from __future__ import annotations

import logging
from functools import lru_cache

import httpx

from config.settings import get_discord_settings, get_requester_settings

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# httpx Client Factories
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def create_upstream_http_client() -> httpx.AsyncClient:
    """Cria cliente para a REST API (singleton)."""
    settings = get_discord_settings()
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )
    logger.info("upstream_http_client_created", extra={"api_endpoint": settings.api_endpoint})
    return client


@lru_cache(maxsize=1)
def create_requester_http_client() -> httpx.AsyncClient:
    """Cria cliente para o proxy requester (singleton)."""
    settings = get_requester_settings()
    client = httpx.AsyncClient(timeout=httpx.Timeout(settings.timeout_seconds))
    logger.info("requester_http_client_created", extra={"requester_url": settings.requester_url})
    return client


async def close_http_clients() -> None:
    """Fecha os clientes já criados e limpa o cache das factories."""
    for factory in (create_upstream_http_client, create_requester_http_client):
        if factory.cache_info().currsize == 0:
            continue
        await factory().aclose()
        factory.cache_clear()
