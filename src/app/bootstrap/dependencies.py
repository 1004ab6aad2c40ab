"""Factories de dependências: criação de implementações concretas.

Este módulo centraliza a criação das peças do worker (dispatcher, cliente
do proxy) e do requester (resolver, transporte, pipeline) a partir das
settings de ambiente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.discord import DiscordTransport, RequesterClient, RequesterClientConfig
from app.bootstrap.clients import create_requester_http_client, create_upstream_http_client
from app.coordinators.interactions import InteractionDispatcher
from app.services.forwarding import ForwardingPipeline
from app.use_cases.commands import default_commands, default_components
from config.settings import get_discord_settings, get_requester_settings
from routing import RouteResolver, load_route_catalog

if TYPE_CHECKING:
    from routing import RouteCatalog

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Worker
# ──────────────────────────────────────────────────────────────────────────────


def create_interaction_dispatcher() -> InteractionDispatcher:
    """Cria dispatcher com os comandos e componentes padrão."""
    dispatcher = InteractionDispatcher(default_commands(), default_components())
    logger.info(
        "interaction_dispatcher_created",
        extra={
            "commands": list(dispatcher.command_names),
            "component_prefixes": list(dispatcher.component_prefixes),
        },
    )
    return dispatcher


def create_requester_client() -> RequesterClient:
    """Cria cliente do proxy usado para follow-ups."""
    discord_settings = get_discord_settings()
    requester_settings = get_requester_settings()
    config = RequesterClientConfig(
        base_url=requester_settings.requester_url,
        base_path=requester_settings.base_path,
        api_version=discord_settings.api_version,
        bot_token=discord_settings.bot_token,
        timeout_seconds=requester_settings.timeout_seconds,
        max_retries=requester_settings.max_retries,
    )
    return RequesterClient(config, client=create_requester_http_client())


# ──────────────────────────────────────────────────────────────────────────────
# Requester
# ──────────────────────────────────────────────────────────────────────────────


def create_route_resolver(catalog: RouteCatalog | None = None) -> RouteResolver:
    """Cria resolver sobre o catálogo informado (ou o embarcado)."""
    return RouteResolver(catalog or load_route_catalog())


def create_discord_transport() -> DiscordTransport:
    settings = get_discord_settings()
    return DiscordTransport(
        create_upstream_http_client(),
        timeout_seconds=settings.request_timeout_seconds,
    )


def create_forwarding_pipeline() -> ForwardingPipeline:
    """Cria pipeline de encaminhamento com limites das settings."""
    settings = get_discord_settings()
    pipeline = ForwardingPipeline(
        create_discord_transport(),
        max_rate_limit_retries=settings.max_rate_limit_retries,
        max_server_error_retries=settings.max_server_error_retries,
    )
    logger.info(
        "forwarding_pipeline_created",
        extra={
            "max_rate_limit_retries": settings.max_rate_limit_retries,
            "max_server_error_retries": settings.max_server_error_retries,
        },
    )
    return pipeline
