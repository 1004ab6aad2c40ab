"""Endpoint do proxy requester.

Endpoints:
- {GET,POST,PUT,PATCH,DELETE} <base_path>/{path}: encaminhamento para a REST API

Fluxo:
1. Autorização (Bot <token> ou token puro)
2. Rota do catálogo → identidade + bucket
3. Encaminhamento com credenciais do bot (retry limitado no pipeline)
4. Repasse de status e corpo do upstream, sem reinterpretação
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.validators.discord import validate_proxy_authorization
from app.infra.ratelimit import rate_limit_headers
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.services.forwarding import DEFAULT_CONTENT_TYPE, build_forward_request
from config.settings import get_discord_settings
from utils.errors import (
    AuthenticationFailure,
    BridgeError,
    UpstreamError,
    UpstreamRateLimited,
    UpstreamUnavailable,
)

if TYPE_CHECKING:
    from app.services.forwarding import ForwardingPipeline
    from routing import RouteCatalog, RouteResolver

logger = logging.getLogger(__name__)

router = APIRouter()

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

_VERSION_PREFIX = re.compile(r"^v\d+/")

# Lazy-loaded (inicializados na primeira requisição)
_catalog: RouteCatalog | None = None
_resolver: RouteResolver | None = None
_pipeline: ForwardingPipeline | None = None


def get_route_catalog() -> RouteCatalog:
    global _catalog
    if _catalog is None:
        from routing import load_route_catalog

        _catalog = load_route_catalog()
    return _catalog


def get_route_resolver() -> RouteResolver:
    global _resolver
    if _resolver is None:
        from app.bootstrap.dependencies import create_route_resolver

        _resolver = create_route_resolver(get_route_catalog())
    return _resolver


def get_forwarding_pipeline() -> ForwardingPipeline:
    """Obtém o pipeline de encaminhamento (lazy-loading)."""
    global _pipeline
    if _pipeline is None:
        from app.bootstrap.dependencies import create_forwarding_pipeline

        _pipeline = create_forwarding_pipeline()
    return _pipeline


def reset_proxy_dependencies() -> None:
    """Descarta dependências cacheadas (shutdown e testes)."""
    global _catalog, _resolver, _pipeline
    _catalog = None
    _resolver = None
    _pipeline = None


def strip_version_prefix(path: str) -> str:
    """Remove o segmento de versão opcional (ex: v10/) do início do path."""
    return _VERSION_PREFIX.sub("", path.lstrip("/"), count=1)


def _text(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


@router.api_route("/{path:path}", methods=PROXY_METHODS, response_model=None)
async def proxy_request(path: str, request: Request) -> Response:
    """Encaminha a requisição para a REST API.

    Returns:
        Resposta do upstream (status e corpo) ou erro classificado.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    method = request.method.upper()
    route_path = strip_version_prefix(path)

    try:
        settings = get_discord_settings()
        content_type = request.headers.get("content-type") or DEFAULT_CONTENT_TYPE

        try:
            validate_proxy_authorization(request.headers.get("authorization"), settings.bot_token)

            match = get_route_catalog().match(method, route_path)
            if match is None:
                logger.info(
                    "proxy_route_not_found",
                    extra={"method": method, "path": route_path},
                )
                return _text("Not Found", status.HTTP_404_NOT_FOUND)

            route = get_route_resolver().resolve(match.spec.route_id, match.params)
            forward_request = build_forward_request(
                method,
                route,
                api_endpoint=settings.api_endpoint,
                bot_token=settings.bot_token,
                query_string=request.url.query,
                content_type=content_type,
                body=await request.body(),
                audit_log_reason=request.headers.get("x-audit-log-reason"),
            )
            result = await get_forwarding_pipeline().forward(forward_request, route)

        except AuthenticationFailure as exc:
            logger.warning(
                "proxy_authorization_failed",
                extra={"correlation_id": get_correlation_id(), "error": exc.reason},
            )
            return _text("Unauthorized", status.HTTP_401_UNAUTHORIZED)

        except UpstreamRateLimited as exc:
            retry_after = exc.retry_after or 1.0
            return JSONResponse(
                content={
                    "message": "You are being rate limited.",
                    "retry_after": retry_after,
                    "global": False,
                },
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={"Retry-After": f"{retry_after:g}"},
            )

        except UpstreamError as exc:
            return Response(
                content=exc.body,
                status_code=exc.status_code,
                media_type=content_type,
                headers=rate_limit_headers(exc.headers),
            )

        except UpstreamUnavailable as exc:
            logger.warning(
                "proxy_upstream_unavailable",
                extra={"correlation_id": get_correlation_id(), "error": exc.reason},
            )
            return _text("Bad Gateway", status.HTTP_502_BAD_GATEWAY)

        except BridgeError as exc:
            logger.error(
                "proxy_request_failed",
                extra={
                    "correlation_id": get_correlation_id(),
                    "error_type": type(exc).__name__,
                    "error": exc.reason,
                },
            )
            return _text("Internal Server Error", exc.status_code)

        logger.info(
            "proxy_request_forwarded",
            extra={
                "route_id": route.identity.route_id,
                "bucket": str(route.bucket),
                "status_code": result.status_code,
            },
        )
        return Response(
            content=result.body,
            status_code=result.status_code,
            media_type=content_type,
            headers=rate_limit_headers(result.headers),
        )

    finally:
        reset_correlation_id(token)
