"""Entrypoint ASGI do ponte-discord.

Uso:
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Papéis (SERVICE_ROLE):
    worker     → POST /interactions
    requester  → proxy sob REQUESTER_BASE_PATH
    all        → ambos (padrão)
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.discord.interactions_runtime import drain_background_tasks
from api.routes.discord.proxy import reset_proxy_dependencies
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.clients import close_http_clients
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Logging configurado antes de qualquer log de módulo
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup valida settings; shutdown drena follow-ups e fecha clientes HTTP."""
    settings = get_base_settings()
    logger.info("app_starting", extra={"environment": settings.environment})
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"grace_seconds": settings.shutdown_grace_seconds})
    await drain_background_tasks(timeout_seconds=settings.shutdown_grace_seconds)
    reset_proxy_dependencies()
    await close_http_clients()


def create_app() -> FastAPI:
    """Cria a aplicação com os routers do papel configurado."""
    settings = get_base_settings()
    docs_enabled = settings.is_development
    fastapi_app = FastAPI(
        title="ponte-discord",
        description="Webhook de interações e proxy de rate limit da REST API do Discord",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    fastapi_app.include_router(create_api_router())
    logger.info(
        "app_configured",
        extra={
            "serves_worker": settings.serves_worker,
            "serves_requester": settings.serves_requester,
        },
    )
    return fastapi_app


app = create_app()


def main() -> None:
    """Executa o servidor uvicorn (PORT, padrão 8080)."""
    import uvicorn

    settings = get_base_settings()
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8080")),
        reload=settings.is_development and settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
