"""Agregador de rotas: registra os routers conforme o papel do serviço.

Este módulo é responsável por criar o router principal da API
e incluir os sub-routers do worker e do requester.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.discord import interactions_router, proxy_router
from api.routes.health.router import router as health_router
from config.settings import get_base_settings, get_requester_settings


def create_api_router() -> APIRouter:
    """Cria router principal com os sub-routers do papel configurado.

    Returns:
        APIRouter configurado com os endpoints de SERVICE_ROLE.
    """
    base_settings = get_base_settings()
    api_router = APIRouter()

    # Health checks (sem prefixo para /health, /ready e /probe na raiz)
    api_router.include_router(health_router, tags=["health"])

    if base_settings.serves_worker:
        api_router.include_router(interactions_router, tags=["interactions"])

    if base_settings.serves_requester:
        api_router.include_router(
            proxy_router,
            prefix=get_requester_settings().base_path,
            tags=["proxy"],
        )

    return api_router
