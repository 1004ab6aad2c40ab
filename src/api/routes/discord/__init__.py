"""Rotas do ponte-discord: webhook de interações (worker) e proxy (requester)."""

from api.routes.discord.interactions import router as interactions_router
from api.routes.discord.proxy import router as proxy_router

__all__ = ["interactions_router", "proxy_router"]
