"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook, proxy, health)
- Validação inicial de request (assinatura, autorização)
- Delegação para connectors/coordinators
- Respostas HTTP apropriadas

Estrutura:
- routes/discord/: webhook de interações e proxy requester
- routes/health/: health checks e readiness

Agregação:
- router.py: registra os routers no app principal conforme SERVICE_ROLE
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
