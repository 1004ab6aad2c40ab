"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/ e api/connectors/.
"""

from app.services.followups import FollowupSender
from app.services.forwarding import ForwardingPipeline, build_forward_request

__all__ = [
    "FollowupSender",
    "ForwardingPipeline",
    "build_forward_request",
]
