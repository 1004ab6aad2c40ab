"""Protocolos e contratos do core da aplicação."""

from .interaction_webhook import InteractionWebhookClientProtocol
from .upstream_transport import UpstreamTransportProtocol

__all__ = [
    "InteractionWebhookClientProtocol",
    "UpstreamTransportProtocol",
]
