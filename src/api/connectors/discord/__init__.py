"""Conector Discord - adapter de borda para a REST API e o webhook.

Responsabilidades:
- Webhook de interações (assinatura Ed25519, parsing)
- Transporte para a REST API com throttling por bucket
- Cliente do proxy requester (follow-ups, mensagens de canal)
"""

from .requester_client import RequesterClient, RequesterClientConfig
from .signature import SignatureResult, verify_interaction_signature
from .transport import DiscordTransport

__all__ = [
    "DiscordTransport",
    "RequesterClient",
    "RequesterClientConfig",
    "SignatureResult",
    "verify_interaction_signature",
]
