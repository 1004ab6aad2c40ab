"""Webhook de interações: assinatura e parsing seguro."""

from ..signature import SignatureResult, verify_interaction_signature
from .receive import InvalidJsonError, InvalidSignatureError, parse_interaction_request

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "SignatureResult",
    "parse_interaction_request",
    "verify_interaction_signature",
]
