"""Parse e validação inicial do webhook de interações (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from utils.errors import AuthenticationFailure, MalformedInput

from ..signature import SignatureResult, verify_interaction_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class InvalidSignatureError(AuthenticationFailure):
    """Assinatura inválida ou ausente."""


class InvalidJsonError(MalformedInput):
    """JSON inválido no payload do webhook."""


def parse_interaction_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    public_key: str,
) -> tuple[dict[str, Any], SignatureResult]:
    """Valida assinatura e parseia JSON do webhook.

    A assinatura é verificada antes de qualquer parsing do corpo.

    Raises:
        ConfigurationError: Se a chave pública configurada for inválida
        InvalidSignatureError: Se a assinatura for inválida
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto

    Returns:
        (payload dict, SignatureResult)
    """
    signature_result = verify_interaction_signature(raw_body, headers, public_key)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature_result
