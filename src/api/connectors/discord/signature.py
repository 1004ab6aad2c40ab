"""Verificação de assinatura do webhook de interações (sem PII).

O remetente assina `timestamp + corpo bruto` com Ed25519. Headers ausentes,
hex inválido ou assinatura de tamanho errado falham fechado.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.infra.crypto import load_public_key, verify_ed25519

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-signature-ed25519"
TIMESTAMP_HEADER = "x-signature-timestamp"


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação de assinatura."""

    valid: bool
    error: str | None = None


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is None:
        value = headers.get(name.title())
    return value


def verify_interaction_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    public_key: str,
) -> SignatureResult:
    """Verifica a assinatura Ed25519 do request.

    Args:
        raw_body: Corpo bruto, exatamente como recebido
        headers: Headers recebidos
        public_key: Chave pública da aplicação (hex)

    Raises:
        ConfigurationError: Se a chave pública configurada for inválida.

    Returns:
        SignatureResult (nunca levanta para entrada do chamador)
    """
    key = load_public_key(public_key.strip())

    signature_hex = _header(headers, SIGNATURE_HEADER)
    timestamp = _header(headers, TIMESTAMP_HEADER)
    if not signature_hex or not timestamp:
        return SignatureResult(valid=False, error="missing_signature")

    try:
        signature = bytes.fromhex(signature_hex)
    except ValueError:
        return SignatureResult(valid=False, error="signature_not_hex")

    if not verify_ed25519(key, timestamp.encode() + raw_body, signature):
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)
