"""Verificação Ed25519 para o webhook de interações."""

from __future__ import annotations

from functools import lru_cache

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from utils.errors import ConfigurationError

PUBLIC_KEY_SIZE = 32
SIGNATURE_SIZE = 64


@lru_cache(maxsize=8)
def load_public_key(public_key_hex: str) -> Ed25519PublicKey:
    """Carrega chave pública Ed25519 a partir do hex configurado.

    Raises:
        ConfigurationError: Se a chave não for hex de 32 bytes.
    """
    try:
        raw = bytes.fromhex(public_key_hex)
    except ValueError as exc:
        raise ConfigurationError("public_key_not_hex") from exc
    if len(raw) != PUBLIC_KEY_SIZE:
        raise ConfigurationError("public_key_invalid_length")
    return Ed25519PublicKey.from_public_bytes(raw)


def verify_ed25519(public_key: Ed25519PublicKey, message: bytes, signature: bytes) -> bool:
    """Retorna True se a assinatura confere para a mensagem.

    Assinaturas com tamanho diferente de 64 bytes são rejeitadas sem
    chamar a primitiva.
    """
    if len(signature) != SIGNATURE_SIZE:
        return False
    try:
        public_key.verify(signature, message)
    except InvalidSignature:
        return False
    return True
