"""Primitivas criptográficas do webhook de interações.

Localizado em app/infra/ para manter boundaries corretas:
- app/ não importa de api/ (exceto via bootstrap)
- api/connectors usa estas primitivas para validar requests
"""

from .signature import PUBLIC_KEY_SIZE, SIGNATURE_SIZE, load_public_key, verify_ed25519

__all__ = [
    "PUBLIC_KEY_SIZE",
    "SIGNATURE_SIZE",
    "load_public_key",
    "verify_ed25519",
]
