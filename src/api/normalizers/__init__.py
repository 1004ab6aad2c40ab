"""Normalizers por canal: conversão de payloads externos para modelos internos.

Estrutura:
- discord/: decodificação do webhook de interações
"""

from .discord import decode_interaction

__all__ = [
    "decode_interaction",
]
