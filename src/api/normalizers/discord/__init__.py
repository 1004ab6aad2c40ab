"""Normalizer Discord: decodificação do webhook de interações.

Responsabilidades:
- Validar o envelope da interação (pydantic, campos extras ignorados)
- Converter opções de comando para a variante tipada do domínio
- Extrair campos de modais e valores de componentes
"""

from .decoder import OptionType, decode_interaction

__all__ = [
    "OptionType",
    "decode_interaction",
]
