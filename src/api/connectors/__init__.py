"""Connectors: adapters de borda para APIs externas.

Estrutura:
- discord/: webhook de interações, REST API e proxy requester
"""

__all__: list[str] = []
