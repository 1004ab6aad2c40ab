"""Payload builders por canal: construção de payloads para APIs externas.

Estrutura:
- discord/: respostas a interações (callback e follow-up)
"""

__all__: list[str] = []
