"""Validators: validação de requests recebidos na borda.

Estrutura:
- discord/: autorização do proxy requester
"""

__all__: list[str] = []
