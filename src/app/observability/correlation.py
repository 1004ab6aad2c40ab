"""Gerenciamento de correlation_id para rastreamento de requisições.

O correlation_id nasce no request (header X-Correlation-Id ou UUID novo),
é injetado nos logs e acompanha as tasks de follow-up desanexadas.
Usa ContextVar para ser async-safe.

Uso:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        ...
    finally:
        reset_correlation_id(token)

    # Em tasks de background
    with bound_correlation_id(correlation_id):
        ...
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None/vazio, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


@contextmanager
def bound_correlation_id(correlation_id: str | None) -> Iterator[str]:
    """Context manager que define e restaura o correlation_id."""
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())
