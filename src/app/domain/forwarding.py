"""Requisição encaminhada ao upstream e resultado relayado ao chamador."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

# Métodos sem efeito colateral (podem ser reenviados após 5xx)
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


@dataclass(frozen=True, slots=True)
class ForwardRequest:
    """Requisição pronta para o upstream.

    Attributes:
        method: Método HTTP
        url: URL completa (base + path resolvido + query string)
        headers: Headers a enviar (inclui Authorization; nunca logar)
        body: Corpo bruto do chamador, inalterado
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}), repr=False)
    body: bytes = b""

    @property
    def is_idempotent(self) -> bool:
        return self.method.upper() in IDEMPOTENT_METHODS


@dataclass(frozen=True, slots=True)
class ForwardResult:
    """Resposta do upstream."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    body: bytes = b""

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= 500

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 400
