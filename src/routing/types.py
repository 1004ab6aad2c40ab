"""Tipos do domínio de rotas: identidade da rota e chave de bucket."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class RouteIdentity:
    """Nome simbólico de uma forma de endpoint (método + template).

    Independe dos valores concretos dos parâmetros.
    """

    route_id: str
    method: str
    template: str

    def __str__(self) -> str:
        return self.route_id


@dataclass(frozen=True, slots=True)
class BucketKey:
    """Unidade de contabilidade de rate limit.

    Duas requisições compartilham bucket se e somente se a rota e o valor
    do parâmetro principal forem iguais. Rotas globais usam major_param "".
    """

    route_id: str
    major_param: str = ""

    def __str__(self) -> str:
        if not self.major_param:
            return self.route_id
        return f"{self.route_id}:{self.major_param}"


@dataclass(frozen=True, slots=True)
class RouteSpec:
    """Linha do catálogo de rotas.

    Attributes:
        identity: Identidade da rota
        major_param: Nome do parâmetro principal (None para rotas globais)
        segments: Segmentos do template (placeholders como "{nome}")
    """

    identity: RouteIdentity
    major_param: str | None
    segments: tuple[str, ...]

    @property
    def route_id(self) -> str:
        return self.identity.route_id

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(segment[1:-1] for segment in self.segments if is_placeholder(segment))

    @property
    def literal_count(self) -> int:
        return sum(1 for segment in self.segments if not is_placeholder(segment))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Rota encontrada para um path concreto e os parâmetros extraídos."""

    spec: RouteSpec
    params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class ResolvedRoute:
    """Resultado da resolução: identidade, bucket e path upstream."""

    identity: RouteIdentity
    bucket: BucketKey
    path: str


def is_placeholder(segment: str) -> bool:
    return len(segment) > 2 and segment.startswith("{") and segment.endswith("}")
