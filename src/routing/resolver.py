"""Resolução rota → chave de bucket e path upstream.

Determinística e sem efeitos colaterais. O parâmetro principal de cada
rota vem do catálogo, nunca é inferido.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from routing.types import BucketKey, ResolvedRoute, is_placeholder
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from routing.catalog import RouteCatalog


class RouteResolver:
    """Resolve identidades de rota contra um catálogo injetado."""

    __slots__ = ("_catalog",)

    def __init__(self, catalog: RouteCatalog) -> None:
        self._catalog = catalog

    def resolve(self, route_id: str, params: Mapping[str, str]) -> ResolvedRoute:
        """Resolve a rota para bucket e path final.

        Raises:
            ConfigurationError: Se a rota não estiver no catálogo ou faltar
                valor para algum placeholder.
        """
        spec = self._catalog.get(route_id)
        if spec is None:
            raise ConfigurationError(f"route_not_in_catalog:{route_id}")

        segments: list[str] = []
        for segment in spec.segments:
            if not is_placeholder(segment):
                segments.append(segment)
                continue
            name = segment[1:-1]
            value = params.get(name)
            if not value:
                raise ConfigurationError(f"route_param_missing:{route_id}:{name}")
            segments.append(quote(value, safe="@:%"))

        major_value = params.get(spec.major_param, "") if spec.major_param else ""
        return ResolvedRoute(
            identity=spec.identity,
            bucket=BucketKey(route_id=spec.route_id, major_param=major_value),
            path="/".join(segments),
        )

    def bucket_for(self, route_id: str, params: Mapping[str, str]) -> BucketKey:
        return self.resolve(route_id, params).bucket
