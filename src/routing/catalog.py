"""Catálogo imutável de rotas, carregado uma única vez do YAML.

Uso:
    catalog = load_route_catalog()
    match = catalog.match("POST", "channels/123/messages")
"""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import yaml

from routing.types import RouteIdentity, RouteMatch, RouteSpec, is_placeholder
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)

_DEFAULT_CATALOG = "discord_routes.yaml"


class RouteCatalog:
    """Tabela somente-leitura de rotas indexada por id e por forma."""

    __slots__ = ("_by_id", "_by_shape")

    def __init__(self, specs: Iterable[RouteSpec]) -> None:
        by_id: dict[str, RouteSpec] = {}
        by_shape: dict[tuple[str, int], list[RouteSpec]] = {}
        for spec in specs:
            if spec.route_id in by_id:
                raise ConfigurationError(f"duplicate_route_id:{spec.route_id}")
            by_id[spec.route_id] = spec
            by_shape.setdefault((spec.identity.method, len(spec.segments)), []).append(spec)
        self._by_id: Mapping[str, RouteSpec] = MappingProxyType(by_id)
        self._by_shape: Mapping[tuple[str, int], tuple[RouteSpec, ...]] = MappingProxyType(
            {shape: tuple(candidates) for shape, candidates in by_shape.items()}
        )

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[RouteSpec]:
        return iter(self._by_id.values())

    def __contains__(self, route_id: object) -> bool:
        return route_id in self._by_id

    def get(self, route_id: str) -> RouteSpec | None:
        return self._by_id.get(route_id)

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Encontra a rota para método + path concreto.

        Segmentos literais vencem placeholders; entre formas equivalentes
        vale a primeira declarada.
        """
        segments = tuple(segment for segment in path.strip("/").split("/") if segment)
        candidates = self._by_shape.get((method.upper(), len(segments)), ())
        best: RouteMatch | None = None
        best_score = -1
        for spec in candidates:
            params = _bind(spec.segments, segments)
            if params is None:
                continue
            if spec.literal_count > best_score:
                best = RouteMatch(spec=spec, params=MappingProxyType(params))
                best_score = spec.literal_count
        return best


def _bind(template: tuple[str, ...], segments: tuple[str, ...]) -> dict[str, str] | None:
    params: dict[str, str] = {}
    for expected, actual in zip(template, segments, strict=True):
        if is_placeholder(expected):
            params[expected[1:-1]] = actual
        elif expected != actual:
            return None
    return params


def parse_route_entry(entry: Mapping[str, Any]) -> RouteSpec:
    """Converte uma entrada do YAML em RouteSpec.

    Raises:
        ConfigurationError: Se a entrada estiver incompleta ou o
            major_param não existir no template.
    """
    try:
        route_id = str(entry["id"])
        method = str(entry["method"]).upper()
        template = str(entry["path"]).strip("/")
    except KeyError as exc:
        raise ConfigurationError(f"route_entry_missing_field:{exc.args[0]}") from exc

    segments = tuple(template.split("/"))
    major_param = entry.get("major_param")
    spec = RouteSpec(
        identity=RouteIdentity(route_id=route_id, method=method, template=template),
        major_param=str(major_param) if major_param else None,
        segments=segments,
    )
    if spec.major_param is not None and spec.major_param not in spec.placeholders:
        raise ConfigurationError(f"route_major_param_not_in_path:{route_id}")
    return spec


def build_route_catalog(document: Mapping[str, Any]) -> RouteCatalog:
    routes = document.get("routes")
    if not isinstance(routes, list):
        raise ConfigurationError("route_catalog_missing_routes")
    return RouteCatalog(parse_route_entry(entry) for entry in routes)


@lru_cache(maxsize=4)
def load_route_catalog(path: str | None = None) -> RouteCatalog:
    """Carrega o catálogo (YAML empacotado por padrão) e o mantém em cache.

    Args:
        path: Caminho alternativo para um arquivo YAML

    Raises:
        ConfigurationError: Se o arquivo não existir ou for inválido.
    """
    try:
        if path is None:
            text = resources.files("routing.data").joinpath(_DEFAULT_CATALOG).read_text(
                encoding="utf-8"
            )
        else:
            text = Path(path).read_text(encoding="utf-8")
        document = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError("route_catalog_unreadable") from exc

    if not isinstance(document, dict):
        raise ConfigurationError("route_catalog_not_mapping")

    catalog = build_route_catalog(document)
    logger.info("route_catalog_loaded", extra={"route_count": len(catalog)})
    return catalog
