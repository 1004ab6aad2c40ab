"""Catálogo de rotas da REST API e resolução de buckets de rate limit."""

from routing.catalog import RouteCatalog, build_route_catalog, load_route_catalog
from routing.resolver import RouteResolver
from routing.types import BucketKey, ResolvedRoute, RouteIdentity, RouteMatch, RouteSpec

__all__ = [
    "BucketKey",
    "ResolvedRoute",
    "RouteCatalog",
    "RouteIdentity",
    "RouteMatch",
    "RouteResolver",
    "RouteSpec",
    "build_route_catalog",
    "load_route_catalog",
]
