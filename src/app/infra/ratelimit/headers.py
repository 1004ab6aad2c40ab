"""Leitura dos headers (e corpo) de rate limit do upstream."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_RETRY_AFTER_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class RateLimitInfo:
    """Estado de rate limit anunciado pelo upstream.

    Attributes:
        limit: Requisições permitidas na janela
        remaining: Requisições restantes na janela
        reset_after: Segundos até a janela reiniciar
        bucket: Hash do bucket no upstream
        is_global: Se o limite atingido é global
        retry_after: Espera pedida em um 429
    """

    limit: int | None = None
    remaining: int | None = None
    reset_after: float | None = None
    bucket: str | None = None
    is_global: bool = False
    retry_after: float | None = None


def _lower(headers: Mapping[str, str]) -> dict[str, str]:
    return {key.lower(): value for key, value in headers.items()}


def _as_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_rate_limit(headers: Mapping[str, str], body: bytes = b"") -> RateLimitInfo:
    """Extrai o estado de rate limit dos headers e, num 429, do corpo JSON."""
    normalized = _lower(headers)
    is_global = normalized.get("x-ratelimit-global", "").lower() == "true"
    header_retry = _as_float(normalized.get("retry-after"))
    body_retry: float | None = None

    if body:
        try:
            document = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            document = None
        if isinstance(document, dict):
            body_retry = _as_float(document.get("retry_after"))
            is_global = is_global or document.get("global") is True

    candidates = [value for value in (header_retry, body_retry) if value is not None]
    return RateLimitInfo(
        limit=_as_int(normalized.get("x-ratelimit-limit")),
        remaining=_as_int(normalized.get("x-ratelimit-remaining")),
        reset_after=_as_float(normalized.get("x-ratelimit-reset-after")),
        bucket=normalized.get("x-ratelimit-bucket"),
        is_global=is_global,
        retry_after=max(candidates) if candidates else None,
    )


def retry_delay(info: RateLimitInfo) -> float:
    """Espera a honrar antes de reenviar após um 429."""
    if info.retry_after is not None:
        return max(info.retry_after, 0.0)
    if info.reset_after is not None:
        return max(info.reset_after, 0.0)
    return DEFAULT_RETRY_AFTER_SECONDS


RATE_LIMIT_HEADERS = (
    "x-ratelimit-limit",
    "x-ratelimit-remaining",
    "x-ratelimit-reset",
    "x-ratelimit-reset-after",
    "x-ratelimit-bucket",
    "x-ratelimit-global",
    "x-ratelimit-scope",
    "retry-after",
)


def rate_limit_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Subconjunto de headers de rate limit (para copiar ao chamador)."""
    normalized = _lower(headers)
    return {name: normalized[name] for name in RATE_LIMIT_HEADERS if name in normalized}
