"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationFailure,
    BridgeError,
    ConfigurationError,
    FollowupExpired,
    InternalFailure,
    MalformedInput,
    StateViolation,
    UnsupportedOperation,
    UpstreamError,
    UpstreamRateLimited,
    UpstreamUnavailable,
)

__all__ = [
    "AuthenticationFailure",
    "BridgeError",
    "ConfigurationError",
    "FollowupExpired",
    "InternalFailure",
    "MalformedInput",
    "StateViolation",
    "UnsupportedOperation",
    "UpstreamError",
    "UpstreamRateLimited",
    "UpstreamUnavailable",
]
