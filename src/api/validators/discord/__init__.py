"""Validators do proxy requester."""

from .proxy_auth import validate_proxy_authorization

__all__ = ["validate_proxy_authorization"]
