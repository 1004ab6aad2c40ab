"""Testes de validate_proxy_authorization."""

from __future__ import annotations

import pytest

from api.validators.discord import validate_proxy_authorization
from utils.errors import AuthenticationFailure, ConfigurationError


@pytest.mark.parametrize("header", ["Bot secret-token", "secret-token", "  Bot secret-token "])
def test_accepts_prefixed_or_bare_token(header: str) -> None:
    validate_proxy_authorization(header, "secret-token")


@pytest.mark.parametrize("header", [None, "", "Bot other", "Bearer secret-token"])
def test_rejects_missing_or_mismatched_token(header: str | None) -> None:
    with pytest.raises(AuthenticationFailure):
        validate_proxy_authorization(header, "secret-token")


def test_unconfigured_token_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        validate_proxy_authorization("Bot anything", "")
