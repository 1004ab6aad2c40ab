"""Validação do header Authorization recebido pelo proxy."""

from __future__ import annotations

import hmac

from utils.errors import AuthenticationFailure, ConfigurationError

_BOT_PREFIX = "Bot "


def validate_proxy_authorization(header_value: str | None, bot_token: str) -> None:
    """Aceita "Bot <token>" ou o token puro, comparando em tempo constante.

    Raises:
        ConfigurationError: Se o token do bot não estiver configurado
        AuthenticationFailure: Se o header estiver ausente ou divergir
    """
    if not bot_token:
        raise ConfigurationError("bot_token_not_configured")
    if not header_value:
        raise AuthenticationFailure("missing_authorization")

    presented = header_value.strip()
    if presented.startswith(_BOT_PREFIX):
        presented = presented[len(_BOT_PREFIX):].strip()

    if not hmac.compare_digest(presented.encode(), bot_token.encode()):
        raise AuthenticationFailure("invalid_token")
