"""Checagem das settings exigidas pelo papel do processo.

Usada no startup (validação estrita fora de development) e no /ready.
"""

from __future__ import annotations

from config.settings.base import get_base_settings
from config.settings.discord import get_discord_settings
from config.settings.requester import get_requester_settings

# O requester só assina chamadas; chave pública e application id são do worker
_REQUESTER_DISCORD_KEYS = ("DISCORD_BOT_TOKEN", "DISCORD_REQUEST", "DISCORD_MAX")


def role_settings_errors() -> dict[str, list[str]]:
    """Erros de configuração por grupo, filtrados pelo SERVICE_ROLE.

    Returns:
        {"base": [...], "discord": [...], "requester": [...]}; listas vazias = OK.
    """
    base = get_base_settings()
    discord_errors = get_discord_settings().validate()
    if not base.serves_worker:
        discord_errors = [
            error for error in discord_errors if error.startswith(_REQUESTER_DISCORD_KEYS)
        ]
    return {
        "base": base.validate(),
        "discord": discord_errors,
        "requester": get_requester_settings().validate(),
    }
