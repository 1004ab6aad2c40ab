"""Agregador de settings do ponte-discord.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    ServiceRole,
    get_base_settings,
)

# Discord
from config.settings.discord import (
    DISCORD_API_BASE_URL,
    DISCORD_API_VERSION,
    DiscordSettings,
    get_discord_settings,
)

# Requester (proxy)
from config.settings.requester import (
    RequesterSettings,
    get_requester_settings,
)

# Checagem por papel
from config.settings.checks import role_settings_errors

__all__ = [
    "DISCORD_API_BASE_URL",
    "DISCORD_API_VERSION",
    "BaseSettings",
    "DiscordSettings",
    "Environment",
    "RequesterSettings",
    "ServiceRole",
    "get_base_settings",
    "get_discord_settings",
    "get_requester_settings",
    "role_settings_errors",
]
