"""Registro em lote (bulk overwrite) das definições de comando."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from app.use_cases.commands.base import CommandHandler

logger = logging.getLogger(__name__)


class CommandRegistrationClient(Protocol):
    """Cliente capaz de enviar uma chamada arbitrária ao proxy."""

    async def request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | list[Any] | None = None,
    ) -> Any: ...


def command_payloads(commands: Iterable[CommandHandler]) -> list[dict[str, Any]]:
    return [command.definition.to_payload() for command in commands]


def registration_path(application_id: str, guild_id: str | None = None) -> str:
    """Path de bulk overwrite (global ou por guild)."""
    if guild_id is None:
        return f"applications/{application_id}/commands"
    return f"applications/{application_id}/guilds/{guild_id}/commands"


async def register_commands(
    client: CommandRegistrationClient,
    application_id: str,
    commands: Iterable[CommandHandler],
    *,
    guild_ids: Sequence[str] = (),
    register_global: bool = False,
) -> list[str]:
    """Sobrescreve os comandos nos escopos pedidos.

    Returns:
        Paths atualizados, na ordem em que foram enviados.
    """
    payloads = command_payloads(commands)
    targets: list[str | None] = list(guild_ids)
    if register_global:
        targets.append(None)

    updated: list[str] = []
    for guild_id in targets:
        path = registration_path(application_id, guild_id)
        await client.request("PUT", path, payloads)
        logger.info(
            "commands_registered",
            extra={
                "scope": "global" if guild_id is None else "guild",
                "guild_id": guild_id,
                "command_count": len(payloads),
            },
        )
        updated.append(path)
    return updated
