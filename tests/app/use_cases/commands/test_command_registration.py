"""Testes do registro em lote de comandos."""

from __future__ import annotations

from typing import Any

from app.use_cases.commands import (
    PingCommand,
    command_payloads,
    register_commands,
    registration_path,
)


class RecordingClient:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []

    async def request(self, method: str, path: str, payload: Any = None) -> Any:
        self.calls.append((method, path, payload))
        return []


def test_registration_paths() -> None:
    assert registration_path("app") == "applications/app/commands"
    assert registration_path("app", "guild") == "applications/app/guilds/guild/commands"


async def test_register_guilds_and_global() -> None:
    client = RecordingClient()

    updated = await register_commands(
        client,
        "app",
        [PingCommand()],
        guild_ids=["g1", "g2"],
        register_global=True,
    )

    assert updated == [
        "applications/app/guilds/g1/commands",
        "applications/app/guilds/g2/commands",
        "applications/app/commands",
    ]
    assert {call[0] for call in client.calls} == {"PUT"}
    assert client.calls[0][2] == command_payloads([PingCommand()])


async def test_nothing_registered_without_scope() -> None:
    client = RecordingClient()

    assert await register_commands(client, "app", [PingCommand()]) == []
    assert client.calls == []
