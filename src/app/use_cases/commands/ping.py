"""Comando /ping: responde imediatamente."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.responses import ImmediateMessage
from app.use_cases.commands.base import CommandDefinition, CommandOutcome

if TYPE_CHECKING:
    from app.domain.interaction import Interaction


class PingCommand:
    definition = CommandDefinition(
        name="ping",
        description="Checks availability and latency.",
    )

    def handle(self, interaction: Interaction) -> CommandOutcome:
        return CommandOutcome(response=ImmediateMessage(content="Pong!"))
