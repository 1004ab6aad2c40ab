"""Contratos de comandos e handlers de componentes.

Handlers são síncronos e sem IO: devolvem o acknowledgement e,
opcionalmente, o trabalho a executar depois dele.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Protocol

from app.domain.responses import Acknowledgement

if TYPE_CHECKING:
    from app.domain.interaction import Interaction
    from app.services.followups import FollowupSender

FollowupWork = Callable[["FollowupSender"], Awaitable[None]]


class CommandOptionType(IntEnum):
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    NUMBER = 10


@dataclass(frozen=True, slots=True)
class CommandOptionDefinition:
    name: str
    description: str
    type: CommandOptionType = CommandOptionType.STRING
    required: bool = False

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "required": self.required,
        }


@dataclass(frozen=True, slots=True)
class CommandDefinition:
    """Definição usada no registro do comando (chat input)."""

    name: str
    description: str
    options: tuple[CommandOptionDefinition, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "type": 1,
        }
        if self.options:
            payload["options"] = [option.to_payload() for option in self.options]
        return payload


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    """Acknowledgement a enviar e trabalho opcional após ele."""

    response: Acknowledgement
    after_ack: FollowupWork | None = None


class CommandHandler(Protocol):
    """Comando de aplicação registrado por nome."""

    definition: CommandDefinition

    def handle(self, interaction: Interaction) -> CommandOutcome: ...


class ComponentHandler(Protocol):
    """Handler de componente/modal registrado por prefixo de custom_id."""

    custom_id_prefix: str

    def handle(self, interaction: Interaction) -> CommandOutcome: ...
