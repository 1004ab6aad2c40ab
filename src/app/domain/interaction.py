"""Modelo de domínio de uma interação decodificada.

A interação é imutável e pertence ao request que a decodificou. Opções de
comando formam uma variante fechada (StringValue | IntValue | NumberValue |
BoolValue | EntityRef) resolvida uma única vez na borda.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING, Any

from app.domain.snowflake import snowflake_to_datetime

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime


class InteractionKind(IntEnum):
    """Tipos de interação suportados (valores do wire)."""

    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    MODAL_SUBMIT = 5


class EntityKind(StrEnum):
    """Tipo de entidade referenciada por uma opção."""

    USER = "user"
    CHANNEL = "channel"
    ROLE = "role"
    MENTIONABLE = "mentionable"
    ATTACHMENT = "attachment"


@dataclass(frozen=True, slots=True)
class StringValue:
    value: str


@dataclass(frozen=True, slots=True)
class IntValue:
    value: int


@dataclass(frozen=True, slots=True)
class NumberValue:
    value: float


@dataclass(frozen=True, slots=True)
class BoolValue:
    value: bool


@dataclass(frozen=True, slots=True)
class EntityRef:
    """Referência a entidade (usuário, canal, cargo, anexo).

    Attributes:
        kind: Tipo da entidade
        id: Snowflake da entidade
        resolved: Objeto resolvido enviado junto da interação (se houver)
    """

    kind: EntityKind
    id: str
    resolved: Mapping[str, Any] | None = field(default=None, compare=False, hash=False)


OptionValue = StringValue | IntValue | NumberValue | BoolValue | EntityRef


@dataclass(frozen=True, slots=True)
class CommandOption:
    """Opção de comando; subcomandos carregam opções aninhadas."""

    name: str
    value: OptionValue | None = None
    options: tuple[CommandOption, ...] = ()


@dataclass(frozen=True, slots=True)
class Interaction:
    """Interação decodificada.

    Attributes:
        kind: Tipo da interação
        id: Snowflake da interação
        application_id: ID da aplicação dona da interação
        token: Token de continuação (válido por 15 minutos)
        channel_id: Canal de origem
        guild_id: Servidor de origem (None em DM)
        user_id: Usuário que disparou a interação
        command_name: Nome do comando (APPLICATION_COMMAND)
        options: Opções tipadas do comando, em ordem
        custom_id: custom_id do componente ou modal
        component_values: Valores selecionados (select menus)
        modal_fields: Pares (custom_id, valor) dos campos do modal
    """

    kind: InteractionKind
    id: str = ""
    application_id: str = ""
    token: str = field(default="", repr=False)
    channel_id: str | None = None
    guild_id: str | None = None
    user_id: str | None = None
    command_name: str | None = None
    options: tuple[CommandOption, ...] = ()
    custom_id: str | None = None
    component_values: tuple[str, ...] = ()
    modal_fields: tuple[tuple[str, str], ...] = ()

    @property
    def created_at(self) -> datetime | None:
        """Momento de criação derivado do snowflake (None sem id válido)."""
        if not self.id.isdigit():
            return None
        return snowflake_to_datetime(self.id)

    def option(self, name: str) -> OptionValue | None:
        """Valor da opção de primeiro nível com o nome dado."""
        for option in self.options:
            if option.name == name:
                return option.value
        return None

    def string_option(self, name: str) -> str | None:
        value = self.option(name)
        return value.value if isinstance(value, StringValue) else None

    def int_option(self, name: str) -> int | None:
        value = self.option(name)
        return value.value if isinstance(value, IntValue) else None

    def bool_option(self, name: str) -> bool | None:
        value = self.option(name)
        return value.value if isinstance(value, BoolValue) else None

    def to_log_dict(self) -> dict[str, Any]:
        """Representação segura para logs (sem token)."""
        return {
            "interaction_id": self.id,
            "interaction_kind": self.kind.name,
            "command_name": self.command_name,
            "custom_id": self.custom_id,
            "guild_id": self.guild_id,
            "channel_id": self.channel_id,
        }
