"""Decodificação do payload de interação para o modelo de domínio.

Opções de comando são convertidas uma única vez para a variante fechada
de `app.domain.interaction`; o resto do código nunca vê valores crus.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from app.domain.interaction import (
    BoolValue,
    CommandOption,
    EntityKind,
    EntityRef,
    Interaction,
    InteractionKind,
    IntValue,
    NumberValue,
    OptionValue,
    StringValue,
)
from utils.errors import MalformedInput, UnsupportedOperation

from .models import WireComponent, WireInteraction, WireInteractionData, WireOption

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


class OptionType(IntEnum):
    """Tipos de opção de comando (valores do wire)."""

    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


_ENTITY_KINDS: dict[OptionType, EntityKind] = {
    OptionType.USER: EntityKind.USER,
    OptionType.CHANNEL: EntityKind.CHANNEL,
    OptionType.ROLE: EntityKind.ROLE,
    OptionType.MENTIONABLE: EntityKind.MENTIONABLE,
    OptionType.ATTACHMENT: EntityKind.ATTACHMENT,
}

# Chave em data.resolved para cada tipo de entidade
_RESOLVED_SECTIONS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.USER: ("users",),
    EntityKind.CHANNEL: ("channels",),
    EntityKind.ROLE: ("roles",),
    EntityKind.MENTIONABLE: ("users", "roles"),
    EntityKind.ATTACHMENT: ("attachments",),
}


def decode_interaction(payload: Mapping[str, Any]) -> Interaction:
    """Decodifica o payload JSON em `Interaction`.

    Raises:
        MalformedInput: Se `type` estiver ausente ou o payload não validar
        UnsupportedOperation: Se o tipo de interação não for suportado
    """
    if "type" not in payload:
        raise MalformedInput("missing_interaction_type")

    try:
        wire = WireInteraction.model_validate(payload)
    except ValidationError as exc:
        logger.info("interaction_decode_failed", extra={"error_count": exc.error_count()})
        raise MalformedInput("invalid_interaction_payload") from exc

    try:
        kind = InteractionKind(wire.type)
    except ValueError as exc:
        raise UnsupportedOperation("unsupported_interaction_type") from exc

    data = wire.data or WireInteractionData()
    return Interaction(
        kind=kind,
        id=wire.id,
        application_id=wire.application_id,
        token=wire.token,
        channel_id=wire.channel_id,
        guild_id=wire.guild_id,
        user_id=_user_id(wire),
        command_name=data.name if kind is InteractionKind.APPLICATION_COMMAND else None,
        options=tuple(_decode_option(option, data.resolved) for option in data.options),
        custom_id=data.custom_id,
        component_values=tuple(data.values),
        modal_fields=tuple(_flatten_fields(data.components)),
    )


def _user_id(wire: WireInteraction) -> str | None:
    if wire.member is not None and wire.member.user is not None:
        return wire.member.user.id
    if wire.user is not None:
        return wire.user.id
    return None


def _decode_option(option: WireOption, resolved: dict[str, dict[str, Any]]) -> CommandOption:
    try:
        option_type = OptionType(option.type)
    except ValueError as exc:
        raise MalformedInput("unknown_option_type") from exc

    if option_type in (OptionType.SUB_COMMAND, OptionType.SUB_COMMAND_GROUP):
        return CommandOption(
            name=option.name,
            options=tuple(_decode_option(child, resolved) for child in option.options),
        )
    return CommandOption(name=option.name, value=_decode_value(option_type, option.value, resolved))


def _decode_value(
    option_type: OptionType,
    raw: Any,
    resolved: dict[str, dict[str, Any]],
) -> OptionValue:
    if option_type is OptionType.STRING and isinstance(raw, str):
        return StringValue(raw)
    if option_type is OptionType.INTEGER and isinstance(raw, int) and not isinstance(raw, bool):
        return IntValue(raw)
    if option_type is OptionType.BOOLEAN and isinstance(raw, bool):
        return BoolValue(raw)
    if option_type is OptionType.NUMBER and isinstance(raw, int | float) and not isinstance(raw, bool):
        return NumberValue(float(raw))
    if option_type in _ENTITY_KINDS and isinstance(raw, str):
        kind = _ENTITY_KINDS[option_type]
        return EntityRef(kind=kind, id=raw, resolved=_lookup_resolved(kind, raw, resolved))
    raise MalformedInput("option_value_type_mismatch")


def _lookup_resolved(
    kind: EntityKind,
    entity_id: str,
    resolved: dict[str, dict[str, Any]],
) -> dict[str, Any] | None:
    for section in _RESOLVED_SECTIONS[kind]:
        entity = resolved.get(section, {}).get(entity_id)
        if entity is not None:
            return entity
    return None


def _flatten_fields(components: list[WireComponent]) -> list[tuple[str, str]]:
    fields: list[tuple[str, str]] = []
    for component in components:
        if component.custom_id is not None and component.value is not None:
            fields.append((component.custom_id, component.value))
        fields.extend(_flatten_fields(component.components))
    return fields
