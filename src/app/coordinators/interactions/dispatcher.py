"""Despacho de interações para handlers registrados.

Comandos são escolhidos por nome exato; componentes e modais pelo prefixo
mais longo de custom_id. Sem correspondência, a interação recebe uma
mensagem efêmera em vez de ficar sem acknowledgement.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from app.domain.interaction import InteractionKind
from app.domain.responses import ImmediateMessage, Pong
from app.use_cases.commands.base import CommandOutcome
from utils.errors import UnsupportedOperation

if TYPE_CHECKING:
    from app.domain.interaction import Interaction
    from app.use_cases.commands.base import CommandHandler, ComponentHandler

logger = logging.getLogger(__name__)


class InteractionDispatcher:
    """Tabelas estáticas nome → comando e prefixo → componente."""

    def __init__(
        self,
        commands: Iterable[CommandHandler],
        components: Iterable[ComponentHandler] = (),
    ) -> None:
        self._commands: Mapping[str, CommandHandler] = MappingProxyType(
            {command.definition.name: command for command in commands}
        )
        self._components: tuple[ComponentHandler, ...] = tuple(
            sorted(components, key=lambda handler: len(handler.custom_id_prefix), reverse=True)
        )

    @property
    def command_names(self) -> tuple[str, ...]:
        return tuple(self._commands)

    @property
    def component_prefixes(self) -> tuple[str, ...]:
        return tuple(handler.custom_id_prefix for handler in self._components)

    def dispatch(self, interaction: Interaction) -> CommandOutcome:
        """Seleciona o handler e devolve o resultado dele.

        Raises:
            UnsupportedOperation: Se o tipo de interação não tiver despacho.
        """
        if interaction.kind is InteractionKind.PING:
            return CommandOutcome(response=Pong())
        if interaction.kind is InteractionKind.APPLICATION_COMMAND:
            return self._dispatch_command(interaction)
        if interaction.kind in (InteractionKind.MESSAGE_COMPONENT, InteractionKind.MODAL_SUBMIT):
            return self._dispatch_component(interaction)
        raise UnsupportedOperation("unsupported_interaction_type")

    def _dispatch_command(self, interaction: Interaction) -> CommandOutcome:
        name = interaction.command_name or ""
        handler = self._commands.get(name)
        if handler is None:
            logger.warning(
                "interaction_command_unhandled",
                extra={"interaction_id": interaction.id, "command_name": name},
            )
            return CommandOutcome(
                response=ImmediateMessage(content=f"Unhandled command: {name}", ephemeral=True)
            )
        return handler.handle(interaction)

    def _dispatch_component(self, interaction: Interaction) -> CommandOutcome:
        custom_id = interaction.custom_id or ""
        for handler in self._components:
            if custom_id.startswith(handler.custom_id_prefix):
                return handler.handle(interaction)
        logger.warning(
            "interaction_component_unhandled",
            extra={
                "interaction_id": interaction.id,
                "interaction_kind": interaction.kind.name,
                "custom_id": custom_id,
            },
        )
        return CommandOutcome(
            response=ImmediateMessage(content=f"Unhandled component: {custom_id}", ephemeral=True)
        )
