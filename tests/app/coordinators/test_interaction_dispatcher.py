"""Testes do InteractionDispatcher e do acknowledgement."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

import pytest

from app.bootstrap.dependencies import create_interaction_dispatcher
from app.coordinators.interactions import (
    InteractionDispatcher,
    acknowledge_interaction,
    run_followup_work,
)
from app.domain.interaction import CommandOption, Interaction, InteractionKind, StringValue
from app.domain.responses import Deferred, Followup, ImmediateMessage, Pong
from app.use_cases.commands import CommandDefinition, CommandOutcome, PingCommand
from fsm import InteractionResponseMachine, InteractionState
from utils.errors import FollowupExpired, StateViolation, UnsupportedOperation


@dataclass
class FakeWebhookClient:
    posted: list[tuple[str, str, Followup]] = field(default_factory=list)

    async def post_followup(self, application_id: str, token: str, followup: Followup) -> dict[str, Any]:
        self.posted.append((application_id, token, followup))
        return {"id": "msg-1"}

    async def edit_original(self, application_id: str, token: str, followup: Followup) -> dict[str, Any]:
        return {}

    async def create_channel_message(self, channel_id: str, followup: Followup) -> dict[str, Any]:
        return {}


class EchoCommand:
    """Comando que adia e responde com a opção text."""

    definition = CommandDefinition(name="echo", description="Repeats the text option.")

    def handle(self, interaction: Interaction) -> CommandOutcome:
        text = interaction.string_option("text") or ""

        async def reply(followups: Any) -> None:
            await followups.send(text)

        return CommandOutcome(response=Deferred(), after_ack=reply)


class RefreshButton:
    custom_id_prefix = "weather:"

    def handle(self, interaction: Interaction) -> CommandOutcome:
        return CommandOutcome(response=ImmediateMessage("refreshed"))


class RefreshAllButton:
    custom_id_prefix = "weather:refresh:all"

    def handle(self, interaction: Interaction) -> CommandOutcome:
        return CommandOutcome(response=ImmediateMessage("refreshed all"))


def _dispatcher() -> InteractionDispatcher:
    return InteractionDispatcher(
        [PingCommand(), EchoCommand()],
        components=[RefreshButton(), RefreshAllButton()],
    )


def _command(name: str, **options: str) -> Interaction:
    return Interaction(
        kind=InteractionKind.APPLICATION_COMMAND,
        id="1",
        application_id="app-1",
        token="tok",
        command_name=name,
        options=tuple(CommandOption(key, StringValue(value)) for key, value in options.items()),
    )


def test_ping_yields_pong() -> None:
    outcome = _dispatcher().dispatch(Interaction(kind=InteractionKind.PING))

    assert outcome.response == Pong()
    assert outcome.after_ack is None


def test_command_is_selected_by_exact_name() -> None:
    outcome = _dispatcher().dispatch(_command("ping"))

    assert outcome.response == ImmediateMessage("Pong!")
    assert _dispatcher().command_names == ("ping", "echo")


def test_unmatched_command_gets_ephemeral_message(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        outcome = _dispatcher().dispatch(_command("nope"))

    assert outcome.response == ImmediateMessage("Unhandled command: nope", ephemeral=True)
    assert "interaction_command_unhandled" in caplog.text


def test_component_uses_longest_prefix() -> None:
    dispatcher = _dispatcher()
    button = Interaction(kind=InteractionKind.MESSAGE_COMPONENT, custom_id="weather:refresh:all")
    other = Interaction(kind=InteractionKind.MODAL_SUBMIT, custom_id="weather:city")
    unknown = Interaction(kind=InteractionKind.MESSAGE_COMPONENT, custom_id="poll:1")

    assert dispatcher.dispatch(button).response == ImmediateMessage("refreshed all")
    assert dispatcher.dispatch(other).response == ImmediateMessage("refreshed")
    assert dispatcher.dispatch(unknown).response == ImmediateMessage(
        "Unhandled component: poll:1", ephemeral=True
    )


def test_unsupported_kind_raises() -> None:
    interaction = replace(Interaction(kind=InteractionKind.PING), kind=4)

    with pytest.raises(UnsupportedOperation):
        _dispatcher().dispatch(interaction)


def test_acknowledge_ping_records_pong_and_drops_work() -> None:
    interaction = Interaction(kind=InteractionKind.PING, id="1")
    machine = InteractionResponseMachine("1", is_ping=True)

    acknowledged = acknowledge_interaction(interaction, _dispatcher(), machine)

    assert acknowledged.response == Pong()
    assert acknowledged.after_ack is None
    assert machine.current_state == InteractionState.ACKNOWLEDGED_PONG


def test_acknowledge_twice_is_state_violation() -> None:
    interaction = _command("ping")
    machine = InteractionResponseMachine("1")
    acknowledge_interaction(interaction, _dispatcher(), machine)

    with pytest.raises(StateViolation):
        acknowledge_interaction(interaction, _dispatcher(), machine)


async def test_deferred_command_runs_followup_work_after_ack() -> None:
    interaction = _command("echo", text="hello")
    machine = InteractionResponseMachine("1")
    client = FakeWebhookClient()

    acknowledged = acknowledge_interaction(interaction, _dispatcher(), machine)
    assert acknowledged.response == Deferred()
    assert machine.current_state == InteractionState.ACKNOWLEDGED_DEFERRED

    await run_followup_work(acknowledged, client)

    assert client.posted == [("app-1", "tok", Followup("hello"))]
    assert machine.current_state == InteractionState.FOLLOWED_UP


async def test_expired_followup_is_reported_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    interaction = _command("echo", text="late")
    machine = InteractionResponseMachine("1")
    acknowledged = acknowledge_interaction(interaction, _dispatcher(), machine)

    async def _expired(_followups: Any) -> None:
        raise FollowupExpired("continuation_token_expired")

    with caplog.at_level(logging.WARNING):
        await run_followup_work(replace(acknowledged, after_ack=_expired), FakeWebhookClient())

    assert "interaction_followup_abandoned" in caplog.text


def test_default_dispatcher_routes_weather_refresh_button() -> None:
    dispatcher = create_interaction_dispatcher()
    interaction = Interaction(
        kind=InteractionKind.MESSAGE_COMPONENT,
        id="9",
        custom_id="weather_refresh:Tokyo",
    )

    outcome = dispatcher.dispatch(interaction)

    assert dispatcher.component_prefixes == ("weather_refresh:",)
    assert outcome.response == Deferred()
    assert outcome.after_ack is not None
