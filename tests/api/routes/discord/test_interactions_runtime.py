"""Testes do runtime de follow-ups do webhook de interações."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from api.routes.discord import interactions_runtime
from api.routes.discord.followup_tasks import FollowupTaskPool
from app.coordinators.interactions import AcknowledgedInteraction
from app.domain.interaction import Interaction, InteractionKind
from app.domain.responses import Deferred, Followup
from app.observability import get_correlation_id
from fsm import InteractionState, create_machine


@dataclass
class RecordingWebhookClient:
    posted: list[Followup] = field(default_factory=list)

    async def post_followup(self, application_id: str, token: str, followup: Followup) -> dict[str, Any]:
        self.posted.append(followup)
        return {"id": "m1"}

    async def edit_original(self, application_id: str, token: str, followup: Followup) -> dict[str, Any]:
        return {}

    async def create_channel_message(self, channel_id: str, followup: Followup) -> dict[str, Any]:
        return {}


def _acknowledged(work: Any) -> AcknowledgedInteraction:
    interaction = Interaction(
        kind=InteractionKind.APPLICATION_COMMAND,
        id="",
        application_id="app",
        token="tok",
        command_name="slow",
    )
    machine = create_machine("")
    machine.acknowledge(InteractionState.ACKNOWLEDGED_DEFERRED)
    return AcknowledgedInteraction(
        interaction=interaction,
        response=Deferred(),
        machine=machine,
        after_ack=work,
    )


@pytest.mark.asyncio
async def test_process_followups_binds_correlation_id() -> None:
    seen: dict[str, str] = {}
    client = RecordingWebhookClient()

    async def work(followups: Any) -> None:
        seen["correlation_id"] = get_correlation_id()
        await followups.send("done")

    await interactions_runtime.process_followups_safe(
        acknowledged=_acknowledged(work),
        client=client,
        correlation_id="corr-bg",
    )

    assert seen == {"correlation_id": "corr-bg"}
    assert client.posted == [Followup("done")]


@pytest.mark.asyncio
async def test_process_followups_logs_and_reraises(caplog: pytest.LogCaptureFixture) -> None:
    async def work(followups: Any) -> None:
        raise RuntimeError("boom")

    with caplog.at_level("ERROR"), pytest.raises(RuntimeError):
        await interactions_runtime.process_followups_safe(
            acknowledged=_acknowledged(work),
            client=RecordingWebhookClient(),
            correlation_id="corr-fail",
        )

    assert "interaction_followup_failed" in caplog.text


@pytest.mark.asyncio
async def test_schedule_followups_runs_in_pool(monkeypatch: pytest.MonkeyPatch) -> None:
    client = RecordingWebhookClient()
    pool = FollowupTaskPool()
    monkeypatch.setattr(interactions_runtime, "get_webhook_client", lambda: client)
    monkeypatch.setattr(interactions_runtime, "get_followup_pool", lambda: pool)

    async def work(followups: Any) -> None:
        await followups.send("later")

    await interactions_runtime.schedule_followups(_acknowledged(work), "corr-sched")
    assert pool.active_count == 1

    await pool.drain(timeout_seconds=1.0)

    assert client.posted == [Followup("later")]


@pytest.mark.asyncio
async def test_drain_background_tasks_discards_pool() -> None:
    pool = interactions_runtime.get_followup_pool()

    await interactions_runtime.drain_background_tasks(timeout_seconds=0.1)

    assert pool.is_closing
    assert interactions_runtime.get_followup_pool() is not pool
    await interactions_runtime.drain_background_tasks(timeout_seconds=0.1)
