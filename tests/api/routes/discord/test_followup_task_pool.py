"""Testes do pool de tasks de follow-up."""

from __future__ import annotations

import asyncio

import pytest

from api.routes.discord.followup_tasks import FollowupTaskPool
from utils.errors import StateViolation


@pytest.mark.asyncio
async def test_submitted_work_runs_and_leaves_pool() -> None:
    pool = FollowupTaskPool()
    event = asyncio.Event()

    async def _work() -> None:
        event.set()

    task = pool.submit("100", _work())

    assert pool.active_count == 1
    assert task.get_name() == "followup:100"
    await task
    await asyncio.sleep(0)
    assert event.is_set()
    assert pool.active_count == 0


@pytest.mark.asyncio
async def test_failure_is_logged_with_interaction_id(caplog: pytest.LogCaptureFixture) -> None:
    pool = FollowupTaskPool()

    async def _boom() -> None:
        raise RuntimeError("boom")

    with caplog.at_level("ERROR"):
        pool.submit("200", _boom())
        await pool.drain(timeout_seconds=1.0)

    failed = [record for record in caplog.records if record.getMessage() == "followup_task_failed"]
    assert failed
    assert failed[0].interaction_id == "200"


@pytest.mark.asyncio
async def test_concurrency_is_limited() -> None:
    pool = FollowupTaskPool(max_concurrency=1)
    gate = asyncio.Event()
    started: list[str] = []

    async def _work(name: str) -> None:
        started.append(name)
        await gate.wait()

    pool.submit("1", _work("first"))
    pool.submit("2", _work("second"))
    await asyncio.sleep(0.01)

    assert started == ["first"]
    gate.set()
    await pool.drain(timeout_seconds=1.0)
    assert started == ["first", "second"]


@pytest.mark.asyncio
async def test_drain_waits_for_short_work() -> None:
    pool = FollowupTaskPool()
    event = asyncio.Event()

    async def _short_work() -> None:
        await asyncio.sleep(0.02)
        event.set()

    pool.submit("300", _short_work())

    cancelled = await pool.drain(timeout_seconds=0.5)

    assert cancelled == 0
    assert event.is_set()
    assert pool.active_count == 0


@pytest.mark.asyncio
async def test_drain_cancels_work_past_timeout(caplog: pytest.LogCaptureFixture) -> None:
    pool = FollowupTaskPool()
    gate = asyncio.Event()

    async def _pending_work() -> None:
        await gate.wait()

    pool.submit("400", _pending_work())
    await asyncio.sleep(0)

    with caplog.at_level("WARNING"):
        cancelled = await pool.drain(timeout_seconds=0.01)

    assert cancelled == 1
    assert "followup_tasks_cancelled" in caplog.text
    assert pool.active_count == 0


@pytest.mark.asyncio
async def test_closed_pool_rejects_new_work() -> None:
    pool = FollowupTaskPool()
    await pool.drain()

    async def _work() -> None:
        return None

    with pytest.raises(StateViolation):
        pool.submit("500", _work())
    assert pool.is_closing
