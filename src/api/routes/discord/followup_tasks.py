"""Pool de tasks destacadas para o trabalho pós-acknowledgement."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from utils.errors import StateViolation

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 100


class FollowupTaskPool:
    """Executa follow-ups fora do request, com concorrência limitada.

    Cada task é associada ao id da interação que a originou. Depois de
    `drain()` o pool não aceita novas tasks.
    """

    def __init__(self, max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._tasks: dict[asyncio.Task[None], str] = {}
        self._closing = False

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    @property
    def is_closing(self) -> bool:
        return self._closing

    def submit(
        self,
        interaction_id: str,
        work: Coroutine[Any, Any, None],
        *,
        correlation_id: str = "",
    ) -> asyncio.Task[None]:
        """Agenda o trabalho em task própria.

        Raises:
            StateViolation: Se o pool já estiver em shutdown.
        """
        if self._closing:
            work.close()
            raise StateViolation("followup_pool_closing")

        task = asyncio.create_task(self._run(work), name=f"followup:{interaction_id}")
        self._tasks[task] = interaction_id
        task.add_done_callback(self._on_done)
        logger.info(
            "followup_task_scheduled",
            extra={
                "interaction_id": interaction_id,
                "correlation_id": correlation_id,
                "active_tasks": len(self._tasks),
            },
        )
        return task

    async def _run(self, work: Coroutine[Any, Any, None]) -> None:
        async with self._semaphore:
            await work

    def _on_done(self, task: asyncio.Task[None]) -> None:
        interaction_id = self._tasks.pop(task, "")
        if task.cancelled():
            logger.warning("followup_task_cancelled", extra={"interaction_id": interaction_id})
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "followup_task_failed",
                extra={
                    "interaction_id": interaction_id,
                    "error_type": type(exc).__name__,
                    "active_tasks": len(self._tasks),
                },
            )

    async def drain(self, timeout_seconds: float = 30.0) -> int:
        """Fecha o pool e aguarda as tasks pendentes até o timeout.

        Returns:
            Quantidade de tasks canceladas por estourar o timeout.
        """
        self._closing = True
        if not self._tasks:
            return 0

        logger.info(
            "followup_tasks_draining",
            extra={"pending_tasks": len(self._tasks), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(list(self._tasks), timeout=timeout_seconds)
        if not pending:
            return 0

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning("followup_tasks_cancelled", extra={"cancelled_tasks": len(pending)})
        return len(pending)
