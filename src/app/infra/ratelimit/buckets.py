"""Limitador de buckets em memória (por processo).

Requisições do mesmo bucket são serializadas por um asyncio.Lock; buckets
diferentes seguem independentes. O estado é aprendido dos headers de
resposta e um lock global é honrado quando o upstream o anuncia.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.infra.ratelimit.headers import RateLimitInfo

if TYPE_CHECKING:
    from routing.types import BucketKey

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(slots=True)
class BucketState:
    """Estado conhecido de um bucket."""

    limit: int | None = None
    remaining: int | None = None
    reset_at: float | None = None
    upstream_bucket: str | None = None


class InMemoryBucketLimiter:
    """Throttling por BucketKey com lock global.

    Lock e estado de um bucket só existem enquanto há requisições usando o
    bucket ou uma janela de reset ainda no futuro; buckets ociosos são
    descartados ao liberar o lock e numa varredura quando o número de
    estados passa de `sweep_threshold`.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Sleep = asyncio.sleep,
        sweep_threshold: int = 1024,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._sweep_threshold = sweep_threshold
        self._locks: dict[BucketKey, asyncio.Lock] = {}
        self._users: dict[BucketKey, int] = {}
        self._states: dict[BucketKey, BucketState] = {}
        self._global_until = 0.0

    def state(self, bucket: BucketKey) -> BucketState | None:
        return self._states.get(bucket)

    @property
    def global_locked_until(self) -> float:
        return self._global_until

    @property
    def tracked_buckets(self) -> int:
        """Quantidade de buckets com lock ou estado retidos."""
        return len(self._locks.keys() | self._states.keys())

    @contextlib.asynccontextmanager
    async def acquire(self, bucket: BucketKey) -> AsyncIterator[None]:
        """Reserva o bucket: aguarda lock, janela global e janela do bucket."""
        lock = self._locks.get(bucket)
        if lock is None:
            lock = self._locks[bucket] = asyncio.Lock()
        self._users[bucket] = self._users.get(bucket, 0) + 1
        try:
            async with lock:
                await self._wait_global()
                await self._wait_bucket(bucket)
                yield
        finally:
            self._release(bucket)

    def update(self, bucket: BucketKey, info: RateLimitInfo) -> None:
        """Atualiza o estado do bucket a partir de uma resposta."""
        state = self._states.setdefault(bucket, BucketState())
        if info.limit is not None:
            state.limit = info.limit
        if info.remaining is not None:
            state.remaining = info.remaining
        if info.reset_after is not None:
            state.reset_at = self._clock() + info.reset_after
        if info.bucket is not None:
            state.upstream_bucket = info.bucket

    def defer(self, bucket: BucketKey, seconds: float) -> None:
        """Bloqueia o bucket até `seconds` à frente (após um 429 local)."""
        state = self._states.setdefault(bucket, BucketState())
        state.remaining = 0
        state.reset_at = self._clock() + seconds

    def lock_global(self, seconds: float) -> None:
        """Bloqueia todos os buckets até `seconds` à frente."""
        until = self._clock() + seconds
        if until > self._global_until:
            self._global_until = until
            logger.warning("ratelimit_global_locked", extra={"retry_after": seconds})

    async def _wait_global(self) -> None:
        delay = self._global_until - self._clock()
        if delay > 0:
            await self._sleep(delay)

    async def _wait_bucket(self, bucket: BucketKey) -> None:
        state = self._states.get(bucket)
        if state is None or state.remaining is None or state.reset_at is None:
            return
        if state.remaining > 0:
            state.remaining -= 1
            return
        delay = state.reset_at - self._clock()
        if delay > 0:
            logger.info(
                "ratelimit_bucket_wait",
                extra={"bucket": str(bucket), "wait_seconds": round(delay, 3)},
            )
            await self._sleep(delay)
        # Janela reiniciada: estado volta a ser aprendido da próxima resposta
        state.remaining = None
        state.reset_at = None

    def _release(self, bucket: BucketKey) -> None:
        users = self._users[bucket] - 1
        if users > 0:
            self._users[bucket] = users
            return
        del self._users[bucket]
        del self._locks[bucket]
        now = self._clock()
        state = self._states.get(bucket)
        if state is not None and _is_expired(state, now):
            del self._states[bucket]
        if len(self._states) > self._sweep_threshold:
            self._sweep(now)

    def _sweep(self, now: float) -> None:
        expired = [
            key
            for key, state in self._states.items()
            if key not in self._users and _is_expired(state, now)
        ]
        for key in expired:
            del self._states[key]
        if expired:
            logger.debug("ratelimit_buckets_swept", extra={"removed": len(expired)})


def _is_expired(state: BucketState, now: float) -> bool:
    return state.reset_at is None or state.reset_at <= now
