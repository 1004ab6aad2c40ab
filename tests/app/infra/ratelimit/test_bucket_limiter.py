"""Testes do InMemoryBucketLimiter."""

from __future__ import annotations

import asyncio

from app.infra.ratelimit import InMemoryBucketLimiter, RateLimitInfo
from routing import BucketKey


class FakeTime:
    """Relógio e sleep falsos: dormir avança o relógio."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def clock(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _limiter(fake: FakeTime) -> InMemoryBucketLimiter:
    return InMemoryBucketLimiter(clock=fake.clock, sleep=fake.sleep)


async def test_unknown_bucket_does_not_wait() -> None:
    fake = FakeTime()
    limiter = _limiter(fake)

    async with limiter.acquire(BucketKey("CreateMessage", "1")):
        pass

    assert fake.sleeps == []


async def test_exhausted_bucket_waits_until_reset() -> None:
    fake = FakeTime()
    limiter = _limiter(fake)
    bucket = BucketKey("CreateMessage", "1")
    limiter.update(bucket, RateLimitInfo(limit=5, remaining=0, reset_after=2.0))

    async with limiter.acquire(bucket):
        pass

    assert fake.sleeps == [2.0]
    assert limiter.state(bucket) is None


async def test_remaining_quota_is_consumed_without_waiting() -> None:
    fake = FakeTime()
    limiter = _limiter(fake)
    bucket = BucketKey("CreateMessage", "1")
    limiter.update(bucket, RateLimitInfo(limit=5, remaining=2, reset_after=10.0, bucket="hash"))

    async with limiter.acquire(bucket):
        pass

    state = limiter.state(bucket)
    assert fake.sleeps == []
    assert state.remaining == 1
    assert state.upstream_bucket == "hash"


async def test_different_buckets_are_independent() -> None:
    fake = FakeTime()
    limiter = _limiter(fake)
    limiter.defer(BucketKey("CreateMessage", "1"), 5.0)

    async with limiter.acquire(BucketKey("CreateMessage", "2")):
        pass

    assert fake.sleeps == []


async def test_global_lock_applies_to_every_bucket() -> None:
    fake = FakeTime()
    limiter = _limiter(fake)
    limiter.lock_global(3.0)
    limiter.lock_global(1.0)

    async with limiter.acquire(BucketKey("GetGateway")):
        pass

    assert limiter.global_locked_until == 3.0
    assert fake.sleeps == [3.0]


async def test_same_bucket_is_serialized() -> None:
    limiter = InMemoryBucketLimiter()
    bucket = BucketKey("CreateMessage", "1")
    order: list[str] = []

    async def _use(name: str) -> None:
        async with limiter.acquire(bucket):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(_use("a"), _use("b"))

    assert order == ["a-in", "a-out", "b-in", "b-out"]
    assert limiter.tracked_buckets == 0


async def test_idle_buckets_are_released() -> None:
    fake = FakeTime()
    limiter = _limiter(fake)

    for channel_id in range(5000):
        async with limiter.acquire(BucketKey("CreateMessage", str(channel_id))):
            pass

    assert limiter.tracked_buckets == 0


async def test_bucket_with_pending_reset_is_kept_until_it_expires() -> None:
    fake = FakeTime()
    limiter = _limiter(fake)
    bucket = BucketKey("CreateMessage", "1")

    async with limiter.acquire(bucket):
        limiter.update(bucket, RateLimitInfo(limit=5, remaining=0, reset_after=2.0))

    assert limiter.state(bucket).remaining == 0

    async with limiter.acquire(bucket):
        pass

    assert fake.sleeps == [2.0]
    assert limiter.tracked_buckets == 0


async def test_expired_deferred_buckets_are_swept() -> None:
    fake = FakeTime()
    limiter = InMemoryBucketLimiter(clock=fake.clock, sleep=fake.sleep, sweep_threshold=10)
    for channel_id in range(20):
        limiter.defer(BucketKey("CreateMessage", str(channel_id)), 1.0)

    fake.now = 5.0
    async with limiter.acquire(BucketKey("GetGateway")):
        pass

    assert limiter.tracked_buckets == 0
