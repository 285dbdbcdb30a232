import asyncio

import pytest

from rate_limiter import RateLimiter


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _limiter(rpm: int, clock: FakeClock) -> RateLimiter:
    return RateLimiter(rpm, clock=clock, sleep=clock.sleep)


def test_rejects_non_positive_quota():
    with pytest.raises(ValueError):
        RateLimiter(0)


@pytest.mark.asyncio
async def test_calls_within_quota_do_not_wait():
    clock = FakeClock()
    limiter = _limiter(3, clock)

    for _ in range(3):
        await limiter.wait_if_needed()

    assert clock.sleeps == []
    assert limiter.request_count == 3


@pytest.mark.asyncio
async def test_call_over_quota_waits_for_rest_of_window():
    clock = FakeClock()
    limiter = _limiter(2, clock)

    await limiter.wait_if_needed()
    clock.now += 20
    await limiter.wait_if_needed()
    await limiter.wait_if_needed()

    assert clock.sleeps == [pytest.approx(40.0)]
    # New window opened after the wait and the waiting call counted in it.
    assert limiter.request_count == 1


@pytest.mark.asyncio
async def test_window_resets_after_sixty_seconds():
    clock = FakeClock()
    limiter = _limiter(1, clock)

    await limiter.wait_if_needed()
    clock.now += 60
    await limiter.wait_if_needed()

    assert clock.sleeps == []
    assert limiter.request_count == 1


@pytest.mark.asyncio
async def test_concurrent_callers_are_counted_once_each():
    clock = FakeClock()
    limiter = _limiter(5, clock)

    await asyncio.gather(*(limiter.wait_if_needed() for _ in range(5)))

    assert limiter.request_count == 5
    assert clock.sleeps == []

    await limiter.wait_if_needed()
    assert len(clock.sleeps) == 1
