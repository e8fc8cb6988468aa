"""Tests for batch schedulers."""

import pytest

from crisis_profiles.pipeline import FixedDelayScheduler, TokenBucketScheduler


class FakeClock:
    """Manual clock whose sleep advances time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestFixedDelayScheduler:
    """Tests for FixedDelayScheduler."""

    async def test_sleeps_fixed_delay(self, clock: FakeClock) -> None:
        scheduler = FixedDelayScheduler(1.5, sleep=clock.sleep)
        await scheduler.wait()
        await scheduler.wait()
        assert clock.sleeps == [1.5, 1.5]

    async def test_zero_delay_never_sleeps(self, clock: FakeClock) -> None:
        scheduler = FixedDelayScheduler(0, sleep=clock.sleep)
        await scheduler.wait()
        assert clock.sleeps == []

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError, match="delay_seconds"):
            FixedDelayScheduler(-1)


class TestTokenBucketScheduler:
    """Tests for TokenBucketScheduler."""

    async def test_capacity_one_paces_at_rate(self, clock: FakeClock) -> None:
        scheduler = TokenBucketScheduler(2.0, 1, sleep=clock.sleep, clock=clock)
        await scheduler.wait()
        await scheduler.wait()
        assert clock.sleeps == [0.5, 0.5]

    async def test_burst_then_rate(self, clock: FakeClock) -> None:
        scheduler = TokenBucketScheduler(1.0, 3, sleep=clock.sleep, clock=clock)
        await scheduler.wait()
        await scheduler.wait()
        assert clock.sleeps == []
        await scheduler.wait()
        assert clock.sleeps == [1.0]

    async def test_elapsed_time_refills(self, clock: FakeClock) -> None:
        scheduler = TokenBucketScheduler(1.0, 1, sleep=clock.sleep, clock=clock)
        clock.now = 0.75
        await scheduler.wait()
        assert clock.sleeps == [pytest.approx(0.25)]

    async def test_refill_is_capped(self, clock: FakeClock) -> None:
        scheduler = TokenBucketScheduler(1.0, 2, sleep=clock.sleep, clock=clock)
        clock.now = 100.0
        await scheduler.wait()
        await scheduler.wait()
        assert clock.sleeps == []
        await scheduler.wait()
        assert clock.sleeps == [1.0]

    @pytest.mark.parametrize(("rate", "capacity"), [(0, 1), (-1.0, 1), (1.0, 0)])
    def test_invalid_settings_rejected(self, rate: float, capacity: int) -> None:
        with pytest.raises(ValueError):
            TokenBucketScheduler(rate, capacity)
