"""Tests for the periodic timer."""

import asyncio

import pytest

from joke_skill.behaviors.timers import PeriodicTimer


class TestPeriodicTimer:
    """Tests for PeriodicTimer scheduling and shutdown."""

    def test_rejects_non_positive_period(self) -> None:
        async def tick() -> None:
            pass

        with pytest.raises(ValueError):
            PeriodicTimer("bad", tick, initial_delay=0.0, period=0.0)

    @pytest.mark.asyncio
    async def test_ticks_repeatedly(self) -> None:
        calls = 0

        async def tick() -> None:
            nonlocal calls
            calls += 1

        timer = PeriodicTimer("fast", tick, initial_delay=0.0, period=0.01)
        timer.start()
        assert timer.running
        await asyncio.sleep(0.1)
        await timer.stop()

        assert calls >= 3
        assert timer.ticks == calls
        assert not timer.running

    @pytest.mark.asyncio
    async def test_initial_delay_holds_first_tick(self) -> None:
        calls = 0

        async def tick() -> None:
            nonlocal calls
            calls += 1

        timer = PeriodicTimer("slow-start", tick, initial_delay=10.0, period=0.01)
        timer.start()
        await asyncio.sleep(0.05)
        await timer.stop()

        assert calls == 0

    @pytest.mark.asyncio
    async def test_ticks_never_overlap(self) -> None:
        active = 0
        peak = 0

        async def slow_tick() -> None:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.03)
            active -= 1

        timer = PeriodicTimer("overlap", slow_tick, initial_delay=0.0, period=0.005)
        timer.start()
        await asyncio.sleep(0.15)
        await timer.stop()

        assert peak == 1
        assert timer.ticks >= 2

    @pytest.mark.asyncio
    async def test_stop_waits_for_inflight_tick(self) -> None:
        entered = asyncio.Event()
        finished = False

        async def tick() -> None:
            nonlocal finished
            entered.set()
            await asyncio.sleep(0.05)
            finished = True

        timer = PeriodicTimer("graceful", tick, initial_delay=0.0, period=10.0)
        timer.start()
        await entered.wait()
        await timer.stop()

        assert finished

    @pytest.mark.asyncio
    async def test_stop_cancels_after_grace(self) -> None:
        entered = asyncio.Event()
        cancelled = False

        async def stuck_tick() -> None:
            nonlocal cancelled
            entered.set()
            try:
                await asyncio.sleep(30.0)
            except asyncio.CancelledError:
                cancelled = True
                raise

        timer = PeriodicTimer("stuck", stuck_tick, initial_delay=0.0, period=1.0)
        timer.start()
        await entered.wait()
        await timer.stop(grace_seconds=0.01)

        assert cancelled
        assert not timer.running

    @pytest.mark.asyncio
    async def test_failing_tick_keeps_timer_alive(self) -> None:
        calls = 0

        async def flaky() -> None:
            nonlocal calls
            calls += 1
            raise RuntimeError("robot unplugged")

        timer = PeriodicTimer("flaky", flaky, initial_delay=0.0, period=0.01)
        timer.start()
        await asyncio.sleep(0.08)
        assert timer.running
        await timer.stop()

        assert calls >= 2

    @pytest.mark.asyncio
    async def test_restart_after_stop(self) -> None:
        calls = 0

        async def tick() -> None:
            nonlocal calls
            calls += 1

        timer = PeriodicTimer("again", tick, initial_delay=0.0, period=0.01)
        timer.start()
        await asyncio.sleep(0.03)
        await timer.stop()
        before = calls

        timer.start()
        await asyncio.sleep(0.03)
        await timer.stop()

        assert calls > before

    @pytest.mark.asyncio
    async def test_stop_when_never_started(self) -> None:
        async def tick() -> None:
            pass

        timer = PeriodicTimer("idle", tick, initial_delay=0.0, period=1.0)
        await timer.stop()
        assert timer.ticks == 0
