import asyncio

import pytest

from phoenix_dash.runtime.poller import Poller


def test_failing_schedule_does_not_block_others(log) -> None:
    counts = {"ok": 0, "boom": 0}

    async def ok() -> None:
        counts["ok"] += 1

    async def boom() -> None:
        counts["boom"] += 1
        raise RuntimeError("backend down")

    async def scenario() -> None:
        poller = Poller(log)
        poller.every("ok", 0.02, ok)
        poller.every("boom", 0.02, boom)
        poller.start()
        await asyncio.sleep(0.25)
        await poller.stop()

    asyncio.run(scenario())
    assert counts["boom"] >= 3
    assert counts["ok"] >= 3


def test_slow_tick_does_not_delay_next_tick(log) -> None:
    started = []

    async def slow() -> None:
        started.append(asyncio.get_running_loop().time())
        await asyncio.sleep(1.0)

    async def scenario() -> None:
        poller = Poller(log)
        poller.every("slow", 0.03, slow)
        poller.start()
        await asyncio.sleep(0.2)
        await poller.stop()

    asyncio.run(scenario())
    assert len(started) >= 4


def test_first_tick_waits_one_interval(log) -> None:
    calls = []

    async def tick() -> None:
        calls.append(1)

    async def scenario() -> None:
        poller = Poller(log)
        poller.every("tick", 0.5, tick)
        poller.start()
        await asyncio.sleep(0.05)
        await poller.stop()

    asyncio.run(scenario())
    assert calls == []


def test_guarded_logs_and_swallows(log, caplog) -> None:
    async def boom() -> None:
        raise ValueError("bad payload")

    poller = Poller(log)
    with caplog.at_level("WARNING", logger=log.name):
        ok = asyncio.run(poller.guarded("stats", boom))
    assert ok is False
    assert "poll stats failed: bad payload" in caplog.text


def test_spawn_later_runs_once(log) -> None:
    calls = []

    async def tick() -> None:
        calls.append(1)

    async def scenario() -> None:
        poller = Poller(log)
        await poller.spawn_later(0.01, "status", tick)

    asyncio.run(scenario())
    assert calls == [1]


def test_rejects_non_positive_interval(log) -> None:
    with pytest.raises(ValueError):
        Poller(log).every("bad", 0, lambda: None)
