from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class Schedule:
    name: str
    interval: float
    fn: Callable[[], Awaitable[None]]


class Poller:
    """Fixed-interval schedules, each tick spawned as its own task.

    A tick never waits for the previous one: slow or failing operations
    overlap instead of delaying their own schedule or any other.
    """

    def __init__(self, log):
        self.log = log
        self._schedules: list[Schedule] = []
        self._tickers: list[asyncio.Task] = []
        self._inflight: set[asyncio.Task] = set()

    @property
    def schedules(self) -> tuple[Schedule, ...]:
        return tuple(self._schedules)

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tickers)

    def every(self, name: str, interval: float, fn: Callable[[], Awaitable[None]]) -> None:
        if interval <= 0:
            raise ValueError(f"interval for {name} must be positive")
        self._schedules.append(Schedule(name=name, interval=float(interval), fn=fn))

    async def guarded(self, name: str, fn: Callable[[], Awaitable[None]]) -> bool:
        try:
            await fn()
            return True
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.log.warning("poll %s failed: %s", name, exc)
            return False

    def spawn(self, name: str, fn: Callable[[], Awaitable[None]]) -> asyncio.Task:
        task = asyncio.create_task(self.guarded(name, fn), name=f"tick:{name}")
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    def spawn_later(self, delay: float, name: str, fn: Callable[[], Awaitable[None]]) -> asyncio.Task:
        async def _later() -> None:
            await asyncio.sleep(delay)
            await fn()

        return self.spawn(name, _later)

    async def _ticker(self, sched: Schedule) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + sched.interval
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            next_at += sched.interval
            if next_at < loop.time():
                next_at = loop.time() + sched.interval
            self.spawn(sched.name, sched.fn)

    def start(self) -> list[asyncio.Task]:
        if self.running:
            raise RuntimeError("poller already started")
        self._tickers = [
            asyncio.create_task(self._ticker(s), name=f"poll:{s.name}") for s in self._schedules
        ]
        self.log.info(
            "polling started %s",
            " ".join(f"{s.name}={s.interval:g}s" for s in self._schedules),
        )
        return list(self._tickers)

    async def stop(self) -> None:
        tasks = [*self._tickers, *self._inflight]
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tickers = []
