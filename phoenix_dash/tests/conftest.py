from __future__ import annotations

import logging

import pytest

from phoenix_dash.domain.errors import BackendError
from phoenix_dash.domain.models import ProcessStatus, StatsSnapshot


def stats(**overrides) -> StatsSnapshot:
    base = dict(
        net_value=1000.0,
        total_pnl=12.0,
        position_size=0.5,
        entry_price=42000.0,
        current_price=42100.0,
        active_orders=3,
        orders_per_min=4.25,
        total_placed=10,
        total_canceled=7,
    )
    base.update(overrides)
    return StatsSnapshot(**base)


class FakeApi:
    """Stands in for BackendApi; queue results or exceptions per call."""

    def __init__(self):
        self.stats: list = []
        self.events: list = []
        self.trades: list = []
        self.status: list = []
        self.config_text = "symbol: BTCUSD\n"
        self.calls: list[tuple] = []
        self.fail_posts = False

    @staticmethod
    def _next(queue: list):
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def fetch_stats(self):
        self.calls.append(("stats",))
        return self._next(self.stats)

    async def fetch_events(self):
        self.calls.append(("events",))
        return self._next(self.events)

    async def fetch_trades(self, limit):
        self.calls.append(("trades", limit))
        return self._next(self.trades)

    async def fetch_status(self):
        self.calls.append(("status",))
        return self._next(self.status)

    async def _post(self, name, *args):
        self.calls.append((name, *args))
        if self.fail_posts:
            raise BackendError(f"http 500 POST /api/{name}", status=500)

    async def start_process(self):
        await self._post("start")

    async def stop_process(self):
        await self._post("stop")

    async def fetch_config(self):
        self.calls.append(("config",))
        return self.config_text

    async def save_config(self, content):
        await self._post("save_config", content)

    async def close(self):
        self.calls.append(("close",))

    def posted(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("start", "stop", "save_config")]


@pytest.fixture
def api() -> FakeApi:
    fake = FakeApi()
    fake.status = [ProcessStatus(running=True, pid=4242)]
    return fake


@pytest.fixture
def log() -> logging.Logger:
    return logging.getLogger("phoenix-dash-test")


@pytest.fixture
def make_stats():
    return stats
