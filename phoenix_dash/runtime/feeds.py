from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from phoenix_dash.data.backend import BackendApi
from phoenix_dash.view.charts import ChartView
from phoenix_dash.view.document import Document
from phoenix_dash.view.renderers import render_events, render_stats, render_status, render_trades


class ResponseOrder:
    """Monotonic request sequence for one concern.

    ``accept`` rejects a response whose request was issued before the most
    recently applied one, so overlapping polls can't render out of order.
    """

    def __init__(self):
        self._issued = 0
        self._applied = 0

    def issue(self) -> int:
        self._issued += 1
        return self._issued

    def accept(self, seq: int) -> bool:
        if seq <= self._applied:
            return False
        self._applied = seq
        return True


class Feeds:
    """The four fetch-and-render operations. Each raises on failure; the poller guard logs."""

    CONCERNS = ("stats", "events", "trades", "status")

    def __init__(
        self,
        api: BackendApi,
        document: Document,
        *,
        activity: ChartView,
        price: ChartView,
        trade_limit: int = 50,
        clock: Callable[[], datetime] = datetime.now,
        log=None,
    ):
        self.api = api
        self.document = document
        self.activity = activity
        self.price = price
        self.trade_limit = trade_limit
        self.clock = clock
        self.log = log
        self._order = {name: ResponseOrder() for name in self.CONCERNS}

    def _stale(self, concern: str, seq: int) -> bool:
        if self._order[concern].accept(seq):
            return False
        if self.log is not None:
            self.log.debug("dropping stale %s response seq=%s", concern, seq)
        return True

    async def refresh_stats(self) -> None:
        seq = self._order["stats"].issue()
        stats = await self.api.fetch_stats()
        if self._stale("stats", seq):
            return
        render_stats(self.document, stats, activity=self.activity, price=self.price, now=self.clock())

    async def refresh_events(self) -> None:
        seq = self._order["events"].issue()
        events = await self.api.fetch_events()
        if self._stale("events", seq):
            return
        render_events(self.document, events)

    async def refresh_trades(self) -> None:
        seq = self._order["trades"].issue()
        trades = await self.api.fetch_trades(self.trade_limit)
        if self._stale("trades", seq):
            return
        render_trades(self.document, trades)

    async def refresh_status(self) -> None:
        seq = self._order["status"].issue()
        status = await self.api.fetch_status()
        if self._stale("status", seq):
            return
        render_status(self.document, status)
