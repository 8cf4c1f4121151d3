import asyncio
from datetime import datetime

import pytest

from phoenix_dash.domain.errors import BackendError, MalformedPayloadError, MissingElementError
from phoenix_dash.domain.models import ProcessStatus, TradeRecord
from phoenix_dash.runtime.feeds import Feeds, ResponseOrder
from phoenix_dash.view.charts import activity_chart, price_chart
from phoenix_dash.view.document import Document


def _feeds(api, doc=None) -> Feeds:
    return Feeds(
        api,
        doc or Document(),
        activity=activity_chart(),
        price=price_chart(),
        clock=lambda: datetime(2024, 1, 1, 12, 0, 0),
    )


def test_stats_failure_keeps_previous_values(api, make_stats) -> None:
    feeds = _feeds(api)
    api.stats = [make_stats(net_value=250.0), BackendError("http 502 GET /api/stats", status=502)]
    asyncio.run(feeds.refresh_stats())
    with pytest.raises(BackendError):
        asyncio.run(feeds.refresh_stats())
    assert feeds.document.get("val-net-value").text == "$250.00"
    assert len(feeds.activity.buffer) == 1
    assert len(feeds.price.buffer) == 1


def test_trades_failure_keeps_previous_rows(api) -> None:
    feeds = _feeds(api)
    trade = TradeRecord(timestamp=1700000000, symbol="ETHUSD", side="SELL", price=2000.0, quantity=1.0, pnl=-2.0)
    api.trades = [[trade], MalformedPayloadError("expected array, got dict")]
    asyncio.run(feeds.refresh_trades())
    with pytest.raises(MalformedPayloadError):
        asyncio.run(feeds.refresh_trades())
    assert len(feeds.document.get("trade-table").children) == 1
    assert ("trades", 50) in api.calls


def test_status_failure_keeps_indicator(api) -> None:
    feeds = _feeds(api)
    api.status = [ProcessStatus(running=True, pid=9), BackendError("connection refused")]
    asyncio.run(feeds.refresh_status())
    with pytest.raises(BackendError):
        asyncio.run(feeds.refresh_status())
    assert feeds.document.get("status-indicator").text == "RUNNING"
    assert feeds.document.get("pid-display").text == "PID: 9"


def test_events_missing_element_is_an_error(api) -> None:
    doc = Document()
    doc.remove("event-log")
    feeds = _feeds(api, doc)
    api.events = [[]]
    with pytest.raises(MissingElementError):
        asyncio.run(feeds.refresh_events())


def test_response_order_drops_stale() -> None:
    order = ResponseOrder()
    first, second = order.issue(), order.issue()
    assert order.accept(second)
    assert not order.accept(first)
    third = order.issue()
    assert order.accept(third)


def test_overlapping_stats_apply_in_issue_order(api, make_stats) -> None:
    class SlowFirst:
        def __init__(self):
            self.n = 0

        async def fetch_stats(self):
            self.n += 1
            if self.n == 1:
                await asyncio.sleep(0.05)
                return make_stats(current_price=1.0)
            return make_stats(current_price=2.0)

    feeds = _feeds(SlowFirst())

    async def scenario() -> None:
        await asyncio.gather(feeds.refresh_stats(), feeds.refresh_stats())

    asyncio.run(scenario())
    assert [p.value for p in feeds.price.buffer.points("price")] == [2.0]
    assert feeds.document.get("val-current-price").text == "$2.00"
