from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

from phoenix_dash.domain.models import EventRecord, ProcessStatus, StatsSnapshot, TradeRecord
from phoenix_dash.view.charts import ChartView
from phoenix_dash.view.document import (
    ACTIVITY_FIELDS,
    FINANCIAL_FIELDS,
    NEGATIVE,
    POSITIVE,
    Document,
    Node,
    css_token,
    signed_color,
)

TIME_FORMAT = "%H:%M:%S"


def fixed(value: float, places: int) -> str:
    """Fixed-point text with ties rounded away from zero (42000.125 -> 42000.13)."""
    number = Decimal(value)
    if not number.is_finite():
        return format(number, "f")
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        return format(number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP), "f")


def money(value: float | None) -> str:
    if value is None:
        return "$-"
    return "$" + fixed(value, 2)


def clock_label(now: datetime) -> str:
    return now.strftime(TIME_FORMAT)


def render_stats(
    document: Document,
    stats: StatsSnapshot,
    *,
    activity: ChartView,
    price: ChartView,
    now: datetime,
) -> None:
    (
        net_value,
        total_pnl,
        position,
        entry_price,
        current_price,
        unrealized,
    ) = document.require(*FINANCIAL_FIELDS)
    active, per_min, placed, canceled, filled, risk = document.require(*ACTIVITY_FIELDS)
    document.require(activity.element_id, price.element_id)

    net_value.text = money(stats.net_value)
    total_pnl.text = money(stats.total_pnl)
    total_pnl.color = signed_color(stats.total_pnl)
    position.text = fixed(stats.position_size, 4)
    entry_price.text = money(stats.entry_price)
    current_price.text = money(stats.current_price)
    unrealized.text = money(stats.unrealized_pnl)
    unrealized.color = signed_color(stats.unrealized_pnl)

    active.text = str(stats.active_orders)
    per_min.text = fixed(stats.orders_per_min, 1)
    placed.text = str(stats.total_placed)
    canceled.text = str(stats.total_canceled)
    filled.text = str(stats.total_filled)
    risk.text = str(stats.risk_trigger_count)

    label = clock_label(now)
    entry = stats.entry_price if stats.entry_price is not None and stats.entry_price > 0 else None
    activity.push(document, label, orders_per_min=stats.orders_per_min)
    price.push(document, label, price=stats.current_price, entry=entry)


def trade_row(trade: TradeRecord) -> Node:
    return Node(
        "tr",
        children=(
            Node("td", clock_label(trade.when)),
            Node("td", trade.symbol),
            Node("td", trade.side, color=POSITIVE if trade.side == "BUY" else NEGATIVE),
            Node("td", fixed(trade.price, 2)),
            Node("td", fixed(trade.quantity, 4)),
            Node("td", fixed(trade.pnl, 4), color=signed_color(trade.pnl)),
        ),
    )


def render_trades(document: Document, trades: list[TradeRecord]) -> None:
    table = document.get("trade-table")
    table.replace_children([trade_row(t) for t in trades])


def event_entry(event: EventRecord) -> Node:
    return Node(
        "div",
        classes=("log-entry",),
        children=(
            Node("span", f"[{clock_label(event.time)}]", classes=("log-time",)),
            Node("span", event.type, classes=(f"log-type-{css_token(event.type)}",)),
            Node("span", event.message, classes=("log-msg",)),
        ),
    )


def render_events(document: Document, events: list[EventRecord]) -> None:
    log_view = document.get("event-log")
    log_view.replace_children([event_entry(e) for e in reversed(events)])


def render_status(document: Document, status: ProcessStatus) -> None:
    indicator, pid = document.require("status-indicator", "pid-display")
    if status.running:
        indicator.text = "RUNNING"
        indicator.class_name = "status running"
        pid.text = f"PID: {status.pid if status.pid is not None else '-'}"
    else:
        indicator.text = "STOPPED"
        indicator.class_name = "status stopped"
        pid.text = "PID: -"
