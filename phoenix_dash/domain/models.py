from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from phoenix_dash.domain.errors import MalformedPayloadError

_FRACTION = re.compile(r"(\.\d{6})\d+")


def _require(payload: Any, key: str) -> Any:
    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"expected object, got {type(payload).__name__}")
    if key not in payload:
        raise MalformedPayloadError(f"missing field {key!r}")
    return payload[key]


def _number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedPayloadError(f"field {key!r} is not a number: {value!r}")
    return float(value)


def _optional_number(payload: dict, key: str, default: float | None = 0.0) -> float | None:
    value = payload.get(key)
    if value is None:
        return default
    return _number(value, key)


def _int(value: Any, key: str) -> int:
    return int(_number(value, key))


def _list(payload: Any) -> list:
    if not isinstance(payload, list):
        raise MalformedPayloadError(f"expected array, got {type(payload).__name__}")
    return payload


@dataclass(frozen=True)
class MetricPoint:
    label: str
    value: float | None


@dataclass(frozen=True)
class StatsSnapshot:
    net_value: float
    total_pnl: float
    position_size: float
    entry_price: float | None
    current_price: float
    active_orders: int
    orders_per_min: float
    total_placed: int
    total_canceled: int
    total_filled: int = 0
    risk_trigger_count: int = 0
    unrealized_pnl: float = 0.0

    @classmethod
    def from_payload(cls, payload: Any) -> "StatsSnapshot":
        def num(key: str) -> float:
            return _number(_require(payload, key), key)

        def count(key: str) -> int:
            return _int(_require(payload, key), key)

        return cls(
            net_value=num("net_value"),
            total_pnl=num("total_pnl"),
            position_size=num("position_size"),
            entry_price=_optional_number(payload, "entry_price", default=None),
            current_price=num("current_price"),
            active_orders=count("active_orders"),
            orders_per_min=num("orders_per_min"),
            total_placed=count("total_placed"),
            total_canceled=count("total_canceled"),
            total_filled=int(_optional_number(payload, "total_filled")),
            risk_trigger_count=int(_optional_number(payload, "risk_trigger_count")),
            unrealized_pnl=_optional_number(payload, "unrealized_pnl"),
        )


@dataclass(frozen=True)
class TradeRecord:
    timestamp: int
    symbol: str
    side: str
    price: float
    quantity: float
    pnl: float
    id: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "TradeRecord":
        side = str(_require(payload, "side")).upper()
        if side not in ("BUY", "SELL"):
            raise MalformedPayloadError(f"unknown trade side {side!r}")
        raw_id = payload.get("id")
        return cls(
            timestamp=_int(_require(payload, "timestamp"), "timestamp"),
            symbol=str(_require(payload, "symbol")),
            side=side,
            price=_number(_require(payload, "price"), "price"),
            quantity=_number(_require(payload, "quantity"), "quantity"),
            pnl=_number(_require(payload, "pnl"), "pnl"),
            id=None if raw_id is None else _int(raw_id, "id"),
        )

    @property
    def when(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp)


@dataclass(frozen=True)
class EventRecord:
    time: datetime
    type: str
    message: str

    @classmethod
    def from_payload(cls, payload: Any) -> "EventRecord":
        return cls(
            time=parse_event_time(_require(payload, "time")),
            type=str(_require(payload, "type") or ""),
            message=str(_require(payload, "message")),
        )


@dataclass(frozen=True)
class ProcessStatus:
    running: bool
    pid: int | None

    @classmethod
    def from_payload(cls, payload: Any) -> "ProcessStatus":
        running = _require(payload, "running")
        if not isinstance(running, bool):
            raise MalformedPayloadError(f"field 'running' is not a boolean: {running!r}")
        pid = payload.get("pid")
        return cls(running=running, pid=None if pid is None else _int(pid, "pid"))


def parse_event_time(raw: Any) -> datetime:
    """Event times arrive as epoch milliseconds or RFC 3339 strings; both map to local time."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return datetime.fromtimestamp(raw / 1000.0)
    if isinstance(raw, str):
        text = _FRACTION.sub(r"\1", raw.strip())
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise MalformedPayloadError(f"bad event time {raw!r}") from exc
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed
    raise MalformedPayloadError(f"bad event time {raw!r}")


def parse_trades(payload: Any) -> list[TradeRecord]:
    return [TradeRecord.from_payload(row) for row in _list(payload or [])]


def parse_events(payload: Any) -> list[EventRecord]:
    return [EventRecord.from_payload(row) for row in _list(payload or [])]
