from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.environ.get(name)
    if raw is None:
        value = default
    else:
        value = int(raw)
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_float(name: str, default: float, min_value: float | None = None) -> float:
    raw = os.environ.get(name)
    if raw is None:
        value = default
    else:
        value = float(raw)
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_ms(name: str, default_ms: int, min_ms: int = 50) -> float:
    return _env_int(name, default_ms, min_value=min_ms) / 1000.0


@dataclass(frozen=True)
class Settings:
    backend_url: str
    log_level: str
    dashboard_host: str
    dashboard_port: int
    stats_interval: float
    events_interval: float
    trades_interval: float
    status_interval: float
    trade_limit: int
    chart_window: int
    status_followup: float
    http_conn_limit: int = 16
    http_keepalive_sec: float = 30.0


def load_settings() -> Settings:
    return Settings(
        backend_url=os.environ.get("BACKEND_URL", "http://127.0.0.1:8081").strip().rstrip("/"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper(),
        dashboard_host=os.environ.get("DASHBOARD_HOST", "127.0.0.1").strip(),
        dashboard_port=_env_int("DASHBOARD_PORT", 8090, min_value=1),
        stats_interval=_env_ms("STATS_INTERVAL_MS", 1000),
        events_interval=_env_ms("EVENTS_INTERVAL_MS", 1000),
        trades_interval=_env_ms("TRADES_INTERVAL_MS", 5000),
        status_interval=_env_ms("STATUS_INTERVAL_MS", 2000),
        trade_limit=_env_int("TRADE_LIMIT", 50, min_value=1),
        chart_window=_env_int("CHART_WINDOW", 60, min_value=1),
        status_followup=_env_ms("STATUS_FOLLOWUP_MS", 1000, min_ms=0),
        http_conn_limit=_env_int("HTTP_CONN_LIMIT", 16, min_value=1),
        http_keepalive_sec=_env_float("HTTP_KEEPALIVE_SEC", 30.0, min_value=5.0),
    )
