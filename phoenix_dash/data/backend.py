from __future__ import annotations

from phoenix_dash.data.http_service import HttpService
from phoenix_dash.domain.models import (
    EventRecord,
    ProcessStatus,
    StatsSnapshot,
    TradeRecord,
    parse_events,
    parse_trades,
)


class BackendApi:
    """Typed calls against the trading process' dashboard endpoints."""

    def __init__(self, http: HttpService):
        self.http = http

    async def close(self) -> None:
        await self.http.close()

    async def fetch_stats(self) -> StatsSnapshot:
        return StatsSnapshot.from_payload(await self.http.get_json("/api/stats"))

    async def fetch_events(self) -> list[EventRecord]:
        return parse_events(await self.http.get_json("/api/events"))

    async def fetch_trades(self, limit: int) -> list[TradeRecord]:
        payload = await self.http.get_json("/api/history/trades", params={"limit": str(int(limit))})
        return parse_trades(payload)

    async def fetch_status(self) -> ProcessStatus:
        return ProcessStatus.from_payload(await self.http.get_json("/api/status"))

    async def start_process(self) -> None:
        await self.http.post("/api/start")

    async def stop_process(self) -> None:
        await self.http.post("/api/stop")

    async def fetch_config(self) -> str:
        return await self.http.get_text("/api/config")

    async def save_config(self, content: str) -> None:
        await self.http.post("/api/config", content)
