from __future__ import annotations

import asyncio

from phoenix_dash.config import Settings
from phoenix_dash.control.panel import ControlPanel
from phoenix_dash.dashboard import build_app, run_dashboard
from phoenix_dash.data import BackendApi, HttpService
from phoenix_dash.infra import get_logger
from phoenix_dash.runtime.feeds import Feeds
from phoenix_dash.runtime.poller import Poller
from phoenix_dash.view.charts import activity_chart, price_chart
from phoenix_dash.view.document import Document


class App:
    """Top-level wiring: one document, two chart components, four schedules."""

    def __init__(self, settings: Settings, api: BackendApi | None = None):
        self.settings = settings
        self.log = get_logger("phoenix-dash", settings.log_level)
        self.api = api or BackendApi(HttpService.from_settings(settings))
        self.document = Document()
        self.activity = activity_chart(settings.chart_window)
        self.price = price_chart(settings.chart_window)
        self.feeds = Feeds(
            self.api,
            self.document,
            activity=self.activity,
            price=self.price,
            trade_limit=settings.trade_limit,
            log=self.log,
        )
        self.poller = Poller(self.log)
        self.panel = ControlPanel(
            self.api,
            self.document,
            log=self.log,
            schedule_refresh=self._refresh_status_later,
            refresh_delay=settings.status_followup,
        )

    def _refresh_status_later(self, delay: float) -> asyncio.Task:
        return self.poller.spawn_later(delay, "status", self.feeds.refresh_status)

    def schedule(self) -> None:
        s = self.settings
        self.poller.every("stats", s.stats_interval, self.feeds.refresh_stats)
        self.poller.every("events", s.events_interval, self.feeds.refresh_events)
        self.poller.every("trades", s.trades_interval, self.feeds.refresh_trades)
        self.poller.every("status", s.status_interval, self.feeds.refresh_status)

    async def ready(self) -> None:
        await self.panel.load_config()
        self.schedule()
        self.poller.start()

    async def run(self) -> None:
        self.log.info(
            "starting dashboard backend=%s view=%s:%s",
            self.settings.backend_url,
            self.settings.dashboard_host,
            self.settings.dashboard_port,
        )
        runner = await run_dashboard(
            build_app(self.document, self.panel),
            host=self.settings.dashboard_host,
            port=self.settings.dashboard_port,
            log=self.log,
        )
        try:
            await self.ready()
            await asyncio.Event().wait()
        finally:
            await self.poller.stop()
            await runner.cleanup()
            await self.api.close()


def run_main(settings: Settings) -> None:
    try:
        asyncio.run(App(settings).run())
    except KeyboardInterrupt:
        pass
