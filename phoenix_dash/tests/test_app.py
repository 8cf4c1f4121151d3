import asyncio
from dataclasses import replace

from phoenix_dash.config.settings import load_settings
from phoenix_dash.domain.errors import BackendError
from phoenix_dash.main import build_parser, main
from phoenix_dash.runtime.app import App


def test_ready_loads_config_and_starts_four_schedules(api, make_stats, monkeypatch) -> None:
    monkeypatch.delenv("BACKEND_URL", raising=False)
    settings = replace(
        load_settings(),
        stats_interval=0.02,
        events_interval=0.02,
        trades_interval=0.05,
        status_interval=0.03,
        status_followup=0.01,
    )
    api.stats = [make_stats(total_pnl=-1.0)]
    api.events = [BackendError("http 503 GET /api/events", status=503)]
    api.trades = [[]]

    async def scenario():
        app = App(settings, api=api)
        await app.ready()
        await asyncio.sleep(0.2)
        await app.poller.stop()
        return app

    app = asyncio.run(scenario())
    names = [s.name for s in app.poller.schedules]
    assert names == ["stats", "events", "trades", "status"]
    assert [s.interval for s in app.poller.schedules] == [0.02, 0.02, 0.05, 0.03]
    assert app.document.get("config-editor").value == api.config_text
    assert app.document.get("val-total-pnl").text == "$-1.00"
    assert app.document.get("status-indicator").text == "RUNNING"
    assert app.document.get("event-log").children == []
    assert 1 <= len(app.activity.buffer) <= settings.chart_window
    assert ("trades", settings.trade_limit) in api.calls


def test_cli_parser() -> None:
    parser = build_parser()
    assert parser.parse_args([]).command is None
    args = parser.parse_args(["stop", "-y"])
    assert args.command == "stop" and args.yes
    args = parser.parse_args(["push-config", "live.yaml"])
    assert args.file == "live.yaml" and not args.yes


def test_push_config_missing_file_exits_nonzero(tmp_path, capsys) -> None:
    missing = tmp_path / "absent.yaml"
    code = main(["--env-file", str(tmp_path / ".env"), "push-config", str(missing), "-y"])
    assert code == 1
    assert "cannot read" in capsys.readouterr().err
