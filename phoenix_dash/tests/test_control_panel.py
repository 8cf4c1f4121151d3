import asyncio

from phoenix_dash.control.panel import SAVE_PROMPT, SAVED_NOTICE, STOP_PROMPT, ControlPanel
from phoenix_dash.domain.models import ProcessStatus
from phoenix_dash.view.document import Document
from phoenix_dash.view.renderers import render_status


def _panel(api, log, **kw) -> tuple[ControlPanel, list[float]]:
    refreshes: list[float] = []
    panel = ControlPanel(api, Document(), log=log, schedule_refresh=refreshes.append, **kw)
    return panel, refreshes


def test_stop_without_confirmation_sends_nothing(api, log) -> None:
    panel, refreshes = _panel(api, log)
    render_status(panel.document, ProcessStatus(running=True, pid=77))
    prompts = []

    def refuse(prompt: str) -> bool:
        prompts.append(prompt)
        return False

    result = asyncio.run(panel.stop_process(confirm=refuse))
    assert prompts == [STOP_PROMPT]
    assert not result.sent
    assert api.posted() == []
    assert refreshes == []
    assert panel.document.get("status-indicator").text == "RUNNING"


def test_confirmed_start_schedules_one_status_refresh(api, log) -> None:
    panel, refreshes = _panel(api, log, confirm=lambda _p: True, refresh_delay=1.0)
    result = asyncio.run(panel.start_process())
    assert result.ok
    assert api.posted() == [("start",)]
    assert refreshes == [1.0]


def test_failed_stop_is_reported_not_raised(api, log) -> None:
    api.fail_posts = True
    panel, refreshes = _panel(api, log, confirm=lambda _p: True)
    result = asyncio.run(panel.stop_process())
    assert result.sent and not result.ok
    assert "500" in result.reason
    assert refreshes == [1.0]


def test_load_config_fills_editor_verbatim(api, log) -> None:
    api.config_text = "grid:\n  levels: 5  # keep\n\ttabbed: yes\n"
    panel, _ = _panel(api, log)
    assert asyncio.run(panel.load_config())
    assert panel.document.get("config-editor").value == api.config_text


def test_save_sends_editor_content_unmodified(api, log) -> None:
    notices: list[str] = []
    panel, _ = _panel(api, log, confirm=lambda _p: True, notify=notices.append)
    content = "not: [valid yaml\r\n  trailing   \n"
    panel.edit_config(content)
    result = asyncio.run(panel.save_config())
    assert result.ok
    assert api.posted() == [("save_config", content)]
    assert notices == [SAVED_NOTICE]


def test_save_declined_sends_nothing(api, log) -> None:
    prompts = []
    panel, _ = _panel(api, log)
    panel.edit_config("a: 1\n")
    result = asyncio.run(panel.save_config(confirm=lambda p: prompts.append(p) or False))
    assert prompts == [SAVE_PROMPT]
    assert not result.sent
    assert api.posted() == []


def test_failed_save_produces_no_notice(api, log) -> None:
    api.fail_posts = True
    notices: list[str] = []
    panel, _ = _panel(api, log, confirm=lambda _p: True, notify=notices.append)
    result = asyncio.run(panel.save_config())
    assert not result.ok
    assert notices == []
