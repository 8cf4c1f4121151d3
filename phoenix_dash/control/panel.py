from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from phoenix_dash.data.backend import BackendApi
from phoenix_dash.domain.errors import DashboardError
from phoenix_dash.view.document import Document

Confirm = Callable[[str], bool]
Notify = Callable[[str], None]

START_PROMPT = "Start trading process?"
STOP_PROMPT = "Stop trading process?"
SAVE_PROMPT = "Save configuration? This may require a restart."
SAVED_NOTICE = "Configuration saved."


def decline(_prompt: str) -> bool:
    return False


def discard(_message: str) -> None:
    return None


@dataclass(frozen=True)
class ActionResult:
    sent: bool
    ok: bool
    reason: str


class ControlPanel:
    """User-triggered one-shot requests against the process control endpoints.

    Every request-issuing action is gated on ``confirm``. Failed requests are
    logged and reported through the result, never raised.
    """

    EDITOR_ID = "config-editor"

    def __init__(
        self,
        api: BackendApi,
        document: Document,
        *,
        log,
        confirm: Confirm = decline,
        notify: Notify = discard,
        schedule_refresh: Callable[[float], object] | None = None,
        refresh_delay: float = 1.0,
    ):
        self.api = api
        self.document = document
        self.log = log
        self.confirm = confirm
        self.notify = notify
        self.schedule_refresh = schedule_refresh
        self.refresh_delay = refresh_delay

    async def _process_action(self, name: str, prompt: str, call, confirm: Confirm | None) -> ActionResult:
        if not (confirm or self.confirm)(prompt):
            self.log.info("%s declined", name)
            return ActionResult(sent=False, ok=False, reason="declined")
        try:
            await call()
            self.log.info("%s request sent", name)
            result = ActionResult(sent=True, ok=True, reason="ok")
        except DashboardError as exc:
            self.log.error("%s request failed: %s", name, exc)
            result = ActionResult(sent=True, ok=False, reason=str(exc))
        if self.schedule_refresh is not None:
            self.schedule_refresh(self.refresh_delay)
        return result

    async def start_process(self, *, confirm: Confirm | None = None) -> ActionResult:
        return await self._process_action("start", START_PROMPT, self.api.start_process, confirm)

    async def stop_process(self, *, confirm: Confirm | None = None) -> ActionResult:
        return await self._process_action("stop", STOP_PROMPT, self.api.stop_process, confirm)

    async def load_config(self) -> bool:
        try:
            editor = self.document.get(self.EDITOR_ID)
            editor.value = await self.api.fetch_config()
        except DashboardError as exc:
            self.log.error("config load failed: %s", exc)
            return False
        self.log.info("config loaded (%d bytes)", len(editor.value))
        return True

    def edit_config(self, text: str) -> None:
        self.document.get(self.EDITOR_ID).value = text

    async def save_config(
        self,
        *,
        confirm: Confirm | None = None,
        notify: Notify | None = None,
    ) -> ActionResult:
        if not (confirm or self.confirm)(SAVE_PROMPT):
            self.log.info("config save declined")
            return ActionResult(sent=False, ok=False, reason="declined")
        try:
            content = self.document.get(self.EDITOR_ID).value
            await self.api.save_config(content)
        except DashboardError as exc:
            self.log.error("config save failed: %s", exc)
            return ActionResult(sent=True, ok=False, reason=str(exc))
        self.log.info("config saved (%d bytes)", len(content))
        (notify or self.notify)(SAVED_NOTICE)
        return ActionResult(sent=True, ok=True, reason="ok")
