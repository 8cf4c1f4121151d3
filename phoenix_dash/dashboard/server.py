from __future__ import annotations

from aiohttp import web

from phoenix_dash.control.panel import START_PROMPT, STOP_PROMPT, SAVE_PROMPT, ControlPanel
from phoenix_dash.dashboard.templates import render
from phoenix_dash.view.document import Document

PROMPTS = {"start": START_PROMPT, "stop": STOP_PROMPT}


def _html(body: str, status: int = 200) -> web.Response:
    return web.Response(text=body, status=status, content_type="text/html", headers={"Cache-Control": "no-store"})


def _confirmed(form) -> bool:
    return str(form.get("confirm", "")).strip().lower() == "yes"


def build_app(document: Document, panel: ControlPanel, *, refresh: int = 1) -> web.Application:
    async def handle_index(_req: web.Request) -> web.Response:
        return _html(render("index.html", doc=document, refresh=refresh))

    async def handle_view(_req: web.Request) -> web.Response:
        return web.json_response(document.to_dict(), headers={"Cache-Control": "no-store"})

    async def handle_confirm(req: web.Request) -> web.Response:
        action = req.match_info["action"]
        if action not in PROMPTS:
            raise web.HTTPNotFound()
        return _html(render("confirm.html", prompt=PROMPTS[action], action=f"/actions/{action}"))

    async def handle_action(req: web.Request) -> web.Response:
        action = req.match_info["action"]
        if action not in PROMPTS:
            raise web.HTTPNotFound()
        form = await req.post()
        ok = _confirmed(form)
        run = panel.start_process if action == "start" else panel.stop_process
        await run(confirm=lambda _prompt: ok)
        raise web.HTTPSeeOther("/")

    async def handle_config_page(_req: web.Request) -> web.Response:
        content = document.get(ControlPanel.EDITOR_ID).value
        return _html(render("config.html", content=content, prompt=SAVE_PROMPT))

    async def handle_config_save(req: web.Request) -> web.Response:
        form = await req.post()
        content = form.get("content")
        if isinstance(content, str):
            panel.edit_config(content)
        notices: list[str] = []
        ok = _confirmed(form)
        await panel.save_config(confirm=lambda _prompt: ok, notify=notices.append)
        current = document.get(ControlPanel.EDITOR_ID).value
        return _html(render("config.html", content=current, prompt=SAVE_PROMPT, notices=notices))

    app = web.Application()
    app.router.add_get("/", handle_index)
    app.router.add_get("/api/view", handle_view)
    app.router.add_get("/confirm/{action}", handle_confirm)
    app.router.add_post("/actions/{action}", handle_action)
    app.router.add_get("/config", handle_config_page)
    app.router.add_post("/config", handle_config_save)
    return app


async def run_dashboard(app: web.Application, *, host: str, port: int, log) -> web.AppRunner:
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    log.info("dashboard running on %s:%s", host, port)
    return runner
