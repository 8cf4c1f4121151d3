from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from phoenix_dash.config import Settings, load_settings
from phoenix_dash.control.panel import ControlPanel
from phoenix_dash.data import BackendApi, HttpService
from phoenix_dash.infra import get_logger
from phoenix_dash.runtime.app import run_main
from phoenix_dash.view.document import Document


def ask(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def _panel(settings: Settings, *, assume_yes: bool) -> ControlPanel:
    return ControlPanel(
        BackendApi(HttpService.from_settings(settings)),
        Document(),
        log=get_logger("phoenix-dash", settings.log_level),
        confirm=(lambda _prompt: True) if assume_yes else ask,
        notify=print,
    )


async def _control(args: argparse.Namespace, settings: Settings) -> int:
    content = None
    if args.command == "push-config":
        try:
            content = Path(args.file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"cannot read {args.file}: {exc}", file=sys.stderr)
            return 1
    panel = _panel(settings, assume_yes=args.yes)
    try:
        if args.command == "start":
            result = await panel.start_process()
        elif args.command == "stop":
            result = await panel.stop_process()
        elif args.command == "pull-config":
            if not await panel.load_config():
                return 1
            sys.stdout.write(panel.document.get(ControlPanel.EDITOR_ID).value)
            return 0
        else:
            panel.edit_config(content)
            result = await panel.save_config()
        return 0 if result.ok else 1
    finally:
        await panel.api.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phoenix-dash", description="Trading process dashboard")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load before reading settings")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("run", help="poll the backend and serve the dashboard (default)")
    for name, text in (("start", "start the trading process"), ("stop", "stop the trading process")):
        p = sub.add_parser(name, help=text)
        p.add_argument("-y", "--yes", action="store_true", help="skip the confirmation prompt")
    sub.add_parser("pull-config", help="print the current configuration").set_defaults(yes=False)
    push = sub.add_parser("push-config", help="replace the configuration with FILE")
    push.add_argument("file")
    push.add_argument("-y", "--yes", action="store_true", help="skip the confirmation prompt")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv(args.env_file)
    settings = load_settings()
    if args.command in (None, "run"):
        run_main(settings)
        return 0
    return asyncio.run(_control(args, settings))


if __name__ == "__main__":
    sys.exit(main())
