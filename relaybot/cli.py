"""Command line entry point -- run the webhook server or a local console.

    relaybot serve mybot:router [--port 8080]
    relaybot console mybot:router

``mybot:router`` names an :class:`EventRouter` instance, or a zero-argument
callable returning one, the same way ASGI servers name their app.
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import itertools
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory
from rich.console import Console

from .config.settings import cfg
from .messaging.context import BotContext
from .messaging.events import EventSource, MessageEvent, SourceType, TextContent
from .messaging.messages import TextMessage
from .messaging.router import EventRouter
from .platform.memory import InMemoryClient

console = Console()

CONSOLE_USER_ID = "Uconsole"


def load_router(target: str) -> EventRouter:
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise SystemExit(f"Expected 'module:attribute', got {target!r}")
    obj = getattr(importlib.import_module(module_name), attr)
    if not isinstance(obj, EventRouter) and callable(obj):
        obj = obj()
    if not isinstance(obj, EventRouter):
        raise SystemExit(f"{target} is not an EventRouter")
    return obj


def _print_reply(client: InMemoryClient, token: str) -> None:
    delivered = [d for d in client.replies if d.target == token]
    if not delivered:
        console.print("[dim](no reply)[/dim]")
        return
    for message in delivered[-1].messages:
        if isinstance(message, TextMessage):
            console.print(f"[bold cyan]bot >[/bold cyan] {message.text}")
        else:
            console.print("[bold cyan]bot >[/bold cyan]")
            console.print_json(data=message.to_payload())


async def _console(router: EventRouter) -> None:
    cfg.ensure_dirs()
    client = InMemoryClient()
    router.client = client

    def show_error(_ctx: BotContext, error: BaseException) -> None:
        console.print(f"[bold red]error:[/bold red] {type(error).__name__}: {error}")

    router.on_error(show_error)

    console.print(
        f"[bold green]relaybot[/bold green] console -- {len(router.handlers)} handler(s)\n"
        "Type [bold]/quit[/bold] to exit.\n"
    )
    prompt_session: PromptSession[str] = PromptSession(history=FileHistory(str(cfg.console_history_path)))

    for seq in itertools.count(1):
        try:
            user_input = await asyncio.to_thread(prompt_session.prompt, HTML("<b>you &gt;</b> "))
        except (EOFError, KeyboardInterrupt):
            break

        text = user_input.strip()
        if not text:
            continue
        if text.lower() in ("/quit", "/exit"):
            break

        token = f"console-{seq}"
        event = MessageEvent(
            reply_token=token,
            source=EventSource(type=SourceType.USER, user_id=CONSOLE_USER_ID),
            message=TextContent(id=str(seq), text=text),
        )
        await router.dispatch(event)
        _print_reply(client, token)

    console.print("[dim]Goodbye.[/dim]")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="relaybot")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the webhook server")
    serve.add_argument("router", help="module:attribute of the EventRouter")
    serve.add_argument("--port", type=int, default=None)

    repl = sub.add_parser("console", help="chat with the router locally")
    repl.add_argument("router", help="module:attribute of the EventRouter")

    args = parser.parse_args(argv)
    sys.path.insert(0, ".")
    router = load_router(args.router)

    if args.command == "serve":
        from .server.app import run

        run(router, port=args.port)
        return

    try:
        asyncio.run(_console(router))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
