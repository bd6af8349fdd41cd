from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from doc_chat.chat import CallableContextSource, ChatController, NullContextSource, SessionStore
from doc_chat.config import StaticCredentials, load_settings
from doc_chat.errors import ChatError
from doc_chat.llm import (
    ChatCompletionClient,
    MockCompletionClient,
    Provider,
    default_model,
    list_providers,
    parse_provider,
)
from doc_chat.schema import ChatRequest
from doc_chat.utils.run_log import RunLogPaths, append_send_event, init_run_log, make_run_id

HELP = "/quit  /reset  /models  /history  /sessions  /session <id>"


def main(argv: list[str] | None = None) -> int:
    # Best-effort fix for Windows terminals defaulting to a legacy codepage.
    try:
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    except Exception:
        pass

    parser = argparse.ArgumentParser(prog="doc-chat", description="Chat with OpenAI or OpenRouter models.")
    parser.add_argument("--provider", type=str, default=None, help="openai | openrouter (default: DOCCHAT_PROVIDER)")
    parser.add_argument("--model", type=str, default=None, help="provider model id, e.g. gpt-4o-mini")
    parser.add_argument("--session", type=str, default="default", help="conversation id to start in")
    parser.add_argument(
        "--context-file",
        type=Path,
        default=None,
        help="text file used as the selected document text on every send",
    )
    parser.add_argument("--mock", action="store_true", help="answer with a local echo backend, no API keys needed")
    parser.add_argument("--no-log", action="store_true", help="do not write logs/run_*.jsonl")
    parser.add_argument("--list-models", action="store_true", help="print the model catalog and exit")
    args = parser.parse_args(argv)

    console = Console()
    try:
        settings = load_settings()
        logging.basicConfig(
            level=settings.log_level,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
        if args.list_models:
            _print_models(console)
            return 0
        provider = parse_provider(args.provider or settings.provider)
        model = args.model or settings.model or default_model(provider)
    except ChatError as exc:
        console.print(f"[bold red]config error[/bold red]: {escape(str(exc))}")
        return 2

    if args.mock:
        client = MockCompletionClient()
        credentials = StaticCredentials({p: "mock" for p in Provider})
    else:
        client = ChatCompletionClient(timeout_s=settings.timeout_s)
        credentials = StaticCredentials.from_settings(settings)

    context_file: Path | None = args.context_file
    if context_file is not None:
        context = CallableContextSource(lambda: context_file.read_text(encoding="utf-8"))
    else:
        context = NullContextSource()

    controller = ChatController(store=SessionStore(), client=client, credentials=credentials, context=context)
    log_paths = None if args.no_log else init_run_log(settings.log_dir, make_run_id())

    console.rule("doc-chat")
    console.print(f"[bold]provider[/bold]: {provider}  [bold]model[/bold]: {model}  [bold]session[/bold]: {escape(args.session)}")
    if log_paths is not None:
        console.print(f"[bold]run_log[/bold]: {log_paths.jsonl_path}")
    console.print(f"[dim]{HELP}[/dim]")

    session_id = args.session
    while True:
        try:
            line = console.input("[bold cyan]you>[/bold cyan] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            return 0

        text = line.strip()
        if not text:
            continue
        if text.startswith("/"):
            cmd, _, arg = text.partition(" ")
            if cmd in {"/quit", "/exit"}:
                return 0
            if cmd == "/reset":
                controller.reset(session_id)
                console.print(f"[dim]session {escape(repr(session_id))} cleared[/dim]")
            elif cmd == "/models":
                _print_models(console)
            elif cmd == "/history":
                _print_history(console, controller, session_id)
            elif cmd == "/sessions":
                for sid in controller.store.session_ids():
                    marker = "*" if sid == session_id else " "
                    console.print(f"{marker} {escape(sid)} ({len(controller.store.get_session(sid))} messages)")
            elif cmd == "/session" and arg.strip():
                session_id = arg.strip()
                console.print(f"[dim]switched to session {escape(repr(session_id))}[/dim]")
            else:
                console.print(f"[dim]{HELP}[/dim]")
            continue

        _send(console, controller, log_paths, session_id, provider, model, text)


def _send(
    console: Console,
    controller: ChatController,
    log_paths: RunLogPaths | None,
    session_id: str,
    provider: Provider,
    model: str,
    text: str,
) -> None:
    outcome = "ok"
    try:
        req = ChatRequest(session_id=session_id, provider=provider, model=model, user_text=text)
        with console.status("waiting for reply..."):
            result = asyncio.run(controller.handle(req))
        console.print(f"[bold green]assistant>[/bold green] {escape(result.assistant_text)}")
    except (ChatError, ValidationError, httpx.HTTPError) as exc:
        outcome = type(exc).__name__
        console.print(f"[bold red]{outcome}[/bold red]: {escape(str(exc))}")

    if log_paths is not None:
        known = session_id in controller.store.session_ids()
        append_send_event(
            log_paths,
            session_id=session_id,
            provider=provider.value,
            model=model,
            message_count=len(controller.store.get_session(session_id)) if known else 0,
            outcome=outcome,
        )


def _print_models(console: Console) -> None:
    for entry in list_providers():
        console.print(f"[bold]{entry.label}[/bold] ({entry.provider.value})")
        for m in entry.models:
            console.print(f"  - {m.label}: {m.value}")


def _print_history(console: Console, controller: ChatController, session_id: str) -> None:
    if session_id not in controller.store.session_ids():
        console.print("[dim](empty)[/dim]")
        return
    for msg in controller.store.get_session(session_id):
        console.print(f"[bold]{msg.role}[/bold]: {escape(msg.content)}")


if __name__ == "__main__":
    raise SystemExit(main())
