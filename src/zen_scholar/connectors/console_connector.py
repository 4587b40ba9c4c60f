# src/zen_scholar/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.render import Palette, get_palette, render_chat_message
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _palette(state: AppState) -> Palette:
    return get_palette(
        dark_mode=state.dark_mode,
        color=bool(getattr(state.settings, "console_color", False)),
    )


def render_transcript(state: AppState) -> str:
    """The whole chat so far (at startup: just the greeting)."""
    palette = _palette(state)
    return "\n".join(render_chat_message(m, palette=palette) for m in state.assistant.transcript)


def handle_line(state: AppState, line: str, runner: asyncio.Runner | None = None) -> str | None:
    """
    Route one console line: slash commands to the registry, anything else to
    the assistant. Returns the text to print (None when nothing to show).

    `runner` keeps one event loop alive across lines; without it a fresh
    loop is used for this line only.
    """
    cmd_response = command_registry.handle(state, line)
    if cmd_response is not None:
        return cmd_response

    send = state.assistant.send_user_message(line)
    reply = runner.run(send) if runner is not None else asyncio.run(send)
    if reply is None:
        if state.assistant.is_busy:
            return "The assistant is still working on your previous message."
        return None

    return render_chat_message(reply, palette=_palette(state))


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("Type /help for commands, /exit to quit. Anything else goes to the study assistant.\n")

    first = command_registry.handle(state, "/list")
    if first:
        print(first + "\n")
    print(render_transcript(state) + "\n")

    with asyncio.Runner() as runner:
        while True:
            try:
                user_input = input(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                out = handle_line(state, user_input, runner)
            except Exception:
                logger.exception("Console handler crashed.")
                _print_ts("Internal error while handling this line.")
                continue

            if out:
                print(out + "\n")

    logger.info("Console connector finished.")
