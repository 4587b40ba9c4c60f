# tests/test_commands.py

from __future__ import annotations

import asyncio
import threading
import time
from datetime import date, timedelta

from zen_scholar.cli.commands import CommandRegistry, parse_add_args, registry
from zen_scholar.connectors.console_connector import handle_line, render_transcript
from zen_scholar.core.assistant import AssistantSession
from zen_scholar.core.persona import CONNECTION_ERROR_REPLY, GREETING
from zen_scholar.storage.preferences import DARK_MODE_KEY
from zen_scholar.tasks.task_models import Category, Priority, ViewFilter

from .fakes import FakeLLMClient


def test_command_registry_routes_names_and_aliases(state) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []

    def handler(state, args):
        seen.append(args)
        return "ok"

    reg.register("Ping", handler, "ping", aliases=["p"])

    assert reg.handle(state, "/ping a b") == "ok"
    assert reg.handle(state, "/P c") == "ok"
    assert seen == [["a", "b"], ["c"]]
    assert "/ping - ping" in reg.build_help()


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_parse_add_args_defaults_and_fields() -> None:
    today = date(2024, 1, 2)
    assert parse_add_args(["Read", "chapter", "3"], today=today) == (
        "Read chapter 3",
        Category.STUDY,
        Priority.MEDIUM,
        "2024-01-02",
    )
    assert parse_add_args("Leg day | 2024-1-9 | high | gym".split(), today=today) == (
        "Leg day",
        Category.GYM,
        Priority.HIGH,
        "2024-01-09",
    )


def test_add_toggle_delete_flow(state) -> None:
    out = registry.handle(state, "/add Finish essay | high | personal")
    assert out is not None and "Finish essay" in out

    (task,) = state.task_store.tasks
    assert task.priority is Priority.HIGH
    assert task.category is Category.PERSONAL
    assert task.due_date == date.today().isoformat()

    out = registry.handle(state, f"/done {task.id[:8]}")
    assert out is not None and "completed" in out
    assert state.task_store.tasks[0].is_completed is True

    out = registry.handle(state, f"/del {task.id[:8]}")
    assert out is not None and "deleted" in out
    assert state.task_store.tasks == ()


def test_add_with_blank_title_shows_usage(state) -> None:
    assert (registry.handle(state, "/add") or "").startswith("Usage: /add")
    assert (registry.handle(state, "/add bad date | 2024-13-45") or "").endswith("YYYY-MM-DD]")
    assert state.task_store.tasks == ()


def test_filter_commands_switch_view(state) -> None:
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    registry.handle(state, f"/add Mock exam | revision | {tomorrow}")

    out = registry.handle(state, "/today") or ""
    assert state.view_filter is ViewFilter.TODAY
    assert "No tasks found for today." in out

    out = registry.handle(state, "/upcoming") or ""
    assert state.view_filter is ViewFilter.UPCOMING
    assert "Mock exam" in out

    out = registry.handle(state, "/completed") or ""
    assert state.view_filter is ViewFilter.COMPLETED
    assert "Enjoy your free time!" not in out


def test_progress_command(state) -> None:
    registry.handle(state, "/add a")
    registry.handle(state, "/add b")
    first = state.task_store.tasks[0]
    registry.handle(state, f"/done {first.id}")

    assert registry.handle(state, "/progress") == "50% completed (1/2 tasks)."


def test_dark_mode_is_persisted(state, kv) -> None:
    assert state.dark_mode is False
    assert registry.handle(state, "/dark") == "Dark mode ON."
    assert state.dark_mode is True
    assert kv.data[DARK_MODE_KEY] == "true"
    assert registry.handle(state, "/dark off") == "Dark mode OFF."
    assert "Usage" in (registry.handle(state, "/dark maybe") or "")


def test_plain_text_goes_to_assistant(state, llm) -> None:
    out = handle_line(state, "I feel overwhelmed")

    assert out is not None and llm.next_text in out
    assert [m.role for m in state.assistant.transcript] == ["model", "user", "model"]


def test_console_starts_by_showing_the_greeting(state) -> None:
    out = render_transcript(state)

    assert out.startswith("<<< Zen Assistant:")
    assert GREETING in out


def test_slow_assistant_does_not_block_the_console(state) -> None:
    gate = threading.Event()
    state.assistant = AssistantSession(FakeLLMClient(gate=gate), timeout_seconds=0.05)

    try:
        with asyncio.Runner() as runner:
            started = time.monotonic()
            out = handle_line(state, "hello?", runner)
            elapsed = time.monotonic() - started

            assert out is not None and CONNECTION_ERROR_REPLY in out
            assert elapsed < 1.0
            assert handle_line(state, "again", runner) == (
                "The assistant is still working on your previous message."
            )
    finally:
        gate.set()
