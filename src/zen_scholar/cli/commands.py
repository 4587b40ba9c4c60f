# src/zen_scholar/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..core.state import AppState
from ..tasks.task_models import Category, Priority, ViewFilter, normalize_due_date
from .render import get_palette, render_view

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

ADD_USAGE = "Usage: /add <title> [| category] [| priority] [| YYYY-MM-DD]"


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Anything else is sent to the study assistant.")
        return "\n".join(lines)


registry = CommandRegistry()


def _show(state: AppState) -> str:
    palette = get_palette(
        dark_mode=state.dark_mode,
        color=bool(getattr(state.settings, "console_color", False)),
    )
    return render_view(
        state.current_view(),
        user_name=str(getattr(state.settings, "user_name", "Student")),
        palette=palette,
    )


def parse_add_args(args: list[str], *, today: date) -> tuple[str, Category, Priority, str]:
    """
    Parse "/add" arguments: "<title> | <field> | <field> ...".

    Extra fields may come in any order; each is recognized as a category,
    a priority or a date. Defaults: Study, Medium, today.
    """
    parts = [p.strip() for p in " ".join(args).split("|")]
    title = parts[0] if parts else ""

    category = Category.STUDY
    priority = Priority.MEDIUM
    due_date = today.isoformat()

    for field in parts[1:]:
        if not field:
            continue
        try:
            category = Category.parse(field)
            continue
        except ValueError:
            pass
        try:
            priority = Priority.parse(field)
            continue
        except ValueError:
            pass
        due_date = normalize_due_date(field)

    return title, category, priority, due_date


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    models = ", ".join(list(getattr(settings, "llm_models", []) or []))
    return (
        "Status:\n"
        f"  Tasks: {len(state.task_store.tasks)}\n"
        f"  Filter: {state.view_filter.value}\n"
        f"  Dark mode: {'ON' if state.dark_mode else 'OFF'}\n"
        f"  Assistant: {state.assistant.state.value}\n"
        f"  Models (priority -> fallback): {models}"
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    try:
        title, category, priority, due_date = parse_add_args(args, today=date.today())
    except ValueError as e:
        return f"{e}\n{ADD_USAGE}"

    task = state.task_store.add_task(title, category, priority, due_date)
    if task is None:
        return ADD_USAGE
    return f"Added: {task.title}\n\n{_show(state)}"


def _resolve(state: AppState, args: list[str]) -> str | None:
    if not args:
        return None
    task = state.task_store.find_by_prefix(args[0])
    return task.id if task is not None else None


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    if task_id is None:
        return "Usage: /done <task id or unique prefix>"
    task = state.task_store.toggle_completion(task_id)
    if task is None:
        return "Task not found."
    mark = "completed" if task.is_completed else "reopened"
    return f"Task {mark}: {task.title}\n\n{_show(state)}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    if task_id is None:
        return "Usage: /del <task id or unique prefix>"
    state.task_store.delete_task(task_id)
    return f"Task deleted.\n\n{_show(state)}"


def _make_filter_cmd(mode: ViewFilter) -> CommandHandler:
    def _cmd(state: AppState, args: list[str]) -> str:
        state.view_filter = mode
        return _show(state)

    _cmd.__name__ = f"cmd_filter_{mode.value}"
    return _cmd


def cmd_list(state: AppState, args: list[str]) -> str:
    return _show(state)


def cmd_progress(state: AppState, args: list[str]) -> str:
    view = state.current_view()
    return f"{view.progress}% completed ({view.completed_count}/{view.total_count} tasks)."


def cmd_dark(state: AppState, args: list[str]) -> str:
    """
    /dark       -> toggle
    /dark on    -> enable
    /dark off   -> disable
    """
    if not args:
        enabled = not state.dark_mode
    else:
        arg = args[0].lower()
        if arg in ("on", "1", "true", "yes"):
            enabled = True
        elif arg in ("off", "0", "false", "no"):
            enabled = False
        else:
            return "Usage: /dark [on|off]"

    state.dark_mode = enabled
    state.preferences.save_dark_mode(enabled)
    logger.debug("Dark mode set to %s", enabled)
    return f"Dark mode {'ON' if enabled else 'OFF'}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task count, filter, dark mode and assistant state.")
registry.register("add", cmd_add, help_text="Add a task: /add title | category | priority | YYYY-MM-DD.")
registry.register("done", cmd_toggle, help_text="Toggle completion: /done <id prefix>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <id prefix>.", aliases=["rm", "delete"])
registry.register("today", _make_filter_cmd(ViewFilter.TODAY), help_text="Show tasks due today.")
registry.register("upcoming", _make_filter_cmd(ViewFilter.UPCOMING), help_text="Show tasks due later.")
registry.register(
    "completed",
    _make_filter_cmd(ViewFilter.COMPLETED),
    help_text="Show completed tasks.",
    aliases=["done-list"],
)
registry.register("list", cmd_list, help_text="Show the current view.", aliases=["ls"])
registry.register("progress", cmd_progress, help_text="Show overall completion.")
registry.register("dark", cmd_dark, help_text="Toggle dark mode: /dark [on|off].")
