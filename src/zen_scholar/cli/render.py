# src/zen_scholar/cli/render.py

"""Plain-text rendering of task views and chat turns for the console."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.assistant import ChatMessage
from ..tasks.task_models import Priority, ViewFilter
from ..tasks.task_view import TaskView, TaskViewItem

ID_PREFIX_LEN = 8

_RESET = "\033[0m"


@dataclass(frozen=True, slots=True)
class Palette:
    high: str
    medium: str
    low: str
    muted: str
    accent: str
    error: str
    enabled: bool = True

    def paint(self, text: str, color: str) -> str:
        if not self.enabled or not color:
            return text
        return f"{color}{text}{_RESET}"


LIGHT = Palette(
    high="\033[31m",
    medium="\033[33m",
    low="\033[32m",
    muted="\033[90m",
    accent="\033[34m",
    error="\033[31m",
)

DARK = Palette(
    high="\033[91m",
    medium="\033[93m",
    low="\033[92m",
    muted="\033[37m",
    accent="\033[96m",
    error="\033[91m",
)

PLAIN = Palette(high="", medium="", low="", muted="", accent="", error="", enabled=False)


def get_palette(*, dark_mode: bool, color: bool = True) -> Palette:
    if not color:
        return PLAIN
    return DARK if dark_mode else LIGHT


FILTER_LABELS: dict[ViewFilter, str] = {
    ViewFilter.TODAY: "Today",
    ViewFilter.UPCOMING: "Upcoming",
    ViewFilter.COMPLETED: "Done",
}


def progress_bar(percent: int, width: int = 20) -> str:
    percent = max(0, min(100, int(percent)))
    filled = (percent * width) // 100
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def _priority_color(priority: Priority, palette: Palette) -> str:
    if priority is Priority.HIGH:
        return palette.high
    if priority is Priority.MEDIUM:
        return palette.medium
    return palette.low


def render_header(view: TaskView, *, user_name: str = "Student", palette: Palette = PLAIN) -> str:
    tabs = "  ".join(
        palette.paint(f"<{label}>", palette.accent) if f is view.filter else label
        for f, label in FILTER_LABELS.items()
    )
    return "\n".join(
        [
            f"Hello, {user_name}",
            palette.paint("Let's make today productive.", palette.muted),
            f"{progress_bar(view.progress)} {view.progress}% Completed",
            tabs,
        ]
    )


def render_task_line(item: TaskViewItem, *, palette: Palette = PLAIN) -> str:
    t = item.task
    if t.is_completed:
        line = f"[x] {t.id[:ID_PREFIX_LEN]}  {t.title}  ({t.priority.value} | {t.category.value} | {t.due_date})"
        return palette.paint(line, palette.muted)

    badge = palette.paint(t.priority.value, _priority_color(t.priority, palette))
    line = f"[ ] {t.id[:ID_PREFIX_LEN]}  {t.title}  ({badge} | {t.category.value} | {t.due_date})"
    if item.is_overdue:
        line += " " + palette.paint("OVERDUE", palette.error)
    return line


def render_view(view: TaskView, *, user_name: str = "Student", palette: Palette = PLAIN) -> str:
    lines = [render_header(view, user_name=user_name, palette=palette), ""]

    if view.is_empty:
        lines.append(f"No tasks found for {view.filter.value}.")
        if view.filter is not ViewFilter.COMPLETED:
            lines.append("Enjoy your free time!")
        return "\n".join(lines)

    lines.extend(render_task_line(item, palette=palette) for item in view.items)
    return "\n".join(lines)


def render_chat_message(message: ChatMessage, *, app_name: str = "Zen Assistant", palette: Palette = PLAIN) -> str:
    if message.role == "user":
        return f">>> You: {message.text}"
    text = f"<<< {app_name}: {message.text}"
    return palette.paint(text, palette.error) if message.is_error else text
