# src/zen_scholar/tasks/task_view.py

"""
Derived task views.

Everything here is a pure function of (tasks, filter, today). Nothing reads
the system clock: callers pass "today" explicitly, so the same inputs always
produce the same view.

Due dates are compared as YYYY-MM-DD strings. That ordering is only correct
for the canonical zero-padded form, which TaskStore enforces on the way in
(see normalize_due_date).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from .task_models import PRIORITY_RANK, Task, ViewFilter, normalize_due_date


@dataclass(frozen=True, slots=True)
class TaskViewItem:
    task: Task
    is_overdue: bool


@dataclass(frozen=True, slots=True)
class TaskView:
    filter: ViewFilter
    today: str
    items: list[TaskViewItem]
    progress: int
    completed_count: int
    total_count: int

    @property
    def is_empty(self) -> bool:
        return not self.items


def _today_str(today: date | str) -> str:
    return normalize_due_date(today)


def filter_tasks(tasks: Iterable[Task], mode: ViewFilter | str, today: date | str) -> list[Task]:
    mode = ViewFilter(mode)
    today_s = _today_str(today)

    if mode is ViewFilter.COMPLETED:
        return [t for t in tasks if t.is_completed]

    # Completion hides a task from the date-based views.
    pending = [t for t in tasks if not t.is_completed]
    if mode is ViewFilter.TODAY:
        return [t for t in pending if t.due_date == today_s]
    return [t for t in pending if t.due_date > today_s]


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Priority (High first), then due date ascending. list.sort is stable, so ties keep input order."""
    return sorted(tasks, key=lambda t: (PRIORITY_RANK[t.priority], t.due_date))


def compute_progress(tasks: Sequence[Task]) -> int:
    total = len(tasks)
    if total == 0:
        return 0
    done = sum(1 for t in tasks if t.is_completed)
    # Round half up in integers: 12.5 -> 13.
    return (200 * done + total) // (2 * total)


def is_overdue(task: Task, today: date | str) -> bool:
    return not task.is_completed and task.due_date < _today_str(today)


def build_view(tasks: Sequence[Task], mode: ViewFilter | str, today: date | str) -> TaskView:
    mode = ViewFilter(mode)
    today_s = _today_str(today)

    visible = sort_tasks(filter_tasks(tasks, mode, today_s))
    items = [TaskViewItem(task=t, is_overdue=is_overdue(t, today_s)) for t in visible]

    return TaskView(
        filter=mode,
        today=today_s,
        items=items,
        progress=compute_progress(tasks),
        completed_count=sum(1 for t in tasks if t.is_completed),
        total_count=len(tasks),
    )
