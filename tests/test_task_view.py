# tests/test_task_view.py

from __future__ import annotations

from datetime import date, datetime

import pytest

from zen_scholar.tasks.task_models import Category, Priority, Task, ViewFilter
from zen_scholar.tasks.task_view import (
    build_view,
    compute_progress,
    filter_tasks,
    is_overdue,
    sort_tasks,
)


def make_task(
    task_id: str,
    due_date: str,
    *,
    priority: Priority = Priority.MEDIUM,
    done: bool = False,
) -> Task:
    return Task(
        id=task_id,
        title=f"task {task_id}",
        category=Category.STUDY,
        priority=priority,
        due_date=due_date,
        is_completed=done,
        created_at=0,
    )


@pytest.fixture()
def three_days() -> list[Task]:
    return [
        make_task("done", "2024-01-01", done=True),
        make_task("today", "2024-01-02"),
        make_task("later", "2024-01-03"),
    ]


def test_filter_today(three_days: list[Task]) -> None:
    assert [t.id for t in filter_tasks(three_days, ViewFilter.TODAY, "2024-01-02")] == ["today"]


def test_filter_upcoming(three_days: list[Task]) -> None:
    assert [t.id for t in filter_tasks(three_days, "upcoming", date(2024, 1, 2))] == ["later"]


@pytest.mark.parametrize("today", ["2023-12-31", "2024-01-02", "2030-06-01"])
def test_filter_completed_ignores_today(three_days: list[Task], today: str) -> None:
    assert [t.id for t in filter_tasks(three_days, ViewFilter.COMPLETED, today)] == ["done"]


def test_completed_task_hidden_from_date_views() -> None:
    tasks = [make_task("a", "2024-01-02", done=True), make_task("b", "2024-01-09", done=True)]
    assert filter_tasks(tasks, ViewFilter.TODAY, "2024-01-02") == []
    assert filter_tasks(tasks, ViewFilter.UPCOMING, "2024-01-02") == []


def test_past_incomplete_task_is_in_neither_date_view() -> None:
    tasks = [make_task("old", "2023-12-30")]
    assert filter_tasks(tasks, ViewFilter.TODAY, "2024-01-02") == []
    assert filter_tasks(tasks, ViewFilter.UPCOMING, "2024-01-02") == []


def test_sort_by_priority_then_date() -> None:
    tasks = [
        make_task("m", "2024-02-01", priority=Priority.MEDIUM),
        make_task("h-late", "2024-03-01", priority=Priority.HIGH),
        make_task("h-early", "2024-01-01", priority=Priority.HIGH),
    ]
    assert [t.id for t in sort_tasks(tasks)] == ["h-early", "h-late", "m"]


def test_sort_is_stable_for_equal_keys() -> None:
    tasks = [
        make_task("low", "2024-01-01", priority=Priority.LOW),
        make_task("first", "2024-01-05", priority=Priority.HIGH),
        make_task("second", "2024-01-05", priority=Priority.HIGH),
        make_task("third", "2024-01-05", priority=Priority.HIGH),
    ]
    assert [t.id for t in sort_tasks(tasks)] == ["first", "second", "third", "low"]


@pytest.mark.parametrize(
    ("done", "total", "expected"),
    [(0, 0, 0), (1, 4, 25), (2, 3, 67), (1, 8, 13), (3, 3, 100), (0, 5, 0)],
)
def test_progress(done: int, total: int, expected: int) -> None:
    tasks = [make_task(str(i), "2024-01-01", done=i < done) for i in range(total)]
    assert compute_progress(tasks) == expected


def test_overdue_only_for_incomplete_past_tasks() -> None:
    today = date(2024, 1, 2)
    assert is_overdue(make_task("a", "2024-01-01"), today) is True
    assert is_overdue(make_task("b", "2024-01-01", done=True), today) is False
    assert is_overdue(make_task("c", "2024-01-02"), today) is False
    assert is_overdue(make_task("d", "2024-01-03"), today) is False


def test_build_view_combines_stages() -> None:
    tasks = [
        make_task("done", "2023-12-01", done=True),
        make_task("low", "2024-01-02", priority=Priority.LOW),
        make_task("high", "2024-01-02", priority=Priority.HIGH),
        make_task("next", "2024-01-10"),
    ]
    view = build_view(tasks, ViewFilter.TODAY, "2024-01-02")

    assert view.filter is ViewFilter.TODAY
    assert view.today == "2024-01-02"
    assert [i.task.id for i in view.items] == ["high", "low"]
    assert not any(i.is_overdue for i in view.items)
    assert (view.completed_count, view.total_count, view.progress) == (1, 4, 25)


def test_build_view_completed_never_marks_overdue() -> None:
    tasks = [make_task("done", "2023-12-01", done=True)]
    view = build_view(tasks, ViewFilter.COMPLETED, "2024-01-02")
    assert [i.is_overdue for i in view.items] == [False]


def test_build_view_empty() -> None:
    view = build_view([], ViewFilter.UPCOMING, "2024-01-02")
    assert view.is_empty
    assert view.progress == 0


def test_today_as_datetime_ignores_time_of_day() -> None:
    tasks = [make_task("due", "2024-01-02"), make_task("late", "2024-01-01")]

    view = build_view(tasks, ViewFilter.TODAY, datetime(2024, 1, 2, 23, 59))

    assert view.today == "2024-01-02"
    assert [i.task.id for i in view.items] == ["due"]
    assert is_overdue(tasks[1], datetime(2024, 1, 2, 0, 0)) is True
