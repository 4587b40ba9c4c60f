# src/zen_scholar/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_LOOSE_DATE_RE = re.compile(r"^\s*(\d{1,4})-(\d{1,2})-(\d{1,2})\s*$")


class _LookupMixin:
    @classmethod
    def parse(cls, raw: str):
        """Case-insensitive lookup by value or name. Raises ValueError if unknown."""
        s = (raw or "").strip().lower()
        for member in cls:  # type: ignore[attr-defined]
            if s in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown {cls.__name__.lower()}: {raw!r}")


class Category(_LookupMixin, StrEnum):
    STUDY = "Study"
    REVISION = "Revision"
    GYM = "Gym"
    PRAYER = "Prayer"
    PERSONAL = "Personal"


class Priority(_LookupMixin, StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class ViewFilter(_LookupMixin, StrEnum):
    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


def normalize_due_date(value: date | str) -> str:
    """
    Return the canonical zero-padded YYYY-MM-DD form.

    Due dates are compared as plain strings everywhere else, which only
    orders correctly for this fixed-width form.
    """
    # datetime is a date subclass; drop the time of day.
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    s = str(value).strip()
    if _ISO_DATE_RE.match(s):
        return date.fromisoformat(s).isoformat()

    m = _LOOSE_DATE_RE.match(s)
    if not m:
        raise ValueError(f"Invalid due date: {value!r} (expected YYYY-MM-DD)")
    y, mo, d = (int(g) for g in m.groups())
    return date(y, mo, d).isoformat()


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    category: Category
    priority: Priority
    due_date: str
    is_completed: bool
    created_at: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "isCompleted": self.is_completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a Task from its stored form. Raises ValueError/KeyError/TypeError on bad data."""
        task_id = str(data["id"]).strip()
        title = str(data["title"]).strip()
        if not task_id:
            raise ValueError("empty task id")
        if not title:
            raise ValueError("empty task title")

        return cls(
            id=task_id,
            title=title,
            category=Category(data["category"]),
            priority=Priority(data["priority"]),
            due_date=normalize_due_date(data["dueDate"]),
            is_completed=bool(data.get("isCompleted", False)),
            created_at=int(data.get("createdAt") or 0),
        )
