# src/zen_scholar/tasks/task_store.py

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import replace
from datetime import date
from typing import Any

from ..core.ports import KeyValueStore
from .task_models import Category, Priority, Task, normalize_due_date

logger = logging.getLogger(__name__)

TASKS_KEY = "zenScholarTasks"


class TaskStore:
    """
    In-memory task list persisted to a key-value substrate.

    Every effective mutation serializes the whole list under one key,
    so there is no partial-write state to recover from.

    The current list is held as a tuple and replaced on change; a no-op
    mutation leaves the very same tuple in place.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._tasks: tuple[Task, ...] = ()

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    # ---- low-level helpers ----

    def _save(self) -> None:
        payload = json.dumps([t.to_dict() for t in self._tasks], ensure_ascii=False)
        self._kv.set(TASKS_KEY, payload)
        logger.debug("Tasks saved total=%d", len(self._tasks))

    @staticmethod
    def _parse_entries(data: list[Any]) -> list[Task]:
        out: list[Task] = []
        seen: set[str] = set()
        for i, entry in enumerate(data):
            if not isinstance(entry, dict):
                logger.warning("Skipping stored task #%d: not an object", i)
                continue
            try:
                task = Task.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping stored task #%d: %s", i, e)
                continue
            if task.id in seen:
                logger.warning("Skipping stored task #%d: duplicate id %s", i, task.id)
                continue
            seen.add(task.id)
            out.append(task)
        return out

    # ---- public API ----

    def load_initial(self) -> list[Task]:
        """
        Read the persisted list.

        Missing or unparsable data means "no saved data": the store starts empty.
        """
        raw = self._kv.get(TASKS_KEY)
        if raw is None:
            self._tasks = ()
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored task list is not valid JSON; starting empty.")
            self._tasks = ()
            return []

        if not isinstance(data, list):
            logger.warning("Stored task list is not a list; starting empty.")
            self._tasks = ()
            return []

        tasks = self._parse_entries(data)
        self._tasks = tuple(tasks)
        logger.info("TaskStore loaded total=%d", len(tasks))
        return list(tasks)

    def get_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def find_by_prefix(self, prefix: str) -> Task | None:
        """Resolve a task by a unique id prefix (exact id wins)."""
        prefix = (prefix or "").strip().lower()
        if not prefix:
            return None

        exact = self.get_task(prefix)
        if exact is not None:
            return exact

        matches = [t for t in self._tasks if t.id.lower().startswith(prefix)]
        return matches[0] if len(matches) == 1 else None

    def add_task(
        self,
        title: str,
        category: Category,
        priority: Priority,
        due_date: date | str,
        *,
        now_ms: int | None = None,
    ) -> Task | None:
        title = (title or "").strip()
        if not title:
            return None

        if now_ms is None:
            now_ms = int(time.time() * 1000)

        task = Task(
            id=str(uuid.uuid4()),
            title=title,
            category=Category(category),
            priority=Priority(priority),
            due_date=normalize_due_date(due_date),
            is_completed=False,
            created_at=now_ms,
        )
        self._tasks = (*self._tasks, task)
        self._save()
        logger.info("Task added id=%s priority=%s due=%s", task.id, task.priority, task.due_date)
        return task

    def toggle_completion(self, task_id: str) -> Task | None:
        for i, t in enumerate(self._tasks):
            if t.id != task_id:
                continue
            updated = replace(t, is_completed=not t.is_completed)
            self._tasks = (*self._tasks[:i], updated, *self._tasks[i + 1 :])
            self._save()
            logger.debug("Task toggled id=%s completed=%s", task_id, updated.is_completed)
            return updated
        return None

    def delete_task(self, task_id: str) -> bool:
        if self.get_task(task_id) is None:
            return False
        self._tasks = tuple(t for t in self._tasks if t.id != task_id)
        self._save()
        logger.info("Task deleted id=%s", task_id)
        return True
