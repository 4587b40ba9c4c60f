# src/zen_scholar/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from ..storage.preferences import PreferenceStore
from ..tasks.task_models import ViewFilter
from ..tasks.task_store import TaskStore
from ..tasks.task_view import TaskView, build_view
from .assistant import AssistantSession


@dataclass
class AppState:
    settings: Any

    task_store: TaskStore
    preferences: PreferenceStore
    assistant: AssistantSession

    view_filter: ViewFilter = ViewFilter.TODAY
    dark_mode: bool = False

    def current_view(self, today: date | None = None) -> TaskView:
        """Recompute the visible list; the surface calls this after every change."""
        if today is None:
            today = date.today()
        return build_view(self.task_store.tasks, self.view_filter, today)
