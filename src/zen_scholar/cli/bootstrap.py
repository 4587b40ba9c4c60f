# src/zen_scholar/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/tasks/preferences/LLM).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.assistant import AssistantSession
from ..core.ports import KeyValueStore, LLMClient
from ..core.state import AppState
from ..llm.client import OpenAICompatibleLLMClient, friendly_llm_error_message
from ..llm.offline import OfflineLLMClient
from ..storage.kv_store import SqliteKeyValueStore
from ..storage.preferences import PreferenceStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.kv_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_llm_client(settings) -> LLMClient:
    try:
        return OpenAICompatibleLLMClient(settings)
    except RuntimeError as e:
        # Demo / local runs without an API key.
        logger.warning("Assistant offline: %s", friendly_llm_error_message(e))
        return OfflineLLMClient()


def create_initial_state(
    *,
    settings=None,
    kv: KeyValueStore | None = None,
    llm: LLMClient | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings, storage and the LLM client injectable makes the app easy
    to test. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = SqliteKeyValueStore(settings.kv_db_path)

    if llm is None:
        llm = build_llm_client(settings)

    task_store = TaskStore(kv)
    task_store.load_initial()

    preferences = PreferenceStore(kv)

    assistant = AssistantSession(
        llm,
        timeout_seconds=float(getattr(settings, "llm_timeout_seconds", 30.0)),
    )

    return AppState(
        settings=settings,
        task_store=task_store,
        preferences=preferences,
        assistant=assistant,
        dark_mode=preferences.load_dark_mode(),
    )
