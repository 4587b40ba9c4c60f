# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from zen_scholar.cli.bootstrap import create_initial_state
from zen_scholar.core.state import AppState
from zen_scholar.storage.kv_store import MemoryKeyValueStore
from zen_scholar.tasks.task_store import TaskStore

from .fakes import FakeLLMClient


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="Zen Scholar",
        user_name="Student",
        console_color=False,
        data_dir=tmp_path,
        kv_db_path=tmp_path / "storage.sqlite3",
        llm_api_key=None,
        llm_base_url="https://example.invalid/v1",
        llm_models=["test-model"],
        llm_timeout_seconds=5.0,
        llm_connect_timeout_seconds=1.0,
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(kv: MemoryKeyValueStore) -> TaskStore:
    s = TaskStore(kv)
    s.load_initial()
    return s


@pytest.fixture()
def llm() -> FakeLLMClient:
    return FakeLLMClient(next_text="Take a short break, then start with the hardest topic.")


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKeyValueStore, llm: FakeLLMClient) -> AppState:
    """AppState wired with an in-memory store and a fake assistant backend."""
    return create_initial_state(settings=settings, kv=kv, llm=llm)
