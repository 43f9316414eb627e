# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from collab_todo.core.state import AppState
from collab_todo.tasks.task_store import TodoStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    A SimpleNamespace rather than config.Settings keeps unit tests isolated
    from the process environment.
    """
    return SimpleNamespace(
        app_name="collab-todo-test",
        log_level="DEBUG",
        observer_log_level="INFO",
        data_dir=tmp_path / "data",
        log_dir=tmp_path / "logs",
        observer_interval_seconds=0.01,
        observer_stop_timeout_seconds=2.0,
        demo_step_seconds=0.0,
        console_enabled=False,
        seed_demo_data=True,
    )


@pytest.fixture()
def store() -> TodoStore:
    return TodoStore()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TodoStore) -> AppState:
    return AppState(settings=settings, store=store)
