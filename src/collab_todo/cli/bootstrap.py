# src/collab_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the store into AppState,
- seeds the demo users/tasks.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_models import Task, User
from ..tasks.task_store import TodoStore

logger = logging.getLogger(__name__)

DEMO_USERS: tuple[tuple[str, str], ...] = (
    ("Alice", "alice@example.com"),
    ("Bob", "bob@example.com"),
)

# (title, description, category, index into DEMO_USERS)
DEMO_TASKS: tuple[tuple[str, str, str, int], ...] = (
    ("Learn JavaScript", "Study async/await patterns", "Learning", 0),
    ("Build Project", "Create a todo app", "Development", 1),
    ("Review Code", "Check for bugs", "Review", 1),
)


def _ensure_local_dirs(settings) -> None:
    for attr in ("data_dir", "log_dir"):
        raw = getattr(settings, attr, None)
        if raw:
            Path(raw).mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    return AppState(settings=settings, store=TodoStore())


def seed_demo_data(state: AppState) -> tuple[list[User], list[Task]]:
    store = state.store
    users = [store.add_user(name, email) for name, email in DEMO_USERS]
    tasks = [
        store.add_task(title, description, category, users[idx].id)
        for title, description, category, idx in DEMO_TASKS
    ]
    logger.info("Seeded demo data: %d users, %d tasks", len(users), len(tasks))
    return users, tasks
