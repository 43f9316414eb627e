# src/collab_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TodoStore


@dataclass
class AppState:
    # Settings object (config.Settings or a test SimpleNamespace).
    settings: object

    store: TodoStore

    # User the console acts as (/use <name>); None until chosen.
    current_user_id: str | None = None
