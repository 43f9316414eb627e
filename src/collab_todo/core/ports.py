# src/collab_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task observer.

The observer depends on these Protocols instead of TodoStore, so tests can
swap in fakes (e.g. a reader that counts calls).
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import TaskSnapshot


class TaskReader(Protocol):
    """Read side used by the background observer."""

    def snapshot_tasks(self) -> list[TaskSnapshot]: ...


class TaskReporter(Protocol):
    """Receives one batch of TaskSnapshot per observer tick."""

    def __call__(self, snapshots: list[TaskSnapshot]) -> None: ...

