# src/collab_todo/tasks/task_models.py

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Known task statuses.

    Notes:
    - Task.status is a plain string: unknown values are stored as-is.
    - The enum is used for defaults and statistics only.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus | None:
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True, eq=False)
class User:
    id: str
    name: str
    email: str
    created_at: float = field(default_factory=time.time)

    def set_name(self, name: str) -> None:
        self.name = name

    def set_email(self, email: str) -> None:
        self.email = email


@dataclass(slots=True, eq=False)
class Task:
    """
    A task assigned to a user by id.

    assigned_user_id is a plain reference: nothing checks that the user exists.
    Every setter refreshes updated_at.
    """

    id: str
    title: str
    description: str | None
    category: str
    assigned_user_id: str
    status: str = TaskStatus.PENDING.value
    created_at: float = 0.0
    updated_at: float = 0.0

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = time.time()
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def touch(self) -> None:
        # Wall clock may step back; updated_at must not.
        self.updated_at = max(self.updated_at, time.time())

    def set_title(self, title: str) -> None:
        self.title = title
        self.touch()

    def set_description(self, description: str | None) -> None:
        self.description = description
        self.touch()

    def set_category(self, category: str) -> None:
        self.category = category
        self.touch()

    def set_status(self, status: str) -> None:
        self.status = status
        self.touch()


@dataclass(slots=True, frozen=True)
class TaskSnapshot:
    """Point-in-time copy of the task fields the observer reports."""

    id: str
    title: str
    status: str
    assigned_user_id: str
    updated_at: float

    @classmethod
    def of(cls, task: Task) -> TaskSnapshot:
        return cls(
            id=task.id,
            title=task.title,
            status=task.status,
            assigned_user_id=task.assigned_user_id,
            updated_at=task.updated_at,
        )


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    pending: int
    in_progress: int
    completed: int
    categories: list[str]
    users: int | None = None
