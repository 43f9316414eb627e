# src/collab_todo/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .task_models import Task, TaskSnapshot, TaskStatus, User, new_id

logger = logging.getLogger(__name__)

# Fields update_task / update_tasks may change.
_TASK_FIELDS = ("title", "description", "category", "status")


class TodoStore:
    """
    In-memory user/task registry.

    Owns two insertion-ordered lists (users, tasks). At most one entry per id.

    Thread-safety:
    - one lock guards both lists and every mutation made through the store
    - readers get list copies (or frozen TaskSnapshot copies), never the lists
    - unknown ids return None/False; nothing here raises for "not found"
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: list[User] = []
        self._tasks: list[Task] = []
        logger.info("TodoStore ready")

    # ---- low-level helpers ----

    def _find_user(self, user_id: str) -> User | None:
        for u in self._users:
            if u.id == user_id:
                return u
        return None

    def _find_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def _filter_tasks(self, pred: Callable[[Task], bool]) -> list[Task]:
        with self._lock:
            return [t for t in self._tasks if pred(t)]

    @staticmethod
    def _new_task(
        title: str,
        description: str | None,
        category: str,
        assigned_user_id: str,
        status: str | None = None,
    ) -> Task:
        # Only None means "not supplied"; any string (even "") is kept as given.
        return Task(
            id=new_id(),
            title=title,
            description=description,
            category=category,
            assigned_user_id=assigned_user_id,
            status=TaskStatus.PENDING.value if status is None else status,
        )

    @staticmethod
    def _check_fields(fields: Mapping[str, Any]) -> None:
        unknown = sorted(set(fields) - set(_TASK_FIELDS))
        if unknown:
            raise ValueError(f"unknown task fields: {', '.join(unknown)}")

    @staticmethod
    def _apply_fields(task: Task, fields: Mapping[str, Any]) -> None:
        if fields.get("title") is not None:
            task.set_title(fields["title"])
        if fields.get("description") is not None:
            task.set_description(fields["description"])
        if fields.get("category") is not None:
            task.set_category(fields["category"])
        if fields.get("status") is not None:
            task.set_status(fields["status"])

    def _remove_task(self, task_id: str) -> bool:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                del self._tasks[i]
                return True
        return False

    # ---- users ----

    def add_user(self, name: str, email: str) -> User:
        user = User(id=new_id(), name=name, email=email)
        with self._lock:
            self._users.append(user)
        logger.debug("User added id=%s name=%s", user.id, name)
        return user

    def get_all_users(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def get_user_by_id(self, user_id: str) -> User | None:
        with self._lock:
            return self._find_user(user_id)

    def get_user_by_name(self, name: str) -> User | None:
        with self._lock:
            for u in self._users:
                if u.name == name:
                    return u
            return None

    def update_user(self, user_id: str, *, name: str | None = None, email: str | None = None) -> bool:
        with self._lock:
            user = self._find_user(user_id)
            if user is None:
                return False
            if name is not None:
                user.set_name(name)
            if email is not None:
                user.set_email(email)
        logger.debug("User updated id=%s", user_id)
        return True

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    # ---- tasks ----

    def add_task(
        self,
        title: str,
        description: str | None,
        category: str,
        assigned_user_id: str,
        status: str | None = None,
    ) -> Task:
        task = self._new_task(title, description, category, assigned_user_id, status)
        with self._lock:
            self._tasks.append(task)
        logger.debug(
            "Task added id=%s user=%s status=%s",
            task.id,
            assigned_user_id,
            task.status,
        )
        return task

    def add_tasks(self, items: Iterable[Mapping[str, Any]]) -> list[Task]:
        """
        Create several tasks at once.

        Each item carries add_task's arguments by name. All tasks are built
        first and appended under one lock acquisition, so a reader sees
        either none or all of them.
        """
        tasks = [self._new_task(**item) for item in items]
        with self._lock:
            self._tasks.extend(tasks)
        logger.debug("Tasks added count=%d", len(tasks))
        return tasks

    def get_all_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def get_task_by_id(self, task_id: str) -> Task | None:
        with self._lock:
            return self._find_task(task_id)

    def get_tasks_by_user(self, user_id: str) -> list[Task]:
        return self._filter_tasks(lambda t: t.assigned_user_id == user_id)

    def list_tasks_by_category(self, category: str) -> list[Task]:
        return self._filter_tasks(lambda t: t.category == category)

    def list_tasks_by_status(self, status: str) -> list[Task]:
        return self._filter_tasks(lambda t: t.status == status)

    def list_tasks_by_date_range(self, start: float, end: float) -> list[Task]:
        """Tasks with start <= created_at <= end (epoch seconds)."""
        return self._filter_tasks(lambda t: start <= t.created_at <= end)

    def search_tasks(self, query: str) -> list[Task]:
        """Case-insensitive substring match over title, description and category."""
        needle = (query or "").lower()

        def match(t: Task) -> bool:
            return (
                needle in (t.title or "").lower()
                or needle in (t.description or "").lower()
                or needle in (t.category or "").lower()
            )

        return self._filter_tasks(match)

    def update_task_status(self, task_id: str, new_status: str) -> bool:
        with self._lock:
            task = self._find_task(task_id)
            if task is None:
                return False
            task.set_status(new_status)
        logger.debug("Task %s -> %s", task_id, new_status)
        return True

    def toggle_task_status(self, task_id: str) -> str | None:
        """
        pending -> completed, anything else -> pending.

        Returns the new status, or None if the task does not exist.
        """
        with self._lock:
            task = self._find_task(task_id)
            if task is None:
                return None
            if task.status == TaskStatus.PENDING:
                task.set_status(TaskStatus.COMPLETED.value)
            else:
                task.set_status(TaskStatus.PENDING.value)
            new_status = task.status
        logger.debug("Task %s toggled -> %s", task_id, new_status)
        return new_status

    def update_task(
        self,
        task_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ) -> bool:
        fields = {"title": title, "description": description, "category": category, "status": status}
        with self._lock:
            task = self._find_task(task_id)
            if task is None:
                return False
            self._apply_fields(task, fields)
        logger.debug("Task updated id=%s", task_id)
        return True

    def update_tasks(self, updates: Iterable[tuple[str, Mapping[str, Any]]]) -> list[bool]:
        """
        Apply several (task_id, fields) updates under one lock acquisition.

        Returns one flag per update (False for an unknown id). Unknown field
        names raise ValueError before anything is changed.
        """
        updates = list(updates)
        for _, fields in updates:
            self._check_fields(fields)

        with self._lock:
            results: list[bool] = []
            for task_id, fields in updates:
                task = self._find_task(task_id)
                if task is not None:
                    self._apply_fields(task, fields)
                results.append(task is not None)
        logger.debug("Tasks updated %d/%d", sum(results), len(results))
        return results

    def delete_task(self, task_id: str) -> bool:
        with self._lock:
            removed = self._remove_task(task_id)
        if removed:
            logger.debug("Task deleted id=%s", task_id)
        return removed

    def delete_tasks(self, task_ids: Iterable[str]) -> list[bool]:
        """Delete several tasks under one lock acquisition; one flag per id."""
        task_ids = list(task_ids)
        with self._lock:
            results = [self._remove_task(task_id) for task_id in task_ids]
        logger.debug("Tasks deleted %d/%d", sum(results), len(results))
        return results

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    # ---- reporting ----

    def snapshot_tasks(self) -> list[TaskSnapshot]:
        with self._lock:
            return [TaskSnapshot.of(t) for t in self._tasks]

    def snapshot(self) -> tuple[list[User], list[Task]]:
        """Both collections, copied under a single lock acquisition."""
        with self._lock:
            return list(self._users), list(self._tasks)
