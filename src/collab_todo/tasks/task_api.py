# src/collab_todo/tasks/task_api.py

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .task_models import Task, TaskStats, TaskStatus
from .task_store import TodoStore


def _stats(tasks: Iterable[Task], *, users: int | None = None) -> TaskStats:
    tasks = list(tasks)
    return TaskStats(
        total=len(tasks),
        pending=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
        in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        categories=sorted({t.category for t in tasks if t.category}),
        users=users,
    )


def get_task_statistics(store: TodoStore) -> TaskStats:
    users, tasks = store.snapshot()
    return _stats(tasks, users=len(users))


def get_user_task_statistics(store: TodoStore, user_id: str) -> TaskStats:
    return _stats(store.get_tasks_by_user(user_id))


def mark_task_completed(store: TodoStore, task_id: str) -> bool:
    return store.update_task_status(task_id, TaskStatus.COMPLETED.value)


def mark_task_pending(store: TodoStore, task_id: str) -> bool:
    return store.update_task_status(task_id, TaskStatus.PENDING.value)


def _ts(epoch: float) -> str:
    return datetime.fromtimestamp(epoch).astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_user(user) -> str:
    return f"User[id={user.id}, name={user.name}, email={user.email}]"


def format_task(task: Task) -> str:
    return (
        f"Task[id={task.id}, title={task.title}, category={task.category}, "
        f"user={task.assigned_user_id}, status={task.status}, updated={_ts(task.updated_at)}]"
    )


def format_summary(store: TodoStore) -> str:
    """Users and tasks as two text blocks, taken from one consistent snapshot."""
    users, tasks = store.snapshot()
    lines = ["--- USERS ---"]
    lines.extend(format_user(u) for u in users)
    lines.append("")
    lines.append("--- TASKS ---")
    lines.extend(format_task(t) for t in tasks)
    return "\n".join(lines)
