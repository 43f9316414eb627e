# tests/test_task_api.py

from __future__ import annotations

from collab_todo.tasks.task_api import (
    format_summary,
    get_task_statistics,
    get_user_task_statistics,
    mark_task_completed,
    mark_task_pending,
)
from collab_todo.tasks.task_store import TodoStore


def _seed(store: TodoStore):
    alice = store.add_user("Alice", "alice@example.com")
    bob = store.add_user("Bob", "bob@example.com")
    t1 = store.add_task("Learn JavaScript", "Study async/await patterns", "Learning", alice.id)
    t2 = store.add_task("Build Project", "Create a todo app", "Development", bob.id)
    t3 = store.add_task("Review Code", "Check for bugs", "Review", bob.id)
    return alice, bob, t1, t2, t3


def test_task_statistics(store: TodoStore) -> None:
    _, bob, t1, t2, _ = _seed(store)
    store.update_task_status(t1.id, "in-progress")
    assert mark_task_completed(store, t2.id) is True

    stats = get_task_statistics(store)
    assert (stats.total, stats.pending, stats.in_progress, stats.completed) == (3, 1, 1, 1)
    assert stats.categories == ["Development", "Learning", "Review"]
    assert stats.users == 2

    bob_stats = get_user_task_statistics(store, bob.id)
    assert (bob_stats.total, bob_stats.pending, bob_stats.completed) == (2, 1, 1)
    assert bob_stats.categories == ["Development", "Review"]
    assert bob_stats.users is None


def test_unknown_statuses_only_count_in_total(store: TodoStore) -> None:
    t = store.add_task("T", "d", "Cat", "u1")
    store.update_task_status(t.id, "blocked")
    stats = get_task_statistics(store)
    assert (stats.total, stats.pending, stats.in_progress, stats.completed) == (1, 0, 0, 0)


def test_mark_helpers(store: TodoStore) -> None:
    t = store.add_task("T", "d", "Cat", "u1")
    assert mark_task_completed(store, t.id) is True
    assert t.status == "completed"
    assert mark_task_pending(store, t.id) is True
    assert t.status == "pending"
    assert mark_task_completed(store, "missing") is False
    assert mark_task_pending(store, "missing") is False


def test_format_summary(store: TodoStore) -> None:
    alice, _, t1, _, _ = _seed(store)
    text = format_summary(store)

    users_block, tasks_block = text.split("--- TASKS ---")
    assert users_block.startswith("--- USERS ---")
    assert f"User[id={alice.id}, name=Alice, email=alice@example.com]" in users_block
    assert f"Task[id={t1.id}, title=Learn JavaScript" in tasks_block
    assert tasks_block.count("Task[") == 3


def test_format_summary_empty_store(store: TodoStore) -> None:
    assert format_summary(store) == "--- USERS ---\n\n--- TASKS ---"
