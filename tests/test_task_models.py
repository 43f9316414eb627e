# tests/test_task_models.py

from __future__ import annotations

from collab_todo.tasks import task_models
from collab_todo.tasks.task_models import Task, TaskSnapshot, TaskStatus, User


def _task(**kw) -> Task:
    base = dict(id="t1", title="T1", description="d", category="Cat", assigned_user_id="u1")
    base.update(kw)
    return Task(**base)


def test_task_defaults_to_pending_with_equal_timestamps() -> None:
    t = _task()
    assert t.status == TaskStatus.PENDING
    assert t.status == "pending"
    assert t.created_at > 0
    assert t.created_at <= t.updated_at


def test_empty_status_is_kept_as_given() -> None:
    assert _task(status="").status == ""


def test_setters_refresh_updated_at(monkeypatch) -> None:
    monkeypatch.setattr(task_models.time, "time", lambda: 1000.0)
    t = _task()
    assert t.updated_at == 1000.0

    monkeypatch.setattr(task_models.time, "time", lambda: 1005.0)
    t.set_title("new")
    assert (t.title, t.updated_at) == ("new", 1005.0)

    monkeypatch.setattr(task_models.time, "time", lambda: 1010.0)
    t.set_category("Other")
    assert t.updated_at == 1010.0

    monkeypatch.setattr(task_models.time, "time", lambda: 1020.0)
    t.set_description(None)
    assert t.description is None
    assert t.updated_at == 1020.0


def test_updated_at_never_moves_backwards(monkeypatch) -> None:
    monkeypatch.setattr(task_models.time, "time", lambda: 2000.0)
    t = _task()
    monkeypatch.setattr(task_models.time, "time", lambda: 1500.0)
    t.set_status("completed")
    assert t.status == "completed"
    assert t.updated_at == 2000.0


def test_setters_accept_anything() -> None:
    t = _task()
    t.set_status("whatever")
    t.set_title("")
    assert t.status == "whatever"
    assert t.title == ""


def test_user_setters_and_identity() -> None:
    u = User(id="u1", name="Alice", email="a@x.com")
    u.set_name("Alicia")
    u.set_email("alicia@x.com")
    assert (u.id, u.name, u.email) == ("u1", "Alicia", "alicia@x.com")
    assert u.created_at > 0
    # Entities compare by identity, not by field values.
    assert u != User(id="u1", name="Alicia", email="alicia@x.com")


def test_status_parse() -> None:
    assert TaskStatus.parse("in-progress") is TaskStatus.IN_PROGRESS
    assert TaskStatus.parse("nope") is None
    assert TaskStatus.parse(None) is None


def test_snapshot_is_a_detached_copy() -> None:
    t = _task()
    snap = TaskSnapshot.of(t)
    t.set_status("completed")
    assert snap.status == "pending"
    assert (snap.id, snap.title, snap.assigned_user_id) == ("t1", "T1", "u1")
