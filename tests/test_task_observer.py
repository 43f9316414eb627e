# tests/test_task_observer.py

from __future__ import annotations

import asyncio
import logging
import threading
import time
import typing

import pytest

from collab_todo.core.ports import TaskReader, TaskReporter
from collab_todo.tasks.task_models import TaskSnapshot
from collab_todo.tasks.task_observer import ObserverState, TaskObserver, log_task_report, run_task_observer
from collab_todo.tasks.task_store import TodoStore

from .fakes import CountingReader, RecordingReporter


def test_observer_reports_snapshots(store: TodoStore) -> None:
    t = store.add_task("T1", "d", "Cat", "u1")
    reporter = RecordingReporter()

    obs = TaskObserver(store, reporter, interval_seconds=0.01)
    assert obs.state is ObserverState.IDLE
    obs.start()
    assert obs.is_running
    try:
        assert reporter.wait_for(2)
    finally:
        assert obs.stop() is True

    assert obs.state is ObserverState.STOPPED
    first = reporter.batches[0]
    assert [(s.id, s.title, s.status) for s in first] == [(t.id, "T1", "pending")]
    assert obs.reports >= 2


def test_stop_interrupts_long_wait(store: TodoStore) -> None:
    reader = CountingReader(store)
    obs = TaskObserver(reader, RecordingReporter(), interval_seconds=60.0)
    obs.start()

    t0 = time.monotonic()
    assert obs.stop() is True
    assert time.monotonic() - t0 < 1.0
    assert reader.calls == 0


def test_no_reads_after_stop_returns(store: TodoStore) -> None:
    reader = CountingReader(store)
    reporter = RecordingReporter()
    obs = TaskObserver(reader, reporter, interval_seconds=0.005)
    obs.start()
    assert reporter.wait_for(3)
    assert obs.stop() is True

    calls = reader.calls
    time.sleep(0.05)
    assert reader.calls == calls


def test_stop_is_idempotent_and_no_restart(store: TodoStore) -> None:
    obs = TaskObserver(store, RecordingReporter(), interval_seconds=0.01)
    obs.start()
    assert obs.stop() is True
    assert obs.stop() is True

    with pytest.raises(RuntimeError):
        obs.start()


def test_stop_before_start(store: TodoStore) -> None:
    obs = TaskObserver(store, RecordingReporter())
    assert obs.stop() is True
    assert obs.state is ObserverState.STOPPED
    with pytest.raises(RuntimeError):
        obs.start()


def test_double_start_rejected(store: TodoStore) -> None:
    obs = TaskObserver(store, RecordingReporter(), interval_seconds=0.01)
    obs.start()
    try:
        with pytest.raises(RuntimeError):
            obs.start()
    finally:
        obs.stop()


def test_reporter_failure_does_not_stop_loop(store: TodoStore, caplog) -> None:
    store.add_task("T1", "d", "Cat", "u1")
    reporter = RecordingReporter(fail_first=2)

    with caplog.at_level(logging.ERROR, logger="collab_todo"):
        with TaskObserver(store, reporter, interval_seconds=0.005) as obs:
            assert reporter.wait_for(1)
        assert obs.state is ObserverState.STOPPED

    assert any("Task report failed" in r.getMessage() for r in caplog.records)


def test_stop_from_inside_reporter(store: TodoStore) -> None:
    done = threading.Event()
    holder: dict[str, TaskObserver] = {}

    def reporter(snapshots) -> None:
        holder["obs"].stop()
        done.set()

    obs = TaskObserver(store, reporter, interval_seconds=0.005)
    holder["obs"] = obs
    obs.start()
    assert done.wait(2.0)
    obs.join(timeout=2.0)
    assert obs.state is ObserverState.STOPPED
    assert obs.reports == 1


def test_concurrent_updates_are_not_lost(store: TodoStore, caplog) -> None:
    tasks = [store.add_task(f"T{i}", "d", "Cat", f"u{i % 3}") for i in range(40)]
    reporter = RecordingReporter()
    obs = TaskObserver(store, reporter, interval_seconds=0.001, stop_timeout_seconds=2.0)

    n_workers = 8
    barrier = threading.Barrier(n_workers)

    def worker(k: int) -> None:
        barrier.wait()
        for t in tasks[k::n_workers]:
            assert store.update_task_status(t.id, "in-progress")
            store.add_task(f"extra-{k}", None, "Extra", "u0")
            assert store.update_task_status(t.id, "completed")

    with caplog.at_level(logging.ERROR, logger="collab_todo"):
        obs.start()
        threads = [threading.Thread(target=worker, args=(k,)) for k in range(n_workers)]
        for th in threads:
            th.start()
        for th in threads:
            th.join(timeout=10.0)
        assert reporter.wait_for(1)

        t0 = time.monotonic()
        assert obs.stop() is True
        assert time.monotonic() - t0 < 2.0

    assert not [r for r in caplog.records if "Task report failed" in r.getMessage()]
    assert all(t.status == "completed" for t in tasks)
    assert store.count_tasks() == len(tasks) + len(tasks)
    assert {t.status for t in store.list_tasks_by_category("Cat")} == {"completed"}


def test_log_task_report(store: TodoStore, caplog) -> None:
    store.add_task("Build Project", "d", "Dev", "u1")
    with caplog.at_level(logging.INFO, logger="collab_todo"):
        log_task_report(store.snapshot_tasks())
    messages = [r.getMessage() for r in caplog.records]
    assert "Checking task statuses... (1 tasks)" in messages
    assert " - Build Project [pending]" in messages


@pytest.mark.asyncio
async def test_async_observer_stops_on_event(store: TodoStore) -> None:
    store.add_task("T1", "d", "Cat", "u1")
    reporter = RecordingReporter()
    stop_event = asyncio.Event()

    runner = asyncio.create_task(
        run_task_observer(store, reporter, stop_event=stop_event, interval_seconds=0.01)
    )
    await asyncio.sleep(0.05)
    stop_event.set()
    reports = await asyncio.wait_for(runner, timeout=1.0)

    assert reports >= 1
    assert reports == reporter.count


@pytest.mark.asyncio
async def test_async_observer_wakes_immediately(store: TodoStore) -> None:
    reporter = RecordingReporter()
    stop_event = asyncio.Event()

    runner = asyncio.create_task(
        run_task_observer(store, reporter, stop_event=stop_event, interval_seconds=60.0)
    )
    await asyncio.sleep(0.01)
    stop_event.set()
    assert await asyncio.wait_for(runner, timeout=1.0) == 0


@pytest.mark.asyncio
async def test_async_observer_cancel_propagates(store: TodoStore) -> None:
    runner = asyncio.create_task(
        run_task_observer(store, RecordingReporter(), stop_event=asyncio.Event(), interval_seconds=0.01)
    )
    await asyncio.sleep(0.03)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner


class BlockingReader:
    """TaskReader whose snapshot call blocks until released."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.entered = threading.Event()
        self.release = threading.Event()
        self.calls = 0

    def snapshot_tasks(self):
        self.calls += 1
        self.entered.set()
        self.release.wait(5.0)
        return self.inner.snapshot_tasks()


def test_stop_times_out_on_blocked_report_without_new_reads(store: TodoStore) -> None:
    reader = BlockingReader(store)
    reporter = RecordingReporter()
    obs = TaskObserver(reader, reporter, interval_seconds=0.001, stop_timeout_seconds=0.05)
    obs.start()
    assert reader.entered.wait(2.0)

    t0 = time.monotonic()
    assert obs.stop() is False
    assert time.monotonic() - t0 < 1.0

    reader.release.set()
    obs.join(timeout=2.0)
    assert obs.state is ObserverState.STOPPED
    assert reader.calls == 1
    assert reporter.count == 1


def test_pending_tick_rechecks_stop_before_reading(store: TodoStore) -> None:
    reader = CountingReader(store)
    obs = TaskObserver(reader, RecordingReporter(), interval_seconds=0.001, stop_timeout_seconds=0.0)

    # Hold the report lock so the first tick parks between its wait and its read.
    with obs._report_lock:
        obs.start()
        time.sleep(0.05)
        assert obs.stop() is False

    obs.join(timeout=2.0)
    assert reader.calls == 0
    assert obs.reports == 0


def test_ports_are_typed_with_task_snapshots() -> None:
    ns = {"TaskSnapshot": TaskSnapshot}
    assert typing.get_type_hints(TaskReader.snapshot_tasks, localns=ns)["return"] == list[TaskSnapshot]
    assert typing.get_type_hints(TaskReporter.__call__, localns=ns)["snapshots"] == list[TaskSnapshot]
