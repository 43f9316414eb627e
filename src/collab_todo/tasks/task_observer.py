# src/collab_todo/tasks/task_observer.py

from __future__ import annotations

"""
Task observer.

A small polling loop that, every interval_seconds:
- takes a snapshot of all tasks from the store,
- hands it to a reporter (default: log each task's title and status).

Two flavours:
- TaskObserver: background thread, for synchronous callers (CLI, demo driver)
- run_task_observer: coroutine, for callers already inside an event loop

Both wait on an event with a timeout, so a stop request wakes the loop
immediately instead of waiting out the interval.
"""

import asyncio
import logging
import threading
from enum import Enum
from types import TracebackType

from ..core.ports import TaskReader, TaskReporter
from .task_models import TaskSnapshot

logger = logging.getLogger(__name__)

_MIN_INTERVAL_S = 0.001


class ObserverState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


def log_task_report(snapshots: list[TaskSnapshot]) -> None:
    logger.info("Checking task statuses... (%d tasks)", len(snapshots))
    for s in snapshots:
        logger.info(" - %s [%s]", s.title, s.status)


def _report_once(reader: TaskReader, reporter: TaskReporter) -> bool:
    try:
        reporter(reader.snapshot_tasks())
        return True
    except Exception:
        logger.exception("Task report failed")
        return False


class TaskObserver:
    """
    Background thread that periodically reports task state.

    Lifecycle: IDLE -> RUNNING -> STOPPED. A stopped observer cannot be
    restarted; build a new one instead.
    """

    def __init__(
        self,
        reader: TaskReader,
        reporter: TaskReporter | None = None,
        *,
        interval_seconds: float = 3.0,
        stop_timeout_seconds: float = 5.0,
        name: str = "task-observer",
    ) -> None:
        self._reader = reader
        self._reporter: TaskReporter = reporter or log_task_report
        self._interval_s = max(_MIN_INTERVAL_S, float(interval_seconds))
        self._stop_timeout_s = max(0.0, float(stop_timeout_seconds))
        self._name = name

        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()
        # Held for the whole of a report; the stop flag is re-checked under it.
        self._report_lock = threading.Lock()
        self._state = ObserverState.IDLE
        self._thread: threading.Thread | None = None

        self.reports = 0

    @property
    def state(self) -> ObserverState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is ObserverState.RUNNING

    def start(self) -> None:
        with self._state_lock:
            if self._state is not ObserverState.IDLE:
                raise RuntimeError(f"TaskObserver is {self._state.value}; create a new one to observe again")
            self._state = ObserverState.RUNNING
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()
        logger.info("Task observer started (interval=%.2fs).", self._interval_s)

    def stop(self) -> bool:
        """
        Signal the loop to exit and wait (bounded) for the thread.

        Idempotent. Returns True when the loop has exited (or never ran).
        Returns False if a report was still running after stop_timeout_seconds;
        that report finishes on its own, but no new one starts once this returns.
        """
        with self._state_lock:
            already_stopped = self._state is ObserverState.STOPPED
            self._state = ObserverState.STOPPED
            thread = self._thread

        self._stop_event.set()

        if thread is None:
            return True
        if thread is threading.current_thread():
            # Called from inside a report: the loop exits once the report returns.
            return True

        thread.join(timeout=self._stop_timeout_s)
        alive = thread.is_alive()
        if alive:
            logger.warning(
                "Task observer did not exit within %.1fs; it will exit after the current report.",
                self._stop_timeout_s,
            )
        elif not already_stopped:
            logger.info("Task observer stopped after %d reports.", self.reports)
        return not alive

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def _run(self) -> None:
        # wait() returns True as soon as stop() sets the event.
        while not self._stop_event.wait(self._interval_s):
            with self._report_lock:
                if self._stop_event.is_set():
                    break
                if _report_once(self._reader, self._reporter):
                    self.reports += 1
        logger.debug("Task observer loop exited.")

    def __enter__(self) -> TaskObserver:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


async def run_task_observer(
        reader: TaskReader,
        reporter: TaskReporter | None = None,
        *,
        stop_event: asyncio.Event,
        interval_seconds: float = 3.0,
) -> int:
    """
    Coroutine flavour of TaskObserver.

    Every interval_seconds report a task snapshot, until stop_event is set.
    Setting stop_event wakes the wait immediately and the coroutine returns
    the number of reports made. Cancelling the task also stops it
    (CancelledError propagates as usual).
    """
    report = reporter or log_task_report
    sleep_s = max(_MIN_INTERVAL_S, float(interval_seconds))
    reports = 0

    try:
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=sleep_s)
                break
            except TimeoutError:
                pass

            if _report_once(reader, report):
                reports += 1
    except asyncio.CancelledError:
        logger.info("Task observer cancelled after %d reports.", reports)
        raise

    logger.info("Task observer stopped after %d reports.", reports)
    return reports
