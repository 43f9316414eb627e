# src/collab_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, seeds demo data, then runs the task
observer in a background thread while the main thread mutates the store:
- scripted demo (default): two status updates with pauses in between,
- console command loop (COLLAB_TODO_CONSOLE_ENABLED=true).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..config import get_settings
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.task_api import format_summary
from ..tasks.task_models import TaskStatus
from ..tasks.task_observer import TaskObserver
from .bootstrap import create_initial_state, seed_demo_data
from .console import run_console_loop

logger = logging.getLogger(__name__)

# (index into the task list, new status) applied one per demo step.
DEMO_UPDATES: tuple[tuple[int, str], ...] = (
    (0, TaskStatus.IN_PROGRESS.value),
    (1, TaskStatus.COMPLETED.value),
)


def run_demo(state: AppState, *, step_seconds: float, stop: threading.Event) -> int:
    """
    Apply DEMO_UPDATES, waiting step_seconds before each one.

    Returns the number of updates applied; stops early if `stop` is set.
    """
    applied = 0
    for idx, status in DEMO_UPDATES:
        if stop.wait(step_seconds):
            logger.info("Demo interrupted after %d updates.", applied)
            break

        tasks = state.store.get_all_tasks()
        if idx >= len(tasks):
            logger.warning("Demo update skipped: no task at index %d.", idx)
            continue

        task = tasks[idx]
        if state.store.update_task_status(task.id, status):
            applied += 1
            logger.info("Updated '%s' -> %s", task.title, status)
    return applied


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    observer_level = getattr(logging, settings.observer_log_level, logging.INFO)
    setup_logging(
        log_dir=settings.log_dir,
        console_level=console_level,
        observer_console_level=observer_level,
    )

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    if settings.seed_demo_data:
        seed_demo_data(state)

    observer = TaskObserver(
        state.store,
        interval_seconds=settings.observer_interval_seconds,
        stop_timeout_seconds=settings.observer_stop_timeout_seconds,
    )

    # Use an Event so the demo can sleep and still react to Ctrl+C promptly.
    stop_main = threading.Event()

    if not settings.console_enabled:

        def _handle_signal(signum, _frame) -> None:
            logger.info("Signal %s received, shutting down...", signum)
            stop_main.set()

        try:
            signal.signal(signal.SIGINT, _handle_signal)
            signal.signal(signal.SIGTERM, _handle_signal)
        except (ValueError, OSError):
            # Not on the main thread, or SIGTERM unsupported on this platform.
            logger.debug("Signal handlers not installed.", exc_info=True)

    observer.start()
    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            run_demo(state, step_seconds=settings.demo_step_seconds, stop=stop_main)
    finally:
        if not observer.stop():
            logger.warning("Observer still running at shutdown.")

    print("\nFinal summary:")
    print(format_summary(state.store))
    logger.info("Bye.")


if __name__ == "__main__":
    main()
