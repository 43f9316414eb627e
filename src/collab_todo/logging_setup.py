# src/collab_todo/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable while the observer thread is reporting:
    - allow collab_todo logs
    - observer reports only at observer_level and above (they repeat every tick)
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    - suppress third-party noise unless ERROR+
    """

    _OBSERVER_LOGGER = "collab_todo.tasks.task_observer"

    def __init__(self, observer_level: int = logging.INFO) -> None:
        super().__init__()
        self.observer_level = observer_level

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == self._OBSERVER_LOGGER:
            return record.levelno >= self.observer_level

        if name == "collab_todo" or name.startswith("collab_todo."):
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/collab_todo",
    console_level: int = logging.INFO,
    observer_console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure logging with:
    - Console handler: filtered, at console_level; observer reports at
      observer_console_level (set WARNING to hide them)
    - File handler: everything at file_level, in <log_dir>/collab_todo.log

    Call this ONCE, very early (before first logger.info).
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "collab_todo.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter(observer_level=observer_console_level))
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
