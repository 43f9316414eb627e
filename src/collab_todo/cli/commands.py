# src/collab_todo/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import (
    format_summary,
    format_task,
    format_user,
    get_task_statistics,
    get_user_task_statistics,
    mark_task_completed,
    mark_task_pending,
)
from ..tasks.task_models import Task, TaskStats

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("title", "description", "category")


class CommandRegistry:
    """Slash-command registry used by the console loop (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _task_lines(header: str, tasks: list[Task]) -> str:
    if not tasks:
        return f"{header}: none."
    lines = [f"{header}:"]
    for i, t in enumerate(tasks, start=1):
        lines.append(f"{i}. {format_task(t)}")
    return "\n".join(lines)


def _stats_lines(header: str, stats: TaskStats) -> str:
    lines = [
        f"{header}:",
        f"  Total: {stats.total}",
        f"  Pending: {stats.pending}",
        f"  In progress: {stats.in_progress}",
        f"  Completed: {stats.completed}",
        f"  Categories: {', '.join(stats.categories) or '-'}",
    ]
    if stats.users is not None:
        lines.append(f"  Users: {stats.users}")
    return "\n".join(lines)


def _split_fields(args: list[str]) -> list[str]:
    return [p.strip() for p in " ".join(args).split("|")]


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    current = state.store.get_user_by_id(state.current_user_id) if state.current_user_id else None
    return (
        "Status:\n"
        f"  App: {getattr(settings, 'app_name', 'collab-todo')}\n"
        f"  Observer interval: {getattr(settings, 'observer_interval_seconds', '?')}s\n"
        f"  Users: {state.store.count_users()}\n"
        f"  Tasks: {state.store.count_tasks()}\n"
        f"  Current user: {current.name if current else '-'}"
    )


def cmd_users(state: AppState, args: list[str]) -> str:
    users = state.store.get_all_users()
    if not users:
        return "No users yet. Use /adduser <name> <email>."
    lines = ["Users:"]
    for i, u in enumerate(users, start=1):
        mark = " *" if u.id == state.current_user_id else ""
        lines.append(f"{i}. {format_user(u)}{mark}")
    return "\n".join(lines)


def cmd_adduser(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /adduser <name> <email>"
    name = " ".join(args[:-1])
    user = state.store.add_user(name, args[-1])
    return f"User created: {format_user(user)}"


def cmd_use(state: AppState, args: list[str]) -> str:
    """
    /use <user_id|name> -> act as this user for /mytasks and /addtask
    """
    if not args:
        return "Usage: /use <user_id|name>"
    key = " ".join(args)
    user = state.store.get_user_by_id(key) or state.store.get_user_by_name(key)
    if user is None:
        return f"User not found: {key}"
    state.current_user_id = user.id
    return f"Now acting as {user.name} ({user.id})."


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """
    /tasks            -> all tasks
    /tasks <user_id>  -> tasks assigned to that user
    """
    if args:
        return _task_lines(f"Tasks for {args[0]}", state.store.get_tasks_by_user(args[0]))
    return _task_lines("Tasks", state.store.get_all_tasks())


def cmd_mytasks(state: AppState, args: list[str]) -> str:
    if not state.current_user_id:
        return "No current user. Use /use <user_id|name> first."
    return _task_lines("Your tasks", state.store.get_tasks_by_user(state.current_user_id))


def cmd_addtask(state: AppState, args: list[str]) -> str:
    """
    /addtask <title> | <description> | <category> [| <user_id>]

    Without a user_id the task goes to the current user.
    """
    fields = _split_fields(args)
    if len(fields) < 3 or not fields[0]:
        return "Usage: /addtask <title> | <description> | <category> [| <user_id>]"

    title, description, category = fields[0], fields[1] or None, fields[2]
    user_id = fields[3] if len(fields) > 3 and fields[3] else state.current_user_id
    if not user_id:
        return "No user given and no current user. Use /use <user_id|name> or pass | <user_id>."

    task = state.store.add_task(title, description, category, user_id)
    return f"Task created: {format_task(task)}"


def cmd_setstatus(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /setstatus <task_id> <status>"
    task_id, status = args[0], " ".join(args[1:])
    if not state.store.update_task_status(task_id, status):
        return f"Task not found: {task_id}"
    return f"Task {task_id} -> {status}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <task_id>"
    if not mark_task_completed(state.store, args[0]):
        return f"Task not found: {args[0]}"
    return f"Task {args[0]} marked completed."


def cmd_pending(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /pending <task_id>"
    if not mark_task_pending(state.store, args[0]):
        return f"Task not found: {args[0]}"
    return f"Task {args[0]} marked pending."


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /toggle <task_id>"
    status = state.store.toggle_task_status(args[0])
    if status is None:
        return f"Task not found: {args[0]}"
    return f"Task {args[0]} is now {status}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <task_id> <title|description|category> <value...>
    """
    if len(args) < 3 or args[1].lower() not in _EDITABLE_FIELDS:
        return f"Usage: /edit <task_id> <{'|'.join(_EDITABLE_FIELDS)}> <value>"
    task_id, field_name, value = args[0], args[1].lower(), " ".join(args[2:])
    if not state.store.update_task(task_id, **{field_name: value}):
        return f"Task not found: {task_id}"
    return f"Task {task_id} {field_name} updated."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <task_id>"
    if not state.store.delete_task(args[0]):
        return f"Task not found: {args[0]}"
    return f"Task {args[0]} deleted."


def cmd_search(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /search <text>"
    query = " ".join(args)
    return _task_lines(f"Tasks matching '{query}'", state.store.search_tasks(query))


def cmd_stats(state: AppState, args: list[str]) -> str:
    out = _stats_lines("Task statistics", get_task_statistics(state.store))
    if state.current_user_id:
        mine = get_user_task_statistics(state.store, state.current_user_id)
        out += "\n" + _stats_lines("Your statistics", mine)
    return out


def cmd_summary(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit is not None:
        emit("Final summary:")
    return format_summary(state.store)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show app status (counts, observer, current user).")
registry.register("users", cmd_users, help_text="List users.")
registry.register("adduser", cmd_adduser, help_text="Create a user: /adduser <name> <email>.")
registry.register("use", cmd_use, help_text="Act as a user: /use <user_id|name>.")
registry.register("tasks", cmd_tasks, help_text="List tasks: /tasks [user_id].")
registry.register("mytasks", cmd_mytasks, help_text="List tasks of the current user.")
registry.register(
    "addtask",
    cmd_addtask,
    help_text="Create a task: /addtask <title> | <description> | <category> [| <user_id>].",
)
registry.register("setstatus", cmd_setstatus, help_text="Set task status: /setstatus <task_id> <status>.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <task_id>.")
registry.register("pending", cmd_pending, help_text="Mark a task pending: /pending <task_id>.")
registry.register("toggle", cmd_toggle, help_text="Flip a task between pending and completed: /toggle <task_id>.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <task_id> <field> <value>.")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <task_id>.", aliases=["rm"])
registry.register("search", cmd_search, help_text="Search tasks by title/description/category.")
registry.register("stats", cmd_stats, help_text="Show task statistics.")
registry.register("summary", cmd_summary, help_text="Show all users and tasks.")
