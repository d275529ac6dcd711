# src/smart_tasks/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import DEFAULT_CATEGORY, DEFAULT_PRIORITY, Category, Priority, Task
from .render import format_dashboard, format_task, format_task_list

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

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


class TaskRefError(ValueError):
    """A task reference typed by the user does not point at exactly one task."""


def resolve_task(state: AppState, ref: str) -> Task:
    """
    Resolve a user reference to a task.

    - "3"        -> third task of the visible (searched) list
    - "#1a2b" or "1a2b" -> the only task whose id starts with that prefix

    Digits outside the visible range fall back to an id prefix lookup.
    """
    ref = ref.strip()
    if ref.isdigit():
        visible = state.visible_tasks()
        pos = int(ref)
        if 1 <= pos <= len(visible):
            return visible[pos - 1]
        if not _find_by_prefix(state, ref):
            raise TaskRefError(f"No task at position {pos} (showing {len(visible)}).")

    prefix = ref.lstrip("#").lower()
    if not prefix:
        raise TaskRefError("Empty task reference.")
    found = _find_by_prefix(state, prefix)
    if not found:
        raise TaskRefError(f"No task with id #{prefix}.")
    if len(found) > 1:
        raise TaskRefError(f"Id #{prefix} is ambiguous ({len(found)} tasks); type more characters.")
    return found[0]


def _find_by_prefix(state: AppState, prefix: str) -> list[Task]:
    prefix = prefix.lower()
    return [t for t in state.task_store.tasks if t.id.lower().startswith(prefix)]


_ADD_OPTIONS = {
    "cat": "category",
    "category": "category",
    "prio": "priority",
    "priority": "priority",
    "due": "due",
}


def parse_add_args(args: list[str]) -> tuple[str, str, str, str]:
    """
    Split /add arguments into (title, category, priority, due_date).

    Options are key=value words anywhere on the line; all other words form
    the title. A bare "HH:MM" right after due=YYYY-MM-DD is joined to it.
    """
    opts: dict[str, str] = {}
    title_words: list[str] = []

    i = 0
    while i < len(args):
        word = args[i]
        key, sep, value = word.partition("=")
        option = _ADD_OPTIONS.get(key.lower()) if sep else None
        if option is None:
            title_words.append(word)
            i += 1
            continue

        if option == "due" and "T" not in value and i + 1 < len(args) and _looks_like_time(args[i + 1]):
            value = f"{value}T{args[i + 1]}"
            i += 1
        opts[option] = value
        i += 1

    return (
        " ".join(title_words),
        opts.get("category", DEFAULT_CATEGORY.value),
        opts.get("priority", DEFAULT_PRIORITY.value),
        opts.get("due", ""),
    )


def _looks_like_time(word: str) -> bool:
    hh, sep, mm = word.partition(":")
    return bool(sep) and hh.isdigit() and mm.isdigit() and len(hh) <= 2 and len(mm) == 2


def _listing(state: AppState) -> str:
    return format_task_list(state.visible_tasks(), search_text=state.search_text)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return _listing(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title words> [cat=Work] [prio=High] due=2025-06-01T10:00
    """
    title, category, priority, due = parse_add_args(args)
    try:
        before = len(state.task_store)
        state.task_store.add(title, category, priority, due)
    except ValueError as e:
        return str(e)

    if len(state.task_store) == before:
        return (
            "Nothing added: a task needs a title and a due date.\n"
            f"Usage: /add <title> [cat={'|'.join(c.value for c in Category)}] "
            f"[prio={'|'.join(p.value for p in Priority)}] due=YYYY-MM-DDTHH:MM"
        )

    task = state.task_store.tasks[-1]
    return f"Added: {format_task(task)}\n\n{_listing(state)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <number|#id>"
    try:
        task = resolve_task(state, args[0])
    except TaskRefError as e:
        return str(e)

    state.task_store.toggle_complete(task.id)
    updated = state.task_store.get(task.id)
    status = "done" if updated is not None and updated.completed else "pending"
    return f"Marked {status}: {task.title}\n\n{_listing(state)}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /edit <number|#id> <new title>"
    try:
        task = resolve_task(state, args[0])
    except TaskRefError as e:
        return str(e)

    new_title = " ".join(args[1:])
    state.task_store.edit_title(task.id, new_title)
    return f"Renamed: {task.title} -> {new_title}\n\n{_listing(state)}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /del <number|#id>"
    try:
        task = resolve_task(state, args[0])
    except TaskRefError as e:
        return str(e)

    state.task_store.delete(task.id)
    return f"Deleted: {task.title}\n\n{_listing(state)}"


def cmd_search(state: AppState, args: list[str]) -> str:
    """
    /search <text>  -> show tasks whose title or category contains text
    /search         -> clear the search
    """
    state.search_text = " ".join(args)
    return _listing(state)


def cmd_stats(state: AppState, args: list[str]) -> str:
    return format_dashboard(state.dashboard)


def cmd_ids(state: AppState, args: list[str]) -> str:
    return (
        "Task references:\n"
        "  3        - third task of the current list (after /search)\n"
        "  #1a2b    - the only task whose id starts with 1a2b\n"
        "  12345678 - digits past the end of the list are read as an id prefix;\n"
        "             use #12345678 to always mean an id"
    )


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    backend = getattr(settings, "storage_backend", "?")
    path = getattr(settings, "storage_path", "?")
    search = state.search_text or "(none)"
    return (
        "Status:\n"
        f"  Storage: {backend} ({path})\n"
        f"  Tasks: {len(state.task_store)}\n"
        f"  Search: {search}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List tasks (respects the current search).", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <title> [cat=General] [prio=Low] due=YYYY-MM-DDTHH:MM.",
    aliases=["new"],
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <number|#id>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Rename a task: /edit <number|#id> <new title>.")
registry.register("del", cmd_delete, help_text="Delete a task: /del <number|#id>.", aliases=["delete", "rm"])
registry.register("search", cmd_search, help_text="Filter by title/category: /search <text> (empty clears).")
registry.register("stats", cmd_stats, help_text="Show the dashboard (completed/pending, per category).", aliases=["dashboard"])
registry.register("status", cmd_status, help_text="Show storage location and current search.")
registry.register(
    "ids",
    cmd_ids,
    help_text="How to refer to tasks: list number, or #id prefix (digits past the list end are read as an id).",
)
