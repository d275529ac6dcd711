# src/smart_tasks/cli/render.py

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_models import Task
from ..tasks.task_stats import Dashboard, completion_chart

BAR_WIDTH = 20
SHORT_ID_LEN = 8


def format_due(task: Task) -> str:
    """Local, human-readable due date; falls back to the raw text."""
    due = task.due_at()
    if due is None:
        return task.due_date
    return due.strftime("%Y-%m-%d %H:%M")


def format_task(task: Task, position: int | None = None) -> str:
    box = "[x]" if task.completed else "[ ]"
    prefix = f"{position:>3}. " if position is not None else ""
    return (
        f"{prefix}{box} {task.title}  "
        f"({task.category} | {task.priority} | {format_due(task)})  #{task.id[:SHORT_ID_LEN]}"
    )


def format_task_list(tasks: Sequence[Task], *, search_text: str = "") -> str:
    if not tasks:
        if search_text:
            return f"No tasks match {search_text!r}."
        return "No tasks yet. Add one with /add."

    lines: list[str] = []
    if search_text:
        lines.append(f"Tasks matching {search_text!r}:")
    for i, t in enumerate(tasks, start=1):
        lines.append(format_task(t, i))
    return "\n".join(lines)


def _bar(value: int, top: int) -> str:
    if top <= 0 or value <= 0:
        return ""
    return "#" * max(1, round(value * BAR_WIDTH / top))


def format_dashboard(dashboard: Dashboard) -> str:
    lines = ["Task Dashboard", "", "Completed vs Pending:"]

    rows = completion_chart(dashboard.completion)
    top = max((n for _, n in rows), default=0)
    for label, n in rows:
        lines.append(f"  {label:<10} {n:>4} {_bar(n, top)}")

    lines.append("")
    lines.append("Tasks by Category:")
    if not dashboard.categories:
        lines.append("  (none)")
    else:
        top = max(dashboard.categories.values())
        for category, n in dashboard.categories.items():
            lines.append(f"  {category.value:<10} {n:>4} {_bar(n, top)}")

    return "\n".join(lines)
