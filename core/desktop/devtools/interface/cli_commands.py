from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from core import Task, TaskError, parse_priorities
from core.desktop.devtools.application.task_filter import DateFilter, FilterConfig
from core.desktop.devtools.application.task_manager import TaskManager
from core.desktop.devtools.application.task_views import (
    GroupConfig,
    GroupField,
    SortConfig,
    SortField,
    parse_field_spec,
)
from core.desktop.devtools.interface.cli_io import print_error, structured_error, structured_response
from core.desktop.devtools.interface.serializers import groups_to_list, task_to_dict


TaskManagerFactory = Callable[[Any], TaskManager]

SHORT_ID = 7


@dataclass
class CliDeps:
    manager_factory: TaskManagerFactory


def _wants_json(args) -> bool:
    return bool(getattr(args, "json", False))


def _fail(args, command: str, message: str) -> int:
    if _wants_json(args):
        return structured_error(command, message)
    return print_error(message)


def format_task_row(task: Task) -> List[str]:
    """`[id] x (A) name` plus an indented +project/@context line when present."""
    status = "x" if task.done else " "
    priority = f"({task.priority.letter}) " if task.priority else ""
    rows = [f"[{task.id[:SHORT_ID]}] {status} {priority}{task.name}".rstrip()]
    meta = [f"+{p}" for p in task.projects] + [f"@{c}" for c in task.contexts]
    if task.due_date:
        meta.append(f"due:{task.due_date}")
    if meta:
        rows.append("        " + " ".join(meta))
    return rows


def build_filters(args) -> FilterConfig:
    """Translate list arguments into a FilterConfig (raises ValueError on bad input)."""
    cfg = FilterConfig(
        search=getattr(args, "search", None) or "",
        projects=list(getattr(args, "project", None) or []),
        contexts=list(getattr(args, "context", None) or []),
        files=list(getattr(args, "file", None) or []),
    )
    if getattr(args, "priority", None):
        cfg.priorities = parse_priorities(args.priority)
    if getattr(args, "due", None):
        cfg.due = DateFilter.parse(args.due)
    return cfg


def build_sort(raw: Optional[str]) -> SortConfig:
    if not raw:
        return SortConfig()
    name, ascending = parse_field_spec(raw)
    return SortConfig(field=SortField.from_string(name), ascending=ascending)


def build_group(raw: Optional[str]) -> GroupConfig:
    if not raw:
        return GroupConfig()
    name, ascending = parse_field_spec(raw)
    return GroupConfig(field=GroupField.from_string(name), ascending=ascending)


def cmd_list(args, deps: CliDeps) -> int:
    try:
        filters = build_filters(args)
        sort = build_sort(getattr(args, "sort", None))
        group = build_group(getattr(args, "group", None))
    except ValueError as exc:
        return _fail(args, "list", str(exc))

    manager = deps.manager_factory(args)
    if getattr(args, "done", False):
        base = manager.list_done()
    elif getattr(args, "all", False):
        base = manager.list_tasks()
    else:
        base = manager.list_pending()
    groups = manager.view(filters, sort, group, tasks=base)
    total = sum(len(g.tasks) for g in groups)

    if _wants_json(args):
        payload = {
            "total": total,
            "filters": filters.summary(),
            "sort": sort.label(),
            "group": group.label(),
            "groups": groups_to_list(groups),
        }
        return structured_response("list", message=f"{total} task(s)", payload=payload)

    if total == 0:
        print("No tasks found.")
        return 0
    for grp in groups:
        if not grp.tasks:
            continue
        if grp.label:
            print(f"\n== {grp.label} ({len(grp.tasks)})")
        for task in grp.tasks:
            for row in format_task_row(task):
                print(row)
    print(f"\n{total} task(s)")
    return 0


def cmd_add(args, deps: CliDeps) -> int:
    raw_line = " ".join(getattr(args, "text", None) or []).strip()
    if not raw_line:
        return _fail(args, "add", 'task description required. Usage: add "Task description +project @context"')
    manager = deps.manager_factory(args)
    task = manager.add(raw_line)
    if _wants_json(args):
        return structured_response("add", message="Added", payload={"task": task_to_dict(task)})
    print(f"Added: {task.to_line()}")
    print(f"ID: {task.id}")
    return 0


def cmd_done(args, deps: CliDeps) -> int:
    manager = deps.manager_factory(args)
    try:
        task = manager.resolve(args.task_id)
    except TaskError as exc:
        return _fail(args, "done", str(exc))
    if task.done:
        message = f"Task already completed: {task.name}"
    else:
        task = manager.complete(task.id)
        message = f"Completed: {task.name}"
    if _wants_json(args):
        return structured_response("done", message=message, payload={"task": task_to_dict(task)})
    print(message)
    return 0


def cmd_delete(args, deps: CliDeps) -> int:
    manager = deps.manager_factory(args)
    try:
        task = manager.delete(args.task_id)
    except TaskError as exc:
        return _fail(args, "delete", str(exc))
    if _wants_json(args):
        return structured_response("delete", message="Deleted", payload={"task": task_to_dict(task)})
    print(f"Deleted: {task.name}")
    return 0


def cmd_archive(args, deps: CliDeps) -> int:
    manager = deps.manager_factory(args)
    moved = manager.archive()
    message = f"Archived {moved} task(s) to {manager.repo.done_file.name}"
    if _wants_json(args):
        return structured_response("archive", message=message, payload={"archived": moved})
    print(message)
    return 0


__all__ = [
    "CliDeps",
    "format_task_row",
    "build_filters",
    "build_sort",
    "build_group",
    "cmd_list",
    "cmd_add",
    "cmd_done",
    "cmd_delete",
    "cmd_archive",
]
