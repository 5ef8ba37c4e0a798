"""Edit command: priority, due date and project/context replacement."""

from typing import List, Optional

from core import Priority, TaskError, normalize_priority
from core.desktop.devtools.interface.cli_commands import CliDeps
from core.desktop.devtools.interface.cli_io import print_error, structured_error, structured_response
from core.desktop.devtools.interface.serializers import task_to_dict

CLEAR_VALUES = {"none", "-", ""}


def _split_names(raw: Optional[str]) -> List[str]:
    return [part.strip().lstrip("+@") for part in (raw or "").split(",") if part.strip()]


def cmd_edit(args, deps: CliDeps) -> int:
    as_json = bool(getattr(args, "json", False))

    def fail(message: str) -> int:
        return structured_error("edit", message) if as_json else print_error(message)

    manager = deps.manager_factory(args)
    try:
        task = manager.resolve(args.task_id)
    except TaskError as exc:
        return fail(str(exc))

    # Validate everything before touching the task.
    priority = None
    raw_priority = getattr(args, "priority", None)
    if raw_priority is not None:
        if raw_priority.strip().lower() in CLEAR_VALUES:
            priority = Priority.NONE
        else:
            try:
                priority = Priority.from_string(normalize_priority(raw_priority))
            except ValueError as exc:
                return fail(str(exc))

    raw_due = getattr(args, "due", None)
    if raw_due is not None:
        due = "" if raw_due.strip().lower() in CLEAR_VALUES else raw_due
        try:
            task.set_due_date(due)
        except ValueError as exc:
            return fail(str(exc))
    if priority is not None:
        task.priority = priority
    if getattr(args, "projects", None) is not None:
        task.set_projects(_split_names(args.projects))
    if getattr(args, "contexts", None) is not None:
        task.set_contexts(_split_names(args.contexts))

    manager.update(task)
    if as_json:
        return structured_response("edit", message="Updated", payload={"task": task_to_dict(task)})
    print(f"Updated: {task.to_line()}")
    return 0


__all__ = ["cmd_edit"]
