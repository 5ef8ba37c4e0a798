"""JSON contract for tasks and task groups (CLI --json output)."""

from typing import Any, Dict, List

from core import Task
from core.desktop.devtools.application.task_views import TaskGroup


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "done": task.done,
        "priority": task.priority.letter or None,
        "created_date": task.created_date,
        "completion_date": task.completion_date,
        "due_date": task.due_date,
        "projects": list(task.projects),
        "contexts": list(task.contexts),
        "tags": {key: task.tags[key] for key in sorted(task.tags)},
        "file": task.file_name,
        "line": task.to_line(),
    }


def group_to_dict(group: TaskGroup) -> Dict[str, Any]:
    return {
        "label": group.label,
        "count": len(group.tasks),
        "tasks": [task_to_dict(t) for t in group.tasks],
    }


def groups_to_list(groups: List[TaskGroup]) -> List[Dict[str, Any]]:
    return [group_to_dict(g) for g in groups]


__all__ = ["task_to_dict", "group_to_dict", "groups_to_list"]
