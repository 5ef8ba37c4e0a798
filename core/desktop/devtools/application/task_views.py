"""Sort and group engines for task list views.

Both engines share one rule: tasks (or groups) without a value for the
selected field always come last, whichever direction is active. Only the
order inside the valued bucket flips.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from core import Priority, Task

NO_VALUE_LABEL = "(none)"


class SortField(Enum):
    NONE = ""
    DUE = "due"
    PROJECT = "project"
    CONTEXT = "context"
    PRIORITY = "priority"

    @classmethod
    def from_string(cls, value: str) -> "SortField":
        token = (value or "").strip().lower()
        for item in cls:
            if item.value == token:
                return item
        raise ValueError(f"Invalid sort field: {value!r}")

    def next(self) -> "SortField":
        order = list(SortField)
        return order[(order.index(self) + 1) % len(order)]


class GroupField(Enum):
    NONE = ""
    DUE = "due"
    PROJECT = "project"
    CONTEXT = "context"
    PRIORITY = "priority"
    FILE = "file"

    @classmethod
    def from_string(cls, value: str) -> "GroupField":
        token = (value or "").strip().lower()
        for item in cls:
            if item.value == token:
                return item
        raise ValueError(f"Invalid group field: {value!r}")

    def next(self) -> "GroupField":
        order = list(GroupField)
        return order[(order.index(self) + 1) % len(order)]


def _direction_label(field_value: str, ascending: bool) -> str:
    if not field_value:
        return ""
    return f"{field_value} {'asc' if ascending else 'desc'}"


@dataclass
class SortConfig:
    field: SortField = SortField.NONE
    ascending: bool = True

    def is_active(self) -> bool:
        return self.field is not SortField.NONE

    def reset(self) -> None:
        self.field = SortField.NONE
        self.ascending = True

    def label(self) -> str:
        return _direction_label(self.field.value, self.ascending)


@dataclass
class GroupConfig:
    field: GroupField = GroupField.NONE
    ascending: bool = True

    def is_active(self) -> bool:
        return self.field is not GroupField.NONE

    def reset(self) -> None:
        self.field = GroupField.NONE
        self.ascending = True

    def label(self) -> str:
        return _direction_label(self.field.value, self.ascending)


@dataclass
class TaskGroup:
    label: str
    tasks: List[Task] = field(default_factory=list)


def parse_field_spec(raw: str) -> Tuple[str, bool]:
    """Split CLI `field[:asc|desc]` into (field, ascending)."""
    name, _, direction = (raw or "").partition(":")
    direction = direction.strip().lower()
    if direction not in ("", "asc", "desc"):
        raise ValueError(f"Invalid direction: {direction!r}")
    return name.strip().lower(), direction != "desc"


# -------------------- sort --------------------
def _first(values: List[str]) -> str:
    # Projects/contexts are stored sorted, so the first one is the smallest.
    return values[0] if values else ""


SortKey = Callable[[Task], Optional[object]]

_SORT_KEYS: Dict[SortField, SortKey] = {
    SortField.DUE: lambda t: t.due_date or None,
    SortField.PROJECT: lambda t: _first(t.projects).lower() or None,
    SortField.CONTEXT: lambda t: _first(t.contexts).lower() or None,
    SortField.PRIORITY: lambda t: t.priority.rank if t.priority else None,
}


def apply_sort(tasks: Iterable[Task], field: SortField, ascending: bool = True) -> List[Task]:
    """Stable sort into a new list; tasks without a value stay at the end."""
    items = list(tasks)
    key = _SORT_KEYS.get(field)
    if key is None:
        return items
    keyed = [(key(t), t) for t in items]
    valued = [pair for pair in keyed if pair[0] is not None]
    missing = [t for k, t in keyed if k is None]
    valued.sort(key=lambda pair: pair[0], reverse=not ascending)
    return [t for _, t in valued] + missing


# -------------------- group --------------------
def _group_keys(task: Task, field: GroupField) -> List[str]:
    if field is GroupField.DUE:
        return [task.due_date]
    if field is GroupField.PROJECT:
        return list(task.projects) or [""]
    if field is GroupField.CONTEXT:
        return list(task.contexts) or [""]
    if field is GroupField.PRIORITY:
        return [task.priority.letter]
    if field is GroupField.FILE:
        return [task.file_name]
    return [""]


def _group_sort_key(key: str, field: GroupField):
    if field is GroupField.PRIORITY:
        return Priority.from_string(key).rank
    return key.lower()


def apply_groups(tasks: Iterable[Task], field: GroupField, ascending: bool = True) -> List[TaskGroup]:
    """Group tasks by field. Project/context fan out: a task joins one group per value."""
    items = list(tasks)
    if field is GroupField.NONE:
        return [TaskGroup(label="", tasks=items)]

    grouped: Dict[str, List[Task]] = {}
    for task in items:
        for key in _group_keys(task, field):
            grouped.setdefault(key, []).append(task)

    valued = [key for key in grouped if key]
    valued.sort(key=lambda k: _group_sort_key(k, field), reverse=not ascending)
    result = [TaskGroup(label=key, tasks=grouped[key]) for key in valued]
    if "" in grouped:
        result.append(TaskGroup(label=NO_VALUE_LABEL, tasks=grouped[""]))
    return result


# -------------------- picker helpers --------------------
def unique_projects(tasks: Iterable[Task]) -> List[str]:
    return sorted({p for t in tasks for p in t.projects})


def unique_contexts(tasks: Iterable[Task]) -> List[str]:
    return sorted({c for t in tasks for c in t.contexts})


def unique_files(tasks: Iterable[Task]) -> List[str]:
    return sorted({t.file_name for t in tasks if t.file_name})


__all__ = [
    "NO_VALUE_LABEL",
    "SortField",
    "GroupField",
    "SortConfig",
    "GroupConfig",
    "TaskGroup",
    "parse_field_spec",
    "apply_sort",
    "apply_groups",
    "unique_projects",
    "unique_contexts",
    "unique_files",
]
