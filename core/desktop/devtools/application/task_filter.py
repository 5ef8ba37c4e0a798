"""Filter engine: task predicates and collection filtering."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from core import MalformedDateError, Priority, Task, is_iso_date


class StatusFilter(Enum):
    ALL = ""
    PENDING = "pending"
    DONE = "done"

    def next(self) -> "StatusFilter":
        order = list(StatusFilter)
        return order[(order.index(self) + 1) % len(order)]


class DateFilterMode(Enum):
    BEFORE = "before"
    ON = "on"
    AFTER = "after"
    MISSING = "missing"


@dataclass(frozen=True)
class DateFilter:
    mode: DateFilterMode
    date: Optional[date] = None

    @classmethod
    def parse(cls, raw: str) -> "DateFilter":
        """Parse `before:2024-02-01`, `on:...`, `after:...` or `missing`."""
        text = (raw or "").strip().lower()
        if text == DateFilterMode.MISSING.value:
            return cls(DateFilterMode.MISSING)
        mode_name, _, value = text.partition(":")
        try:
            mode = DateFilterMode(mode_name)
        except ValueError:
            raise ValueError(f"Invalid due filter: {raw!r}") from None
        if mode is DateFilterMode.MISSING:
            return cls(mode)
        if not is_iso_date(value):
            raise MalformedDateError(value)
        return cls(mode, date.fromisoformat(value))

    def label(self) -> str:
        if self.mode is DateFilterMode.MISSING or self.date is None:
            return f"due:{self.mode.value}"
        return f"due:{self.mode.value} {self.date.isoformat()}"


@dataclass
class FilterConfig:
    search: str = ""
    status: StatusFilter = StatusFilter.ALL
    due: Optional[DateFilter] = None
    projects: List[str] = field(default_factory=list)
    contexts: List[str] = field(default_factory=list)
    priorities: List[Priority] = field(default_factory=list)
    files: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return (
            not self.search
            and self.status is StatusFilter.ALL
            and self.due is None
            and not self.projects
            and not self.contexts
            and not self.priorities
            and not self.files
        )

    def reset(self) -> None:
        self.search = ""
        self.status = StatusFilter.ALL
        self.due = None
        self.projects = []
        self.contexts = []
        self.priorities = []
        self.files = []

    def cycle_status(self) -> StatusFilter:
        self.status = self.status.next()
        return self.status

    def summary(self) -> str:
        parts: List[str] = []
        if self.search:
            parts.append(f"search={self.search}")
        if self.status is not StatusFilter.ALL:
            parts.append(f"status={self.status.value}")
        if self.projects:
            parts.append("project=" + ",".join(self.projects))
        if self.contexts:
            parts.append("context=" + ",".join(self.contexts))
        if self.priorities:
            parts.append("priority=" + ",".join(p.letter or "-" for p in self.priorities))
        if self.due is not None:
            parts.append(self.due.label())
        if self.files:
            parts.append("file=" + ",".join(self.files))
        return " | ".join(parts)


def fuzzy_match(text: str, pattern: str) -> bool:
    """Ordered subsequence match, case-insensitive: "bgr" matches "buy groceries"."""
    if not pattern:
        return True
    remaining = iter((text or "").lower())
    return all(ch in remaining for ch in pattern.lower())


def _matches_due(task: Task, due: DateFilter) -> bool:
    value = task.due_date
    if due.mode is DateFilterMode.MISSING:
        return not value
    if not value or not is_iso_date(value) or due.date is None:
        return False
    task_date = date.fromisoformat(value)
    if due.mode is DateFilterMode.BEFORE:
        return task_date < due.date
    if due.mode is DateFilterMode.ON:
        return task_date == due.date
    return task_date > due.date


def _intersects(values: Iterable[str], selected: Iterable[str]) -> bool:
    wanted = set(selected)
    return any(v in wanted for v in values)


def matches(task: Task, cfg: FilterConfig) -> bool:
    """AND across categories, OR within one category's selection."""
    if cfg.search and not fuzzy_match(task.name, cfg.search):
        return False
    if cfg.status is StatusFilter.PENDING and task.done:
        return False
    if cfg.status is StatusFilter.DONE and not task.done:
        return False
    if cfg.due is not None and not _matches_due(task, cfg.due):
        return False
    if cfg.projects and not _intersects(task.projects, cfg.projects):
        return False
    if cfg.contexts and not _intersects(task.contexts, cfg.contexts):
        return False
    if cfg.priorities and task.priority not in cfg.priorities:
        return False
    if cfg.files and not any(task.origin.endswith(suffix) for suffix in cfg.files):
        return False
    return True


def apply_filters(tasks: Iterable[Task], cfg: Optional[FilterConfig]) -> List[Task]:
    if cfg is None or cfg.is_empty():
        return list(tasks)
    return [t for t in tasks if matches(t, cfg)]


__all__ = [
    "StatusFilter",
    "DateFilterMode",
    "DateFilter",
    "FilterConfig",
    "fuzzy_match",
    "matches",
    "apply_filters",
]
