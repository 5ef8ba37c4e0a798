import re
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from .errors import MalformedDateError
from .priority import Priority

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DUE_TAG = "due"


def is_iso_date(value: str) -> bool:
    """True for a real calendar date written as yyyy-MM-dd."""
    if not DATE_PATTERN.match(value or ""):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def normalize_names(values: Optional[Iterable[str]]) -> List[str]:
    """Deduplicate and sort project/context names (case-sensitive)."""
    return sorted({str(v).strip() for v in (values or []) if str(v).strip()})


@dataclass
class Task:
    id: str = ""
    name: str = ""
    projects: List[str] = field(default_factory=list)
    contexts: List[str] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)
    done: bool = False
    priority: Priority = Priority.NONE
    created_date: str = ""
    completion_date: str = ""
    origin: str = ""  # Backing file path (pending or completed list)

    def __post_init__(self) -> None:
        if not isinstance(self.priority, Priority):
            self.priority = Priority.from_string(self.priority)
        self.projects = normalize_names(self.projects)
        self.contexts = normalize_names(self.contexts)
        self.tags = dict(self.tags or {})
        if not self.done:
            self.completion_date = ""

    @classmethod
    def new(cls, name: str, origin: str, task_id: str = "") -> "Task":
        return cls(id=task_id, name=name.strip(), origin=origin)

    # -------------------- derived --------------------
    @property
    def due_date(self) -> str:
        return self.tags.get(DUE_TAG, "")

    @property
    def file_name(self) -> str:
        return self.origin.replace("\\", "/").rsplit("/", 1)[-1]

    # -------------------- projects / contexts --------------------
    def has_project(self, project: str) -> bool:
        return project in self.projects

    def add_project(self, project: str) -> None:
        self.projects = normalize_names([*self.projects, project])

    def remove_project(self, project: str) -> None:
        self.projects = [p for p in self.projects if p != project]

    def set_projects(self, projects: Iterable[str]) -> None:
        self.projects = normalize_names(projects)

    def has_context(self, context: str) -> bool:
        return context in self.contexts

    def add_context(self, context: str) -> None:
        self.contexts = normalize_names([*self.contexts, context])

    def remove_context(self, context: str) -> None:
        self.contexts = [c for c in self.contexts if c != context]

    def set_contexts(self, contexts: Iterable[str]) -> None:
        self.contexts = normalize_names(contexts)

    # -------------------- edits --------------------
    def cycle_priority(self) -> Priority:
        self.priority = self.priority.next()
        return self.priority

    def set_due_date(self, value: str) -> None:
        """Set or clear the `due` tag. Invalid input leaves the task untouched."""
        value = (value or "").strip()
        if not value:
            self.tags.pop(DUE_TAG, None)
            return
        if not is_iso_date(value):
            raise MalformedDateError(value)
        self.tags[DUE_TAG] = value

    def mark_done(self, today: Optional[date] = None) -> None:
        self.done = True
        self.completion_date = (today or date.today()).isoformat()

    def mark_pending(self) -> None:
        self.done = False
        self.completion_date = ""

    def toggle_done(self, today: Optional[date] = None) -> bool:
        if self.done:
            self.mark_pending()
        else:
            self.mark_done(today)
        return self.done

    # -------------------- serialization --------------------
    def to_line(self) -> str:
        """Canonical todo.txt line; empty fields are omitted."""
        parts: List[str] = []
        if self.done:
            parts.append("x")
        if self.priority:
            parts.append(f"({self.priority.letter})")
        if self.done and self.completion_date:
            parts.append(self.completion_date)
        if self.created_date:
            parts.append(self.created_date)
        if self.name:
            parts.append(self.name)
        parts.extend(f"+{p}" for p in self.projects)
        parts.extend(f"@{c}" for c in self.contexts)
        # Sorted keys keep output stable across runs.
        parts.extend(f"{key}:{self.tags[key]}" for key in sorted(self.tags))
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_line()


def serialize(task: Task) -> str:
    return task.to_line()
