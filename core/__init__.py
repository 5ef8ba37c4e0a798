from .priority import Priority, normalize_priority, parse_priorities
from .project import Project
from .task import Task, DUE_TAG, is_iso_date, normalize_names, serialize
from .errors import (
    TaskError,
    MismatchError,
    NotFoundError,
    AmbiguousIDError,
    MalformedDateError,
)

__all__ = [
    "Priority",
    "normalize_priority",
    "parse_priorities",
    "Project",
    "Task",
    "DUE_TAG",
    "is_iso_date",
    "normalize_names",
    "serialize",
    # Errors
    "TaskError",
    "MismatchError",
    "NotFoundError",
    "AmbiguousIDError",
    "MalformedDateError",
]
