from typing import List, Optional


class TaskError(Exception):
    """Base class for task list errors surfaced to the user."""


class MismatchError(TaskError):
    """A line does not survive parse -> serialize unchanged."""

    def __init__(self, original: str, canonical: str, origin: str = "", line_number: Optional[int] = None):
        self.original = original
        self.canonical = canonical
        self.origin = origin
        self.line_number = line_number
        where = origin or "<input>"
        if line_number is not None:
            where = f"{where}:{line_number}"
        super().__init__(f"malformed task at {where}\nparsed: {canonical}\noriginal: {original}")


class NotFoundError(TaskError):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"no task found with ID: {task_id}")


class AmbiguousIDError(TaskError):
    def __init__(self, task_id: str, matches: List[str]):
        self.task_id = task_id
        self.matches = list(matches)
        super().__init__(f"multiple tasks match ID '{task_id}', please be more specific")


class MalformedDateError(TaskError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date '{value}'. Use YYYY-MM-DD.")
