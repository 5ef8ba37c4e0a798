from pathlib import Path
from typing import Dict, List, Protocol

from core import Project, Task


class TaskRepository(Protocol):
    todo_file: Path
    done_file: Path

    def load(self, allow_mismatch: bool = False) -> List[Task]:
        ...

    def save(self, tasks: List[Task]) -> None:
        ...

    def append(self, raw_line: str) -> Task:
        ...

    def scan_projects(self) -> Dict[str, Project]:
        ...
