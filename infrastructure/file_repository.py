import hashlib
import logging
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from threading import Condition, Lock
from typing import Dict, Iterator, List, Optional

from core import Project, Task
from application.ports import TaskRepository
from infrastructure.task_line_parser import load_line, parse_line

logger = logging.getLogger("plaintasks.storage")


def hash_task_line(key: str) -> str:
    """Short stable task id (first 10 hex chars of sha1)."""
    return hashlib.sha1(key.encode("utf-8")).hexdigest()[:10]


def line_task_id(line_number: int, path: Path) -> str:
    return hash_task_line(f"{line_number}:{path}")


class ReadWriteLock:
    """Many concurrent readers or one writer; a waiting writer blocks new readers."""

    def __init__(self):
        self._cond = Condition(Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class FileTaskRepository(TaskRepository):
    """todo.txt / done.txt pair; every write rewrites both files."""

    def __init__(self, todo_file: Path, done_file: Path, project_dir: Optional[Path] = None):
        self.todo_file = Path(todo_file)
        self.done_file = Path(done_file)
        self.project_dir = Path(project_dir) if project_dir else None
        self._lock = ReadWriteLock()

    def load(self, allow_mismatch: bool = False) -> List[Task]:
        """Load pending then completed tasks.

        Every line that does not round-trip is logged as a warning. Unless
        `allow_mismatch` is set, the first such line aborts the whole load.
        """
        with self._lock.read():
            pending = self._read_file(self.todo_file, allow_mismatch)
            done = self._read_file(self.done_file, allow_mismatch)
        logger.debug("loaded %d pending and %d done tasks", len(pending), len(done))
        return pending + done

    def _read_file(self, path: Path, allow_mismatch: bool) -> List[Task]:
        if not path.exists():
            logger.debug("%s does not exist, treating as empty", path)
            return []
        tasks: List[Task] = []
        origin = str(path)
        with open(path, "r", encoding="utf-8") as fh:
            for line_number, raw in enumerate(fh, start=1):
                line = raw.rstrip("\n")
                if not line.strip():
                    continue
                task = load_line(
                    line,
                    line_task_id(line_number, path),
                    origin,
                    allow_mismatch=allow_mismatch,
                    line_number=line_number,
                )
                tasks.append(task)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """Rewrite both files from the full collection, partitioned by origin."""
        pending_lines: List[str] = []
        done_lines: List[str] = []
        done_origin = str(self.done_file)
        for task in tasks:
            if task.origin == done_origin:
                # Everything in the completed list is written as done.
                done_lines.append(task.to_line() if task.done else replace(task, done=True).to_line())
            else:
                if task.origin and task.origin != str(self.todo_file):
                    logger.debug("task %s has foreign origin %s, writing to %s", task.id, task.origin, self.todo_file)
                pending_lines.append(task.to_line())
        with self._lock.write():
            self.todo_file.parent.mkdir(parents=True, exist_ok=True)
            self.done_file.parent.mkdir(parents=True, exist_ok=True)
            self.todo_file.write_text("".join(f"{line}\n" for line in pending_lines), encoding="utf-8")
            self.done_file.write_text("".join(f"{line}\n" for line in done_lines), encoding="utf-8")
        logger.info("wrote %d pending and %d done tasks", len(pending_lines), len(done_lines))

    def append(self, raw_line: str) -> Task:
        """Append one task to the pending list without rewriting it."""
        raw_line = (raw_line or "").strip()
        if not raw_line:
            raise ValueError("empty task line")
        with self._lock.write():
            self.todo_file.parent.mkdir(parents=True, exist_ok=True)
            content = self.todo_file.read_text(encoding="utf-8") if self.todo_file.exists() else ""
            prefix = "" if not content or content.endswith("\n") else "\n"
            line_number = len(content.splitlines()) + 1
            task = parse_line(raw_line, line_task_id(line_number, self.todo_file), str(self.todo_file))
            with open(self.todo_file, "a", encoding="utf-8") as fh:
                fh.write(f"{prefix}{task.to_line()}\n")
        logger.info("appended task %s to %s", task.id, self.todo_file)
        return task

    def scan_projects(self) -> Dict[str, Project]:
        """Project notes found in the projects directory; a missing directory is empty."""
        projects: Dict[str, Project] = {}
        if self.project_dir is None or not self.project_dir.is_dir():
            return projects
        for file in sorted(self.project_dir.rglob("*")):
            if not file.is_file() or not file.stem:
                continue
            rel = file.relative_to(self.project_dir).as_posix()
            projects[file.stem] = Project(name=file.stem, note_path=rel)
        return projects
