"""Application-level task service shared by the CLI and the TUI."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, List, Optional

from application.ports import TaskRepository
from core import AmbiguousIDError, NotFoundError, Project, Task
from core.desktop.devtools.application.task_filter import FilterConfig, apply_filters
from core.desktop.devtools.application.task_views import (
    GroupConfig,
    SortConfig,
    TaskGroup,
    apply_groups,
    apply_sort,
)

MIN_PARTIAL_ID = 4

logger = logging.getLogger("plaintasks.manager")


def resolve_task_id(tasks: List[Task], task_id: str) -> Task:
    """Exact id, or a unique prefix of at least MIN_PARTIAL_ID characters."""
    needle = (task_id or "").strip()
    if not needle:
        raise NotFoundError(task_id)
    exact = [t for t in tasks if t.id == needle]
    if exact:
        return exact[0]
    if len(needle) < MIN_PARTIAL_ID:
        raise NotFoundError(needle)
    found = [t for t in tasks if t.id.startswith(needle)]
    if not found:
        raise NotFoundError(needle)
    if len(found) > 1:
        raise AmbiguousIDError(needle, [t.id for t in found])
    return found[0]


class TaskManager:
    """In-memory task collection backed by a repository.

    Every mutation writes the whole collection back and reloads it, so ids
    always reflect the current line positions on disk.
    """

    def __init__(
        self,
        repository: TaskRepository,
        allow_mismatch: bool = True,
        today: Optional[Callable[[], date]] = None,
    ):
        self.repo = repository
        self.allow_mismatch = allow_mismatch
        self._today = today or date.today
        self.tasks: List[Task] = []
        self._projects: Dict[str, Project] = {}
        self.reload()

    def reload(self) -> None:
        self.tasks = self.repo.load(allow_mismatch=self.allow_mismatch)
        projects = self.repo.scan_projects()
        for task in self.tasks:
            for name in task.projects:
                projects.setdefault(name, Project(name=name))
        self._projects = projects

    def _persist(self, focus: Optional[Task] = None) -> Optional[Task]:
        """Write everything back and reload.

        When `focus` is given, returns its reloaded counterpart so callers
        get the id the task has at its new line position.
        """
        if focus is None:
            self.repo.save(self.tasks)
            self.reload()
            return None
        line, origin = focus.to_line(), focus.origin
        twins = [t for t in self.tasks if t.origin == origin and t.to_line() == line]
        rank = next((i for i, t in enumerate(twins) if t is focus), 0)
        self.repo.save(self.tasks)
        self.reload()
        reloaded = [t for t in self.tasks if t.origin == origin and t.to_line() == line]
        return reloaded[rank] if rank < len(reloaded) else focus

    # -------------------- queries --------------------
    def list_tasks(self) -> List[Task]:
        return list(self.tasks)

    def list_pending(self) -> List[Task]:
        return [t for t in self.tasks if not t.done]

    def list_done(self) -> List[Task]:
        return [t for t in self.tasks if t.done]

    def list_by_project(self, project: str) -> List[Task]:
        return [t for t in self.tasks if t.has_project(project)]

    def list_by_context(self, context: str) -> List[Task]:
        return [t for t in self.tasks if t.has_context(context)]

    def projects(self) -> Dict[str, Project]:
        return dict(self._projects)

    def task_counts(self, project: str) -> tuple:
        """(pending, done) counts for a project."""
        tasks = self.list_by_project(project)
        done = sum(1 for t in tasks if t.done)
        return len(tasks) - done, done

    def get(self, task_id: str) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def resolve(self, task_id: str) -> Task:
        return resolve_task_id(self.tasks, task_id)

    def view(
        self,
        filters: Optional[FilterConfig] = None,
        sort: Optional[SortConfig] = None,
        group: Optional[GroupConfig] = None,
        tasks: Optional[List[Task]] = None,
    ) -> List[TaskGroup]:
        """Filter -> sort -> group pipeline over the collection."""
        items = apply_filters(self.tasks if tasks is None else tasks, filters)
        if sort is not None and sort.is_active():
            items = apply_sort(items, sort.field, sort.ascending)
        if group is None:
            group = GroupConfig()
        return apply_groups(items, group.field, group.ascending)

    # -------------------- mutations --------------------
    def add(self, raw_line: str) -> Task:
        task = self.repo.append(raw_line)
        self.reload()
        return task

    def update(self, task: Task) -> Task:
        logger.debug("update task %s", task.id)
        for idx, existing in enumerate(self.tasks):
            if existing.id == task.id:
                self.tasks[idx] = task
                break
        else:
            if not task.origin:
                task.origin = str(self.repo.todo_file)
            self.tasks.append(task)
        return self._persist(task)

    def complete(self, task_id: str) -> Task:
        task = self.resolve(task_id)
        task.mark_done(self._today())
        task.origin = str(self.repo.done_file)
        return self._persist(task)

    def reopen(self, task_id: str) -> Task:
        task = self.resolve(task_id)
        task.mark_pending()
        task.origin = str(self.repo.todo_file)
        return self._persist(task)

    def delete(self, task_id: str) -> Task:
        task = self.resolve(task_id)
        self.tasks = [t for t in self.tasks if t.id != task.id]
        self._persist()
        return task

    def archive(self) -> int:
        """Move every completed task to the done file. Returns how many moved."""
        done_origin = str(self.repo.done_file)
        moved = 0
        for task in self.tasks:
            if task.done and task.origin != done_origin:
                task.origin = done_origin
                moved += 1
        self._persist()
        logger.info("archived %d tasks", moved)
        return moved


__all__ = ["TaskManager", "resolve_task_id", "MIN_PARTIAL_ID"]
