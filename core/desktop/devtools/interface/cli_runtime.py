"""Runtime wiring: settings -> logging -> repository -> manager."""

import logging
from typing import Optional

from config import Settings, load_settings
from core.desktop.devtools.application.task_manager import TaskManager
from core.desktop.devtools.interface.cli_commands import CliDeps
from infrastructure.file_repository import FileTaskRepository
from util.logging_setup import setup_logging

logger = logging.getLogger("plaintasks.cli")


def resolve_settings(args) -> Settings:
    return load_settings(todo_dir=getattr(args, "todo_dir", None))


def build_manager(args, settings: Optional[Settings] = None) -> TaskManager:
    settings = settings or resolve_settings(args)
    setup_logging(settings.todo_dir)
    logger.debug("todo=%s done=%s projects=%s", settings.todo_file, settings.done_file, settings.proj_dir)
    repo = FileTaskRepository(settings.todo_file, settings.done_file, settings.proj_dir)
    return TaskManager(repo, allow_mismatch=not getattr(args, "strict", False))


CLI_DEPS = CliDeps(manager_factory=build_manager)


__all__ = ["resolve_settings", "build_manager", "CLI_DEPS"]
