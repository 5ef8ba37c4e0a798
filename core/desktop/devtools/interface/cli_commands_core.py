#!/usr/bin/env python3
"""Core CLI commands."""

import argparse

from core.desktop.devtools.interface.cli_commands import (
    cmd_add as _cmd_add,
    cmd_archive as _cmd_archive,
    cmd_delete as _cmd_delete,
    cmd_done as _cmd_done,
    cmd_list as _cmd_list,
)
from core.desktop.devtools.interface.cli_edit import cmd_edit as _cmd_edit

from .cli_runtime import CLI_DEPS


def cmd_list(args: argparse.Namespace) -> int:
    """List tasks (delegates to cli_commands)."""
    return _cmd_list(args, CLI_DEPS)


def cmd_add(args: argparse.Namespace) -> int:
    """Append a task line (delegates to cli_commands)."""
    return _cmd_add(args, CLI_DEPS)


def cmd_done(args: argparse.Namespace) -> int:
    return _cmd_done(args, CLI_DEPS)


def cmd_delete(args: argparse.Namespace) -> int:
    return _cmd_delete(args, CLI_DEPS)


def cmd_archive(args: argparse.Namespace) -> int:
    """Move completed tasks to the done file."""
    return _cmd_archive(args, CLI_DEPS)


def cmd_edit(args: argparse.Namespace) -> int:
    """Edit task metadata (delegates to cli_edit)."""
    return _cmd_edit(args, CLI_DEPS)


__all__ = ["cmd_list", "cmd_add", "cmd_done", "cmd_delete", "cmd_archive", "cmd_edit"]
