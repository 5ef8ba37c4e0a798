#!/usr/bin/env python3
"""
plaintasks: todo.txt task manager (CLI/TUI).

Tasks live in todo.txt / done.txt under the todo directory.

This is a thin facade that delegates to specialized modules.
"""

import argparse
import logging
import sys
from importlib.metadata import version as pkg_version, PackageNotFoundError
from typing import List, Optional

from config import ConfigError
from core import MismatchError
from core.desktop.devtools.interface.cli_parser import build_parser as build_cli_parser

from .cli_commands_core import (
    cmd_list,
    cmd_add,
    cmd_done,
    cmd_delete,
    cmd_archive,
    cmd_edit,
)
from .cli_io import print_error
from .cli_runtime import CLI_DEPS, build_manager
from .tui_app import TaskBrowserTUI, cmd_tui as _cmd_tui
from .tui_themes import THEMES, DEFAULT_THEME

logger = logging.getLogger("plaintasks.cli")

__all__ = [
    # Commands
    "cmd_list",
    "cmd_add",
    "cmd_done",
    "cmd_delete",
    "cmd_archive",
    "cmd_edit",
    "cmd_tui",
    # Wiring
    "CLI_DEPS",
    "TaskBrowserTUI",
    "THEMES",
    "DEFAULT_THEME",
    "build_parser",
    "main",
]


def cmd_tui(args) -> int:
    """Start the interactive browser."""
    return _cmd_tui(args, build_manager(args))


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    return build_cli_parser(commands=sys.modules[__name__], themes=THEMES, default_theme=DEFAULT_THEME)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("plaintasks"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    if args.command == "help":
        parser.print_help()
        return 0
    handler = getattr(args, "func", None) or cmd_tui
    try:
        return handler(args)
    except MismatchError as exc:
        logger.error("load aborted: %s", exc)
        return print_error(str(exc))
    except ConfigError as exc:
        return print_error(str(exc))
    except OSError as exc:
        logger.error("I/O failure: %s", exc)
        return print_error(str(exc))


if __name__ == "__main__":
    sys.exit(main())
