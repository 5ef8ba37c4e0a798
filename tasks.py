#!/usr/bin/env python3
"""plaintasks entry point: `python tasks.py [command]` or the `plaintasks` script."""

import sys

from core.desktop.devtools.interface.tasks_app import build_parser, main

__all__ = ["build_parser", "main"]

if __name__ == "__main__":
    sys.exit(main())
