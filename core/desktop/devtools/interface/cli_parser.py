"""CLI parser construction for the plaintasks CLI/TUI."""

import argparse
from typing import Any, Mapping


EPILOG = """\
Examples:
  plaintasks add "(A) Call mom +family @phone due:2024-01-25"
  plaintasks list -p work --sort due --group context
  plaintasks done 3f2a
  plaintasks                      # start the TUI
"""


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plaintasks",
        description="plaintasks: todo.txt task manager (CLI + TUI)",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--todo-dir", dest="todo_dir", help="directory holding todo.txt/done.txt (overrides TODO_DIR)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="abort when a line does not round-trip instead of loading it with a warning",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    def add_json_arg(sp):
        sp.add_argument("--json", action="store_true", help="structured JSON output")
        return sp

    sub = parser.add_subparsers(dest="command", help="Commands")

    # tui
    tui_p = sub.add_parser("tui", help="Start the TUI (default)")
    tui_p.add_argument("--theme", choices=list(themes.keys()), default=default_theme, help="color palette")
    tui_p.set_defaults(func=commands.cmd_tui)

    # add
    ap = sub.add_parser("add", aliases=["a"], help="Add a task")
    ap.add_argument("text", nargs="*", help="task line, e.g. 'Call mom +family @phone'")
    add_json_arg(ap)
    ap.set_defaults(func=commands.cmd_add)

    # list
    lp = sub.add_parser("list", aliases=["ls", "l"], help="List tasks")
    scope = lp.add_mutually_exclusive_group()
    scope.add_argument("--all", "-a", action="store_true", help="include completed tasks")
    scope.add_argument("--done", "-d", action="store_true", help="only completed tasks")
    lp.add_argument("--project", "-p", action="append", help="filter by project (repeatable)")
    lp.add_argument("--context", "-c", action="append", help="filter by context (repeatable)")
    lp.add_argument("--file", "-f", action="append", help="filter by backing file name, e.g. done.txt (repeatable)")
    lp.add_argument("--search", "-s", help="fuzzy search over task names")
    lp.add_argument("--priority", help="comma-separated priorities, e.g. A,B")
    lp.add_argument("--due", help="due filter: missing | before:DATE | on:DATE | after:DATE")
    lp.add_argument("--sort", help="sort field [:desc]: due, project, context, priority")
    lp.add_argument("--group", help="group field [:desc]: due, project, context, priority, file")
    add_json_arg(lp)
    lp.set_defaults(func=commands.cmd_list)

    # done
    dp = sub.add_parser("done", aliases=["do", "d"], help="Mark a task completed")
    dp.add_argument("task_id", help="task id or a unique prefix (4+ chars)")
    add_json_arg(dp)
    dp.set_defaults(func=commands.cmd_done)

    # delete
    rp = sub.add_parser("delete", aliases=["rm", "del"], help="Delete a task")
    rp.add_argument("task_id", help="task id or a unique prefix (4+ chars)")
    add_json_arg(rp)
    rp.set_defaults(func=commands.cmd_delete)

    # edit
    ep = sub.add_parser("edit", aliases=["e"], help="Edit task metadata")
    ep.add_argument("task_id", help="task id or a unique prefix (4+ chars)")
    ep.add_argument("--due", help="YYYY-MM-DD, or 'none' to clear")
    ep.add_argument("--priority", help="A-F, or 'none' to clear")
    ep.add_argument("--projects", help="comma-separated projects (replaces existing)")
    ep.add_argument("--contexts", help="comma-separated contexts (replaces existing)")
    add_json_arg(ep)
    ep.set_defaults(func=commands.cmd_edit)

    # archive
    arp = sub.add_parser("archive", help="Move completed tasks to done.txt")
    add_json_arg(arp)
    arp.set_defaults(func=commands.cmd_archive)

    sub.add_parser("help", help="Show help")

    return parser
