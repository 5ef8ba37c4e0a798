from types import SimpleNamespace

import pytest

from core.desktop.devtools.interface.cli_parser import build_parser
from core.desktop.devtools.interface.tui_themes import DEFAULT_THEME, THEMES


def _commands():
    names = ["cmd_tui", "cmd_add", "cmd_list", "cmd_done", "cmd_delete", "cmd_edit", "cmd_archive"]
    return SimpleNamespace(**{name: (lambda args, n=name: n) for name in names})


@pytest.fixture
def parser():
    return build_parser(_commands(), THEMES, DEFAULT_THEME)


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["add", "Buy", "milk"], "cmd_add"),
        (["a", "Buy", "milk"], "cmd_add"),
        (["list"], "cmd_list"),
        (["ls"], "cmd_list"),
        (["l"], "cmd_list"),
        (["done", "abcd"], "cmd_done"),
        (["do", "abcd"], "cmd_done"),
        (["d", "abcd"], "cmd_done"),
        (["delete", "abcd"], "cmd_delete"),
        (["rm", "abcd"], "cmd_delete"),
        (["del", "abcd"], "cmd_delete"),
        (["edit", "abcd", "--due", "2024-01-01"], "cmd_edit"),
        (["archive"], "cmd_archive"),
        (["tui"], "cmd_tui"),
    ],
)
def test_commands_and_aliases(parser, argv, expected):
    args = parser.parse_args(argv)
    assert args.func(args) == expected


def test_list_options(parser):
    args = parser.parse_args(["list", "-p", "work", "-p", "home", "-c", "phone", "-f", "done.txt", "--sort", "due:desc", "--group", "file", "--json"])
    assert args.project == ["work", "home"]
    assert args.context == ["phone"]
    assert args.file == ["done.txt"]
    assert args.sort == "due:desc"
    assert args.group == "file"
    assert args.json is True


def test_list_all_and_done_are_exclusive(parser):
    with pytest.raises(SystemExit):
        parser.parse_args(["list", "--all", "--done"])


def test_global_flags(parser, tmp_path):
    args = parser.parse_args(["--todo-dir", str(tmp_path), "--strict", "list"])
    assert args.todo_dir == str(tmp_path)
    assert args.strict is True


def test_add_keeps_words_and_json_flag(parser):
    args = parser.parse_args(["add", "--json", "(A)", "Call", "+family"])
    assert args.text == ["(A)", "Call", "+family"]
    assert args.json is True


def test_no_command_has_no_func(parser):
    args = parser.parse_args([])
    assert args.command is None
    assert getattr(args, "func", None) is None
