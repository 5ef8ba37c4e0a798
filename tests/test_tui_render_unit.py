from core import Priority, Task
from core.desktop.devtools.application.task_views import TaskGroup
from core.desktop.devtools.interface.tui_modes import Picker
from core.desktop.devtools.interface.tui_render import (
    display_width,
    priority_style,
    render_groups,
    render_picker,
    render_status,
    render_task_line,
    truncate_to_width,
)


def _text(fragments) -> str:
    return "".join(text for _, text in fragments)


def test_display_width_counts_wide_chars():
    assert display_width("abc") == 3
    assert display_width("日本") == 4


def test_truncate_to_width():
    assert truncate_to_width("short", 10) == "short"
    assert truncate_to_width("abcdefghij", 5) == "abcd…"
    assert truncate_to_width("日本語テキスト", 5) == "日本…"
    assert truncate_to_width("anything", 0) == ""


def test_render_task_line_contents():
    task = Task(id="1", name="Plan trip", priority=Priority.A, projects=["vacation"], contexts=["home"], tags={"due": "2024-02-01"})
    text = _text(render_task_line(task, 80))
    assert text == "  [ ] (A) Plan trip +vacation @home due:2024-02-01"


def test_render_done_task_uses_done_style():
    fragments = render_task_line(Task(id="1", name="Old", done=True), 40)
    assert _text(fragments).startswith("  [x] Old")
    assert any(style == "class:text.done" for style, _ in fragments)


def test_selected_line_is_padded_and_styled():
    fragments = render_task_line(Task(id="1", name="Pick me"), 30, selected=True)
    assert _text(fragments).startswith("> ")
    assert display_width(_text(fragments)) == 30
    assert all("class:selected" in style for style, _ in fragments)


def test_narrow_width_drops_metadata_first():
    task = Task(id="1", name="A rather long task name", projects=["someproject"], contexts=["somewhere"])
    text = _text(render_task_line(task, 24))
    assert "+someproject" not in text
    assert display_width(text) <= 24


def test_priority_styles():
    assert priority_style(Priority.A) == "class:priority.high"
    assert priority_style(Priority.D) == "class:priority.mid"
    assert priority_style(Priority.F) == "class:priority.low"


def test_render_groups_headers_and_cursor():
    groups = [
        TaskGroup(label="work", tasks=[Task(id="1", name="One"), Task(id="2", name="Two")]),
        TaskGroup(label="(none)", tasks=[Task(id="3", name="Three")]),
    ]
    text = _text(render_groups(groups, cursor=2, width=40))
    lines = text.splitlines()
    assert lines[0] == "── work (2)"
    assert lines[1].startswith("  [ ] One")
    assert lines[3] == "── (none) (1)"
    assert lines[4].startswith("> [ ] Three")


def test_render_groups_unlabeled_and_empty():
    text = _text(render_groups([TaskGroup(label="", tasks=[Task(id="1", name="Solo")])], 0, 40))
    assert "──" not in text
    assert "Solo" in text
    assert "No tasks found." in _text(render_groups([TaskGroup(label="")], 0, 40))


def test_render_status():
    text = _text(render_status("status=pending", "due asc", "", 3, 80))
    assert text.startswith(" 3 task(s) | filter: status=pending | sort: due asc")
    assert "group:" not in text


def test_render_picker_marks_cursor_and_selection():
    picker = Picker(title="Filter by project", items=["home", "work"], on_apply=lambda chosen: None, selected={"work"})
    picker.move(1)
    lines = _text(render_picker(picker, 40)).splitlines()
    assert lines[0] == "Filter by project"
    assert lines[1] == "filter: "
    assert lines[3] == "  [ ] home"
    assert lines[4] == "> [x] work"


def test_render_picker_without_matches():
    picker = Picker(title="Filter by file", items=["todo.txt"], on_apply=lambda chosen: None, query="zzz")
    assert "No matches." in _text(render_picker(picker, 40))
