"""Rendering helpers for TaskBrowserTUI to keep the class slim."""
from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText
from wcwidth import wcwidth

from core import Priority, Task
from core.desktop.devtools.application.task_views import TaskGroup

from .tui_modes import Picker

Fragment = Tuple[str, str]

ELLIPSIS = "…"


def display_width(text: str) -> int:
    """Terminal cell width; non-printable characters count as zero."""
    return sum(max(wcwidth(ch), 0) for ch in text)


def truncate_to_width(text: str, width: int) -> str:
    """Cut `text` so it fits `width` cells, ending with an ellipsis when cut."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    out: List[str] = []
    used = 0
    for ch in text:
        w = max(wcwidth(ch), 0)
        if used + w > width - 1:
            break
        out.append(ch)
        used += w
    return "".join(out) + ELLIPSIS


def _merge_style(selected_style: Optional[str], fragment_style: str) -> str:
    if not selected_style:
        return fragment_style
    return f"{selected_style} {fragment_style}".strip()


def priority_style(priority: Priority) -> str:
    if priority in (Priority.A, Priority.B):
        return "class:priority.high"
    if priority in (Priority.C, Priority.D):
        return "class:priority.mid"
    return "class:priority.low"


def _meta_fragments(task: Task) -> List[Fragment]:
    frags: List[Fragment] = []
    for name in task.projects:
        frags.append(("class:meta.project", f" +{name}"))
    for name in task.contexts:
        frags.append(("class:meta.context", f" @{name}"))
    if task.due_date:
        frags.append(("class:meta.due", f" due:{task.due_date}"))
    return frags


def render_task_line(task: Task, width: int, *, selected: bool = False) -> List[Fragment]:
    """One task row: checkbox, priority, name, then project/context/due metadata.

    The name is truncated so the whole row fits `width` cells; metadata is
    dropped before the name when the terminal is very narrow.
    """
    sel = "class:selected" if selected else None
    pointer = "> " if selected else "  "
    box = "[x] " if task.done else "[ ] "
    prio = f"({task.priority.letter}) " if task.priority else ""

    meta = _meta_fragments(task)
    meta_width = sum(display_width(text) for _, text in meta)
    fixed = display_width(pointer) + display_width(box) + display_width(prio)
    name_room = width - fixed - meta_width
    if name_room < 8:
        meta = []
        name_room = width - fixed
    name = truncate_to_width(task.name, name_room)

    name_style = "class:text.done" if task.done else "class:text"
    frags: List[Fragment] = [
        (_merge_style(sel, "class:text.dim"), pointer),
        (_merge_style(sel, "class:icon.check" if task.done else "class:text.dim"), box),
    ]
    if prio:
        frags.append((_merge_style(sel, priority_style(task.priority)), prio))
    frags.append((_merge_style(sel, name_style), name))
    for style, text in meta:
        frags.append((_merge_style(sel, style), text))
    used = sum(display_width(text) for _, text in frags)
    if selected and used < width:
        frags.append((sel or "", " " * (width - used)))
    return frags


def render_groups(groups: List[TaskGroup], cursor: int, width: int) -> FormattedText:
    """Group headers followed by task rows; `cursor` indexes the flattened task rows."""
    fragments: List[Fragment] = []
    row = 0
    for group in groups:
        if not group.tasks:
            continue
        if group.label:
            header = truncate_to_width(f"── {group.label} ({len(group.tasks)})", width)
            fragments.append(("class:header", header))
            fragments.append(("", "\n"))
        for task in group.tasks:
            fragments.extend(render_task_line(task, width, selected=row == cursor))
            fragments.append(("", "\n"))
            row += 1
    if row == 0:
        fragments.append(("class:text.dim", "  No tasks found."))
    return FormattedText(fragments)


def render_picker(picker: Picker, width: int) -> FormattedText:
    """Picker overlay: title, query line, then `[x] item` rows."""
    fragments: List[Fragment] = [
        ("class:header", truncate_to_width(picker.title, width)),
        ("", "\n"),
        ("class:text.dim", truncate_to_width(f"filter: {picker.query}", width)),
        ("", "\n\n"),
    ]
    visible = picker.visible
    if not visible:
        fragments.append(("class:text.dim", "  No matches."))
        return FormattedText(fragments)
    current = picker.current()
    for item in visible:
        selected = item == current
        pointer = "> " if selected else "  "
        box = "[x] " if item in picker.selected else "[ ] "
        style = "class:selected" if selected else "class:text"
        fragments.append((style, truncate_to_width(f"{pointer}{box}{item}", width)))
        fragments.append(("", "\n"))
    return FormattedText(fragments)


def render_status(filter_summary: str, sort_label: str, group_label: str, count: int, width: int) -> FormattedText:
    parts = [f" {count} task(s)"]
    if filter_summary:
        parts.append(f"filter: {filter_summary}")
    if sort_label:
        parts.append(f"sort: {sort_label}")
    if group_label:
        parts.append(f"group: {group_label}")
    text = truncate_to_width(" | ".join(parts), width)
    return FormattedText([("class:status", text.ljust(max(width, 0)))])


__all__ = [
    "display_width",
    "truncate_to_width",
    "priority_style",
    "render_task_line",
    "render_groups",
    "render_status",
    "render_picker",
]
