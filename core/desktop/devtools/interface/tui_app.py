#!/usr/bin/env python3
"""Interactive task browser (prompt_toolkit full-screen application)."""

import logging
import time
from typing import List, Optional

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from core import Task, TaskError
from core.desktop.devtools.application.task_filter import FilterConfig
from core.desktop.devtools.application.task_manager import TaskManager
from core.desktop.devtools.application.task_views import (
    GroupConfig,
    SortConfig,
    TaskGroup,
    unique_contexts,
    unique_files,
    unique_projects,
)
from infrastructure.task_line_parser import check_line

from .tui_modes import Confirmation, Picker, TextPrompt
from .tui_render import render_groups, render_picker, render_status, truncate_to_width
from .tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("plaintasks.tui")

DEFAULT_WIDTH = 100

FOOTER_HINT = (
    "j/k move  / search  f status  P/C/F pick  s/S sort  g/G group  "
    "n new  e edit  D delete  x done  p priority  A archive  r reload  esc clear  q quit"
)
PICKER_HINT = "up/down move  space toggle  enter apply  esc cancel  type to filter"


class TaskBrowserTUI:
    """Filter -> sort -> group view over a TaskManager.

    State transitions live in plain methods so they can be driven without a
    terminal; `build_app()` only wires keys and layout to them.
    """

    def __init__(self, manager: TaskManager, theme: str = DEFAULT_THEME):
        self.manager = manager
        self.theme = theme
        self.filters = FilterConfig()
        self.sort = SortConfig()
        self.group = GroupConfig()
        self.cursor = 0
        self.search_mode = False
        self.picker: Optional[Picker] = None
        self.prompt: Optional[TextPrompt] = None
        self.confirmation: Optional[Confirmation] = None
        self.status_message = ""
        self.status_message_expires = 0.0
        self.groups: List[TaskGroup] = []
        self.rows: List[Task] = []
        self.style = build_style(theme)
        self.app: Optional[Application] = None
        self.refresh_view()

    # -------------------- view state --------------------
    def refresh_view(self) -> None:
        self.groups = self.manager.view(self.filters, self.sort, self.group)
        self.rows = [task for grp in self.groups for task in grp.tasks]
        self._clamp_cursor()

    def _clamp_cursor(self) -> None:
        if not self.rows:
            self.cursor = 0
        else:
            self.cursor = max(0, min(self.cursor, len(self.rows) - 1))

    def current_task(self) -> Optional[Task]:
        if not self.rows:
            return None
        return self.rows[self.cursor]

    def move_cursor(self, delta: int) -> None:
        self.cursor += delta
        self._clamp_cursor()

    def set_status_message(self, message: str, ttl: float = 4.0) -> None:
        self.status_message = message
        self.status_message_expires = time.time() + ttl

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    # -------------------- search --------------------
    def start_search(self) -> None:
        self.search_mode = True

    def search_type(self, char: str) -> None:
        self.filters.search += char
        self.refresh_view()

    def search_backspace(self) -> None:
        if self.filters.search:
            self.filters.search = self.filters.search[:-1]
            self.refresh_view()

    def finish_search(self) -> None:
        self.search_mode = False

    # -------------------- filter / sort / group --------------------
    def cycle_status_filter(self) -> None:
        self.filters.cycle_status()
        self.refresh_view()

    def cycle_sort_field(self) -> None:
        self.sort.field = self.sort.field.next()
        self.refresh_view()

    def flip_sort_direction(self) -> None:
        self.sort.ascending = not self.sort.ascending
        self.refresh_view()

    def cycle_group_field(self) -> None:
        self.group.field = self.group.field.next()
        self.refresh_view()

    def flip_group_direction(self) -> None:
        self.group.ascending = not self.group.ascending
        self.refresh_view()

    def clear_filters(self) -> None:
        """Esc: leave search input first, then drop every filter."""
        if self.search_mode:
            self.search_mode = False
            return
        self.filters.reset()
        self.refresh_view()

    # -------------------- pickers --------------------
    def _open_picker(self, title: str, items: List[str], current: List[str], apply) -> None:
        if not items:
            self.set_status_message(f"Nothing to pick: {title.lower()}")
            return
        self.picker = Picker(title=title, items=items, on_apply=apply, selected=set(current))

    def open_project_picker(self) -> None:
        def apply(chosen):
            self.filters.projects = chosen

        self._open_picker("Filter by project", unique_projects(self.manager.tasks), self.filters.projects, apply)

    def open_context_picker(self) -> None:
        def apply(chosen):
            self.filters.contexts = chosen

        self._open_picker("Filter by context", unique_contexts(self.manager.tasks), self.filters.contexts, apply)

    def open_file_picker(self) -> None:
        def apply(chosen):
            self.filters.files = chosen

        self._open_picker("Filter by file", unique_files(self.manager.tasks), self.filters.files, apply)

    # -------------------- modal input --------------------
    def in_text_entry(self) -> bool:
        return self.search_mode or self.picker is not None or self.prompt is not None

    def is_modal(self) -> bool:
        return self.in_text_entry() or self.confirmation is not None

    def type_char(self, char: str) -> None:
        if self.prompt is not None:
            self.prompt.type(char)
        elif self.picker is not None:
            self.picker.type(char)
        elif self.search_mode:
            self.search_type(char)

    def backspace(self) -> None:
        if self.prompt is not None:
            self.prompt.backspace()
        elif self.picker is not None:
            self.picker.backspace()
        elif self.search_mode:
            self.search_backspace()

    def submit(self) -> None:
        """Enter inside a modal: confirm, submit the prompt or apply the picker."""
        if self.confirmation is not None:
            confirmation, self.confirmation = self.confirmation, None
            confirmation.confirm()
        elif self.prompt is not None:
            prompt, self.prompt = self.prompt, None
            prompt.submit()
        elif self.picker is not None:
            picker, self.picker = self.picker, None
            picker.apply()
            self.cursor = 0
            self.refresh_view()
        elif self.search_mode:
            self.finish_search()

    def escape(self) -> None:
        """Esc: close the innermost modal; in the plain list it clears filters."""
        if self.confirmation is not None:
            self.confirmation = None
            self.set_status_message("Cancelled")
        elif self.prompt is not None:
            self.prompt = None
        elif self.picker is not None:
            if self.picker.query:
                self.picker.query = ""
                self.picker.cursor = 0
            else:
                self.picker = None
        else:
            self.clear_filters()

    # -------------------- mutations --------------------
    def _mutate(self, action, done_message: str):
        result = None
        try:
            result = action()
        except (TaskError, OSError) as exc:
            logger.error("%s failed: %s", done_message, exc)
            self.set_status_message(f"Error: {exc}", ttl=6)
        else:
            self.set_status_message(done_message)
        self.refresh_view()
        return result

    def toggle_done_current(self) -> None:
        task = self.current_task()
        if task is None:
            return
        if task.done:
            self._mutate(lambda: self.manager.reopen(task.id), f"Reopened: {task.name}")
        else:
            self._mutate(lambda: self.manager.complete(task.id), f"Completed: {task.name}")

    def cycle_priority_current(self) -> None:
        task = self.current_task()
        if task is None:
            return

        def action():
            task.cycle_priority()
            self.manager.update(task)

        self._mutate(action, f"Priority: {task.priority.next().letter or '-'}")

    def start_new_task(self) -> None:
        self.prompt = TextPrompt(label="New task: ", on_submit=self.add_task)

    def add_task(self, text: str) -> None:
        if not text:
            return
        task = self._mutate(lambda: self.manager.add(text), f"Added: {text}")
        if task is not None:
            self.set_status_message(f"Added: {task.to_line()}")

    def edit_current(self) -> None:
        task = self.current_task()
        if task is None:
            return
        self.prompt = TextPrompt(
            label="Edit: ",
            on_submit=lambda text: self.replace_line(task, text),
            text=task.to_line(),
        )

    def replace_line(self, task: Task, text: str) -> None:
        """Swap a task for a freshly typed line; lossy lines are refused."""
        if not text:
            return
        result = check_line(text, task.id, task.origin)
        if not result.ok:
            self.set_status_message(f"Error: line would be saved as: {result.canonical}", ttl=6)
            return
        self._mutate(lambda: self.manager.update(result.task), f"Updated: {result.task.name}")

    def confirm_delete_current(self) -> None:
        task = self.current_task()
        if task is None:
            return
        self.confirmation = Confirmation(
            message=f"Delete '{task.name}'? [y/enter] yes  [n/esc] no",
            on_confirm=lambda: self._mutate(lambda: self.manager.delete(task.id), f"Deleted: {task.name}"),
        )

    def archive_done(self) -> None:
        moved = self._mutate(self.manager.archive, "Archived completed tasks")
        if moved is not None:
            self.set_status_message(f"Archived {moved} task(s)")

    def reload(self) -> None:
        self._mutate(self.manager.reload, "Reloaded")

    # -------------------- rendering --------------------
    def _width(self) -> int:
        app = getattr(self, "app", None)
        if app is None:
            return DEFAULT_WIDTH
        try:
            return app.output.get_size().columns
        except OSError:
            return DEFAULT_WIDTH

    def get_status_text(self) -> FormattedText:
        width = self._width()
        if self.status_message and time.time() < self.status_message_expires:
            style = "class:status.error" if self.status_message.startswith("Error") else "class:status"
            text = truncate_to_width(f" {self.status_message}", width)
            return FormattedText([(style, text.ljust(width))])
        return render_status(
            self.filters.summary(),
            self.sort.label(),
            self.group.label(),
            len(self.rows),
            width,
        )

    def get_task_list_text(self) -> FormattedText:
        if self.picker is not None:
            return render_picker(self.picker, self._width())
        return render_groups(self.groups, self.cursor, self._width())

    def get_footer_text(self) -> FormattedText:
        width = self._width()
        if self.confirmation is not None:
            return FormattedText([("class:status.error", truncate_to_width(self.confirmation.message, width))])
        if self.prompt is not None:
            return FormattedText([("class:header", truncate_to_width(f"{self.prompt.label}{self.prompt.text}", width))])
        if self.picker is not None:
            return FormattedText([("class:footer", truncate_to_width(PICKER_HINT, width))])
        if self.search_mode:
            return FormattedText([("class:header", truncate_to_width(f"/{self.filters.search}", width))])
        return FormattedText([("class:footer", truncate_to_width(FOOTER_HINT, width))])

    # -------------------- application --------------------
    def build_app(self) -> Application:
        kb = KeyBindings()
        text_entry = Condition(self.in_text_entry)
        picking = Condition(lambda: self.picker is not None)
        confirming = Condition(lambda: self.confirmation is not None)
        modal = Condition(self.is_modal)
        browsing = ~modal

        def bind(*keys, when=browsing, eager=False):
            def decorator(handler):
                def _(event):
                    handler()
                    self.force_render()

                for key in keys:
                    kb.add(key, filter=when, eager=eager)(_)
                return handler
            return decorator

        @kb.add("q", filter=browsing)
        @kb.add("c-c")
        def _(event):
            event.app.exit()

        bind("down", "j")(lambda: self.move_cursor(1))
        bind("up", "k")(lambda: self.move_cursor(-1))
        bind("/")(self.start_search)
        bind("f")(self.cycle_status_filter)
        bind("P")(self.open_project_picker)
        bind("C")(self.open_context_picker)
        bind("F")(self.open_file_picker)
        bind("s")(self.cycle_sort_field)
        bind("S")(self.flip_sort_direction)
        bind("g")(self.cycle_group_field)
        bind("G")(self.flip_group_direction)
        bind("n")(self.start_new_task)
        bind("e", "enter")(self.edit_current)
        bind("D")(self.confirm_delete_current)
        bind("x")(self.toggle_done_current)
        bind("p")(self.cycle_priority_current)
        bind("A")(self.archive_done)
        bind("r")(self.reload)
        bind("escape", when=True, eager=True)(self.escape)
        bind("enter", when=modal, eager=True)(self.submit)
        bind("y", when=confirming, eager=True)(self.submit)
        bind("n", when=confirming, eager=True)(self.escape)
        bind("backspace", "c-h", when=text_entry, eager=True)(self.backspace)
        bind("down", when=picking, eager=True)(lambda: self.picker.move(1))
        bind("up", when=picking, eager=True)(lambda: self.picker.move(-1))
        bind(" ", when=picking, eager=True)(lambda: self.picker.toggle_current())

        @kb.add(Keys.Any, eager=True, filter=text_entry)
        def _(event):
            """Typed characters go to the active input (search, picker query or prompt)."""
            key = event.key_sequence[0].key if event.key_sequence else None
            if not isinstance(key, str) or len(key) != 1 or not key.isprintable():
                return
            self.type_char(key)
            self.force_render()

        self.status_bar = Window(content=FormattedTextControl(self.get_status_text), height=1, always_hide_cursor=True)
        self.task_list = Window(content=FormattedTextControl(self.get_task_list_text), always_hide_cursor=True, wrap_lines=False)
        self.footer = Window(content=FormattedTextControl(self.get_footer_text), height=1, always_hide_cursor=True)

        self.app = Application(
            layout=Layout(HSplit([self.status_bar, self.task_list, self.footer])),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            refresh_interval=1.0,
        )
        self.app.ttimeoutlen = 0.05
        return self.app

    def run(self):
        self.build_app().run()


def cmd_tui(args, manager: TaskManager) -> int:
    tui = TaskBrowserTUI(manager, theme=getattr(args, "theme", None) or DEFAULT_THEME)
    tui.run()
    return 0


__all__ = ["TaskBrowserTUI", "cmd_tui"]
