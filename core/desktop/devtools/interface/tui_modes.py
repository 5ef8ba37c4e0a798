"""Modal state for the task browser: list picker, text prompt, confirmation.

These hold no prompt_toolkit objects; the browser routes keys to them and
renders them through tui_render.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Set


@dataclass
class Picker:
    """Multi-select list with a case-insensitive substring query."""

    title: str
    items: List[str]
    on_apply: Callable[[List[str]], None]
    selected: Set[str] = field(default_factory=set)
    query: str = ""
    cursor: int = 0

    @property
    def visible(self) -> List[str]:
        if not self.query:
            return list(self.items)
        needle = self.query.lower()
        return [item for item in self.items if needle in item.lower()]

    def current(self) -> str:
        visible = self.visible
        if not visible:
            return ""
        return visible[min(self.cursor, len(visible) - 1)]

    def move(self, delta: int) -> None:
        last = max(len(self.visible) - 1, 0)
        self.cursor = max(0, min(self.cursor + delta, last))

    def toggle_current(self) -> None:
        item = self.current()
        if not item:
            return
        if item in self.selected:
            self.selected.discard(item)
        else:
            self.selected.add(item)

    def type(self, char: str) -> None:
        self.query += char
        self.cursor = 0

    def backspace(self) -> None:
        if self.query:
            self.query = self.query[:-1]
            self.cursor = 0

    def chosen(self) -> List[str]:
        return [item for item in self.items if item in self.selected]

    def apply(self) -> None:
        self.on_apply(self.chosen())


@dataclass
class TextPrompt:
    """Single-line input; `on_submit` receives the stripped text."""

    label: str
    on_submit: Callable[[str], None]
    text: str = ""

    def type(self, char: str) -> None:
        self.text += char

    def backspace(self) -> None:
        self.text = self.text[:-1]

    def submit(self) -> None:
        self.on_submit(self.text.strip())


@dataclass
class Confirmation:
    message: str
    on_confirm: Callable[[], None]

    def confirm(self) -> None:
        self.on_confirm()


__all__ = ["Picker", "TextPrompt", "Confirmation"]
