#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "text.done": "#6d717a strike",
        "selected": "bg:#3b3b3b #d7dfe6 bold",
        "header": "#ffb347 bold",
        "status": "bg:#2b2f33 #d7dfe6",
        "status.error": "bg:#2b2f33 #e06c75 bold",
        "footer": "#6d717a",
        "priority.high": "#e06c75 bold",
        "priority.mid": "#e5c07b bold",
        "priority.low": "#9ad974",
        "meta.project": "#61afef",
        "meta.context": "#c678dd",
        "meta.due": "#e5c07b",
        "icon.check": "#9ad974 bold",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba",
        "text.done": "#6f757d strike",
        "selected": "bg:#3d4047 #e8eaec bold",
        "header": "#ffb347 bold",
        "status": "bg:#24272b #e8eaec",
        "status.error": "bg:#24272b #ff6b6b bold",
        "footer": "#6f757d",
        "priority.high": "#ff6b6b bold",
        "priority.mid": "#f0c674 bold",
        "priority.low": "#b8f171",
        "meta.project": "#7cc4ff",
        "meta.context": "#e29cff",
        "meta.due": "#f0c674",
        "icon.check": "#b8f171 bold",
    },
}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
