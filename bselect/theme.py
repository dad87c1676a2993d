"""Themes for the selection widget.

A theme is a set of styled prefixes plus item styles. In the config file a
styled string keeps its style keys next to ``value``::

    {"value": "X", "foreground": "green", "fg_bright": true}
"""

from __future__ import annotations

from typing import Optional

import click
from pydantic import BaseModel, Field

from bselect.constants import DEFAULT_THEME

COLORS = frozenset({"black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"})


def _to_color(name: Optional[str], bright: bool) -> Optional[str]:
    if not name:
        return None
    color = name.lower()
    if color not in COLORS:
        return None
    return f"bright_{color}" if bright else color


class Style(BaseModel):
    """Foreground/background colours; unknown colour names are ignored."""

    foreground: Optional[str] = None
    background: Optional[str] = None
    fg_bright: bool = False
    bg_bright: bool = False

    def apply_to(self, text: str) -> str:
        fg = _to_color(self.foreground, self.fg_bright)
        bg = _to_color(self.background, self.bg_bright)
        if fg is None and bg is None:
            return text
        return click.style(text, fg=fg, bg=bg)


class StyledString(Style):
    """A piece of text with its own style."""

    value: str = ""

    def render(self) -> str:
        return self.apply_to(self.value)


class ConsoleTheme(BaseModel):
    """Prefixes and item styles for the multi-select list.

    Each row renders as ``{cursor prefix}{check prefix} {item}`` where the
    cursor prefix depends on whether the row is active (under the cursor)
    and the check prefix on whether it is selected.
    """

    name: str = DEFAULT_THEME
    checked_item_prefix: StyledString = Field(default_factory=lambda: StyledString(value="[x]"))
    unchecked_item_prefix: StyledString = Field(default_factory=lambda: StyledString(value="[ ]"))
    active_item_prefix: StyledString = Field(default_factory=lambda: StyledString(value="> "))
    inactive_item_prefix: StyledString = Field(default_factory=lambda: StyledString(value="  "))
    active_item_style: Style = Field(default_factory=Style)
    inactive_item_style: Style = Field(default_factory=Style)

    def format_item(self, text: str, checked: bool, active: bool) -> str:
        cursor = self.active_item_prefix if active else self.inactive_item_prefix
        check = self.checked_item_prefix if checked else self.unchecked_item_prefix
        style = self.active_item_style if active else self.inactive_item_style
        return f"{cursor.render()}{check.render()} {style.apply_to(text)}"
