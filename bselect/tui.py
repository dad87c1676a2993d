"""Interactive multi-select for branch names.

Draws a themed checklist on stderr using click's terminal helpers, or hands
the list to ``gum choose --no-limit`` when the user prefers gum and it is
installed. stdout is left untouched for the caller.

Keys: up/down or k/j move, space toggles, a toggles all, enter confirms,
q or Esc cancels.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Protocol

import click

from bselect.errors import SelectError
from bselect.models import Branch
from bselect.theme import ConsoleTheme

PROMPT = "Select branches"

KEYS_UP = frozenset({"\x1b[A", "\x1bOA", "\xe0H", "\x00H", "k"})
KEYS_DOWN = frozenset({"\x1b[B", "\x1bOB", "\xe0P", "\x00P", "j"})
KEYS_CONFIRM = frozenset({"\r", "\n"})
KEYS_CANCEL = frozenset({"\x1b", "q"})
KEY_TOGGLE = " "
KEY_TOGGLE_ALL = "a"


class BranchSelector(Protocol):
    """Lets the user pick a subset of the candidate branches."""

    def select_branches(self, branches: list[Branch]) -> list[Branch]:
        ...


@lru_cache(maxsize=1)
def _has_gum() -> bool:
    """Check if gum is available on PATH (cached)."""
    return shutil.which("gum") is not None


def _run_gum(*args: str, input_text: str | None = None) -> tuple[bool, str]:
    """Run a gum command, return (success, stdout)."""
    try:
        result = subprocess.run(
            ["gum", *args],
            stdout=subprocess.PIPE,
            text=True,
            check=False,
            input=input_text,
        )
        return result.returncode == 0, result.stdout.strip()
    except FileNotFoundError:
        return False, ""


def _stdin_is_tty() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def _is_noninteractive() -> bool:
    """True if BSELECT_NONINTERACTIVE=1."""
    return os.environ.get("BSELECT_NONINTERACTIVE") == "1"


# ============================================================================
# Widget State
# ============================================================================


@dataclass
class MultiSelectState:
    """Cursor position and checked rows of the checklist."""

    size: int
    cursor: int = 0
    checked: set[int] = field(default_factory=set)
    # first row shown when the list is taller than the terminal
    offset: int = 0

    def handle_key(self, key: str) -> Optional[str]:
        """Apply one key press.

        Returns:
            ``"confirm"`` or ``"cancel"`` when the interaction ends, else None.
        """
        if key in KEYS_CONFIRM:
            return "confirm"
        if key in KEYS_CANCEL:
            return "cancel"
        if key in KEYS_UP:
            self.cursor = (self.cursor - 1) % self.size
        elif key in KEYS_DOWN:
            self.cursor = (self.cursor + 1) % self.size
        elif key == KEY_TOGGLE:
            self.checked ^= {self.cursor}
        elif key == KEY_TOGGLE_ALL:
            everything = set(range(self.size))
            self.checked = set() if self.checked == everything else everything
        return None

    def selection(self) -> list[int]:
        return sorted(self.checked)

    def visible_rows(self, height: Optional[int] = None) -> range:
        """Rows to draw, scrolled so the cursor stays inside *height* lines."""
        if height is None or self.size <= height:
            return range(self.size)
        height = max(1, height)
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + height:
            self.offset = self.cursor - height + 1
        self.offset = min(self.offset, self.size - height)
        return range(self.offset, self.offset + height)

    def render(self, options: list[str], theme: ConsoleTheme, height: Optional[int] = None) -> list[str]:
        return [
            theme.format_item(options[i], checked=i in self.checked, active=i == self.cursor)
            for i in self.visible_rows(height)
        ]


# ============================================================================
# Prompts
# ============================================================================


def _list_height() -> int:
    # one row for the prompt, one for the cursor left below the list
    return max(1, shutil.get_terminal_size().lines - 2)


def _redraw(lines: list[str], previous: int) -> None:
    if previous:
        # move to the first row of the previous frame and clear below it
        click.echo(f"\x1b[{previous}A\x1b[J", nl=False, err=True)
    for line in lines:
        click.echo(line, err=True)


def _click_multi_select(prompt: str, options: list[str], theme: ConsoleTheme) -> Optional[list[int]]:
    state = MultiSelectState(size=len(options))
    click.echo(click.style(prompt, bold=True), err=True)
    drawn = 0
    while True:
        lines = state.render(options, theme, height=_list_height())
        _redraw(lines, drawn)
        drawn = len(lines)
        try:
            key = click.getchar()
        except (KeyboardInterrupt, EOFError):
            return None
        outcome = state.handle_key(key)
        if outcome == "confirm":
            return state.selection()
        if outcome == "cancel":
            return None


def _gum_multi_select(prompt: str, options: list[str]) -> tuple[bool, Optional[list[int]]]:
    ok, value = _run_gum("choose", "--no-limit", "--header", prompt, *options)
    if not ok:
        return False, None
    chosen = set(value.splitlines())
    return True, [i for i, option in enumerate(options) if option in chosen]


def tui_multi_select(
    prompt: str,
    options: list[str],
    theme: ConsoleTheme | None = None,
    use_gum: bool = False,
) -> Optional[list[int]]:
    """Let the user check any number of *options*.

    Args:
        prompt: Header shown above the list.
        options: Labels to choose from.
        theme: Row styling for the built-in widget.
        use_gum: Prefer ``gum choose`` if it is installed.

    Returns:
        Indexes of the checked options in list order, or None if cancelled.

    Raises:
        SelectError: If options is empty or no terminal is available.
    """
    if not options:
        raise SelectError("cannot select from an empty list")
    if _is_noninteractive():
        raise SelectError("cannot select branches in non-interactive mode")

    if use_gum and _has_gum():
        ok, indexes = _gum_multi_select(prompt, options)
        if ok:
            return indexes

    if not _stdin_is_tty():
        raise SelectError("cannot select branches: stdin is not a terminal")
    return _click_multi_select(prompt, options, theme or ConsoleTheme())


@dataclass
class TuiSelector:
    """Terminal selector used by the CLI."""

    theme: ConsoleTheme = field(default_factory=ConsoleTheme)
    use_gum: bool = False

    def select_branches(self, branches: list[Branch]) -> list[Branch]:
        labels = [b.display() for b in branches]
        indexes = tui_multi_select(PROMPT, labels, theme=self.theme, use_gum=self.use_gum)
        if indexes is None:
            return []
        return [branches[i] for i in indexes]
