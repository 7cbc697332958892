# tests/stubs.py
"""Test stubs for togglecomment tests.

This module provides minimal stand-ins for the host side of the engine:
a read-only line buffer for `CodeCommenter` and a stub editor exposing the
attributes `History` touches.
"""

import threading


class StubLineBuffer:
    """Read view over a fixed list of lines."""

    def __init__(self, lines: list[str]) -> None:
        self.lines = list(lines)

    def get_line_text(self, line: int) -> str:
        if not 0 <= line < len(self.lines):
            raise IndexError(line)
        return self.lines[line]

    def line_count(self) -> int:
        return len(self.lines)


class StubEditor:
    """Minimal subset of a buffer required for History testing."""

    def __init__(self, lines: list[str] | None = None) -> None:
        """Initialize a stub editor with default values."""
        self.text: list[str] = list(lines) if lines else [""]
        self.cursor_y: int = 0
        self.cursor_x: int = 0
        self.is_selecting: bool = False
        self.selection_start: tuple[int, int] | None = None
        self.selection_end: tuple[int, int] | None = None
        self.modified: bool = False
        self.status_message: str = "Ready"
        self._state_lock: threading.RLock = threading.RLock()

    # ---- methods invoked by History ----
    def _set_status_message(self, msg: str) -> None:
        self.status_message = str(msg)

    def _ensure_cursor_in_bounds(self) -> None:
        """Clamp cursor coordinates to remain within valid text bounds."""
        self.cursor_y = min(max(self.cursor_y, 0), len(self.text) - 1)
        self.cursor_x = min(max(self.cursor_x, 0), len(self.text[self.cursor_y]))
