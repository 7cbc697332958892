# togglecomment/core/LineInspector.py
"""LineInspector Module
====================
Stateless helpers that classify a single line of text for the comment
toggling engine.

Only space and tab count as indentation; other whitespace characters (for
example the full-width space) are treated as content. Marker detection is
anchored at two columns only, column 0 and the first non-whitespace column,
and is independent of the configured insertion policy, so a marker inserted
under one policy is still found after the policy changes.

Functions:
----------
- `leading_whitespace`: Length of the leading space/tab run.
- `is_blank`: True for empty or space/tab-only lines.
- `detect_marker`: Which marker is present, and at which anchor column.
- `has_any_marker`: Boolean form of `detect_marker`.
- `inspect_line`: All of the above as a `LineState`.
- `previous_non_blank_line`: Upward scan for the nearest non-blank line.
"""

from typing import NamedTuple, Optional, Protocol, Sequence


INDENT_CHARS = " \t"


class LineBuffer(Protocol):
    """Read view over a line-indexed text buffer."""

    def get_line_text(self, line: int) -> str: ...

    def line_count(self) -> int: ...


class MarkerMatch(NamedTuple):
    marker: str
    column: int


class LineState(NamedTuple):
    """Derived classification of one line for one marker list."""

    leading_whitespace_length: int
    is_blank: bool
    detected_marker: Optional[MarkerMatch]


def leading_whitespace(line: str) -> int:
    """Returns the number of leading space/tab characters."""
    return len(line) - len(line.lstrip(INDENT_CHARS))


def indentation_of(line: str) -> str:
    """Returns the leading space/tab run itself."""
    return line[: leading_whitespace(line)]


def is_blank(line: str) -> bool:
    """True if the line is empty or contains only spaces and tabs."""
    return not line.strip(INDENT_CHARS)


def _candidate_markers(markers: Sequence[str]) -> list[str]:
    # Longest first so "///" wins over "//". sorted() is stable, so equal
    # lengths keep their configured order. Empty markers would match everywhere.
    return sorted((m for m in markers if m), key=len, reverse=True)


def detect_marker(
    line: str, markers: Sequence[str], max_column: Optional[int] = None
) -> Optional[MarkerMatch]:
    """Finds a configured marker at column 0 or right after the indentation.

    Args:
        line: The line text, without a line terminator.
        markers: Configured marker strings, in configuration order.
        max_column: When given, anchors to the right of this column are
            ignored (restricted detection).

    Returns:
        The matching marker and its column, or None.

    Example:
        >>> detect_marker("  /// doc", ["//", "///"])
        MarkerMatch(marker='///', column=2)
    """
    candidates = _candidate_markers(markers)
    if not candidates:
        return None

    for marker in candidates:
        if line.startswith(marker):
            return MarkerMatch(marker, 0)

    indent = leading_whitespace(line)
    if indent == 0 or (max_column is not None and indent > max_column):
        return None
    for marker in candidates:
        if line.startswith(marker, indent):
            return MarkerMatch(marker, indent)
    return None


def has_any_marker(
    line: str, markers: Sequence[str], max_column: Optional[int] = None
) -> bool:
    return detect_marker(line, markers, max_column) is not None


def inspect_line(line: str, markers: Sequence[str]) -> LineState:
    return LineState(leading_whitespace(line), is_blank(line), detect_marker(line, markers))


def previous_non_blank_line(buffer: LineBuffer, line: int) -> Optional[int]:
    """Returns the index of the nearest non-blank line above `line`, if any."""
    for y in range(line - 1, -1, -1):
        if not is_blank(buffer.get_line_text(y)):
            return y
    return None
