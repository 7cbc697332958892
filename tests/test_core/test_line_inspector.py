# tests/test_core/test_line_inspector.py
"""Unit tests for the stateless line classification helpers."""

from togglecomment.core.LineInspector import (
    LineState,
    MarkerMatch,
    detect_marker,
    has_any_marker,
    indentation_of,
    inspect_line,
    is_blank,
    leading_whitespace,
    previous_non_blank_line,
)

from tests.stubs import StubLineBuffer


def test_leading_whitespace_counts_spaces_and_tabs() -> None:
    assert leading_whitespace("\t  x") == 3
    assert leading_whitespace("x") == 0
    assert leading_whitespace("    ") == 4
    assert indentation_of("\t x = 1") == "\t "


def test_only_space_and_tab_are_whitespace() -> None:
    """Other Unicode whitespace (e.g. the full-width space) counts as content."""
    assert is_blank("")
    assert is_blank(" \t ")
    assert not is_blank("　")
    assert leading_whitespace("　x") == 0


def test_detect_marker_at_column_zero_and_after_indent() -> None:
    assert detect_marker("// x", ["// "]) == MarkerMatch("// ", 0)
    assert detect_marker("    // x", ["// "]) == MarkerMatch("// ", 4)
    assert detect_marker("x // y", ["//"]) is None


def test_detect_marker_prefers_longest() -> None:
    """`///` wins over `//` regardless of configuration order."""
    assert detect_marker("  /// doc", ["//", "///"]) == MarkerMatch("///", 2)
    assert detect_marker("//x", ["//", "///"]) == MarkerMatch("//", 0)


def test_detect_marker_trailing_space_is_significant() -> None:
    assert detect_marker("//x", ["// "]) is None
    assert detect_marker("// x", ["//", "// "]) == MarkerMatch("// ", 0)


def test_detect_marker_restricted_column() -> None:
    assert detect_marker("    // a", ["//"], max_column=2) is None
    assert detect_marker("    // a", ["//"], max_column=4) == MarkerMatch("//", 4)
    # Column 0 is always checked.
    assert detect_marker("// a", ["//"], max_column=0) == MarkerMatch("//", 0)


def test_empty_markers_never_match() -> None:
    assert detect_marker("anything", [""]) is None
    assert detect_marker("anything", []) is None
    assert not has_any_marker("", ["", "#"])


def test_inspect_line() -> None:
    assert inspect_line("  # x", ["#"]) == LineState(2, False, MarkerMatch("#", 2))
    assert inspect_line("   ", ["#"]) == LineState(3, True, None)


def test_previous_non_blank_line() -> None:
    buffer = StubLineBuffer(["a", "  ", "", "b"])

    assert previous_non_blank_line(buffer, 3) == 0
    assert previous_non_blank_line(buffer, 1) == 0
    assert previous_non_blank_line(buffer, 0) is None
