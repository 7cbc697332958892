# tests/conftest.py
"""Pytest configuration with shared fixtures for the togglecomment tests.

The fixtures build the comment profiles used across the engine tests and
a factory for `TextBuffer` instances sharing one `CodeCommenter`, so that
line-by-line alignment can be exercised the way a host would.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from togglecomment.core import CodeCommenter, CommentConfiguration, InsertPosition, TextBuffer


# --- Comment profiles ---
@pytest.fixture
def c_after_indent() -> CommentConfiguration:
    """`// ` inserted after each line's indentation."""
    return CommentConfiguration(
        markers=["// "],
        extensions=["c", "h"],
        insert_position=InsertPosition.AFTER_INDENT,
    )


@pytest.fixture
def c_column_start() -> CommentConfiguration:
    return CommentConfiguration(markers=["// "], extensions=["c"])


@pytest.fixture
def c_aligned() -> CommentConfiguration:
    """`// ` aligned with the marker on the previous non-blank line."""
    return CommentConfiguration(
        markers=["// "],
        extensions=["c"],
        insert_position=InsertPosition.ALIGN_TO_PREVIOUS,
    )


# --- Buffers ---
@pytest.fixture
def commenter() -> CodeCommenter:
    return CodeCommenter()


@pytest.fixture
def make_buffer() -> Callable[..., TextBuffer]:
    """Factory for buffers with a stable identity token."""

    def _make(lines: list[str], buffer_id: str = "buf") -> TextBuffer:
        return TextBuffer(lines, buffer_id=buffer_id)

    return _make


# --- Filesystem fixtures ---
@pytest.fixture
def c_profile_config_file(tmp_path: Path) -> Path:
    """A config.toml with one after-indent C profile."""
    path = tmp_path / "config.toml"
    path.write_text(
        "[[custom_comments]]\n"
        'markers = ["// "]\n'
        'extensions = ["c", "h"]\n'
        'insert_position = "after_indent"\n',
        encoding="utf-8",
    )
    return path
