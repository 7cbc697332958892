# tests/test_core/test_comment_configuration.py
"""CommentConfiguration Tests
==========================

Tests for building comment profiles from TOML-shaped tables and for the
normalization applied to markers, extensions and insertion policies.
"""

import pytest

from togglecomment.core.CommentConfiguration import (
    CommentConfiguration,
    InsertPosition,
    normalize_extension,
    parse_extensions,
    parse_markers,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("column_start", InsertPosition.COLUMN_START),
        ("first_column", InsertPosition.COLUMN_START),
        ("after-whitespace", InsertPosition.AFTER_INDENT),
        ("AFTER_INDENT", InsertPosition.AFTER_INDENT),
        ("Align with previous", InsertPosition.ALIGN_TO_PREVIOUS),
        (None, InsertPosition.COLUMN_START),
        ("bogus", InsertPosition.COLUMN_START),
    ],
)
def test_insert_position_parse(raw, expected) -> None:
    assert InsertPosition.parse(raw) is expected


def test_extension_normalization() -> None:
    assert normalize_extension(" .CPP ") == "cpp"
    assert parse_extensions("c, .H; cpp  hpp") == frozenset({"c", "h", "cpp", "hpp"})
    assert parse_extensions(["Py", "", ".pyi"]) == frozenset({"py", "pyi"})
    assert parse_extensions(None) == frozenset()


def test_markers_are_verbatim_and_ordered() -> None:
    assert parse_markers(["// ", "//", ""]) == ("// ", "//")
    assert parse_markers("#\r\n;\n") == ("#", ";")
    assert parse_markers(None) == ()
    assert parse_markers(["", "#"], keep_empty=True) == ("", "#")


def test_from_dict_drops_empty_markers() -> None:
    """Blank entries in a TOML marker list are dropped; a constructed value keeps them."""
    assert CommentConfiguration.from_dict({"markers": ["", "#"]}).markers == ("#",)
    assert CommentConfiguration(markers=["", "#"]).markers == ("", "#")
    assert CommentConfiguration(markers=[""]).is_inert


def test_from_dict_accepts_aliases() -> None:
    config = CommentConfiguration.from_dict(
        {
            "comment_strings": ["-- "],
            "file_extensions": "sql",
            "language_id": "sql",
            "insert_position": "align",
            "indent_empty_lines_on_align": True,
        }
    )

    assert config.markers == ("-- ",)
    assert config.extensions == frozenset({"sql"})
    assert config.language_id == "sql"
    assert config.aligns
    assert config.indent_empty_lines_on_align
    assert not config.skip_empty_lines
    assert not config.only_detect_up_to_align_column


def test_to_dict_round_trip() -> None:
    config = CommentConfiguration(
        markers=["# "],
        extensions=["py"],
        language_id="python",
        insert_position=InsertPosition.AFTER_INDENT,
        skip_empty_lines=True,
    )

    assert CommentConfiguration.from_dict(config.to_dict()) == config
    assert "language" not in config.copy(language_id="").to_dict()


def test_display_names() -> None:
    assert CommentConfiguration(language_id="lua").display_name == "Language: lua"
    assert CommentConfiguration(extensions=["h", "c"]).display_name == "Extensions: c, h"
    assert CommentConfiguration().display_name == "Unconfigured"
    assert CommentConfiguration(insert_position="after_indent").position_display_name == "After whitespace"


def test_inert_profile(caplog) -> None:
    config = CommentConfiguration.from_dict({"extensions": ["txt"]})

    assert config.is_inert
    assert config.primary_marker == ""
    assert "no markers" in caplog.text


def test_configuration_is_hashable_and_frozen() -> None:
    config = CommentConfiguration(markers=["#"], extensions=["sh"])

    assert hash(config) == hash(CommentConfiguration(markers=("#",), extensions={"sh"}))
    with pytest.raises(AttributeError):
        config.markers = ("//",)  # type: ignore[misc]
