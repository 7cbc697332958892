# togglecomment/core/CommentConfiguration.py
"""CommentConfiguration Module
===========================
Defines the configuration record consumed by the comment toggling engine.

A `CommentConfiguration` describes which marker strings count as a toggled
comment for a family of files (selected by language id or by file extension)
and how a new marker is positioned when it is added. The record is an
immutable value: the settings layer builds it from the `[[custom_comments]]`
section of the TOML configuration and the engine only ever reads it.

Classes:
--------
- `InsertPosition`: Insertion policy for new markers.
- `CommentConfiguration`: The configuration record itself.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union


logger = logging.getLogger("togglecomment")


class InsertPosition(str, Enum):
    """Where a new marker is inserted on a line."""

    COLUMN_START = "column_start"
    AFTER_INDENT = "after_indent"
    ALIGN_TO_PREVIOUS = "align_to_previous"

    @classmethod
    def parse(cls, value: Union[str, "InsertPosition", None]) -> "InsertPosition":
        """Converts a configuration value into an `InsertPosition`.

        Accepts the enum itself, its value, its name in any case, or one of
        the legacy spellings (`first_column`, `after_whitespace`,
        `align_with_previous`). Unknown values fall back to `COLUMN_START`
        with a warning.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.COLUMN_START

        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        if key in _POSITION_ALIASES:
            return _POSITION_ALIASES[key]
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member

        logger.warning(f"Unknown insert position '{value}', using column_start.")
        return cls.COLUMN_START


_POSITION_ALIASES = {
    "first_column": InsertPosition.COLUMN_START,
    "column0": InsertPosition.COLUMN_START,
    "after_whitespace": InsertPosition.AFTER_INDENT,
    "align_with_previous": InsertPosition.ALIGN_TO_PREVIOUS,
    "align": InsertPosition.ALIGN_TO_PREVIOUS,
}

_POSITION_DISPLAY = {
    InsertPosition.COLUMN_START: "First column",
    InsertPosition.AFTER_INDENT: "After whitespace",
    InsertPosition.ALIGN_TO_PREVIOUS: "Align with previous",
}

# Extension lists may be written as "c, cpp; h hpp".
_EXTENSION_SPLIT_RE = re.compile(r"[,;\s]+")


def normalize_extension(extension: Optional[str]) -> str:
    """Lower-cases an extension and strips surrounding whitespace and a leading dot."""
    if not extension:
        return ""
    return extension.strip().lstrip(".").lower()


def parse_extensions(raw: Union[str, Iterable[str], None]) -> frozenset[str]:
    """Parses an extension list given as a delimited string or an iterable."""
    if raw is None:
        return frozenset()
    items = _EXTENSION_SPLIT_RE.split(raw) if isinstance(raw, str) else raw
    return frozenset(
        ext for ext in (normalize_extension(str(item)) for item in items) if ext
    )


def parse_markers(
    raw: Union[str, Iterable[str], None], keep_empty: bool = False
) -> tuple[str, ...]:
    """Parses the marker list.

    Markers are taken verbatim (a trailing space is significant, `"// "` and
    `"//"` are different markers). A string is split on newlines, so one
    marker per line. Order is preserved. Empty entries are dropped unless
    `keep_empty` is set.
    """
    if raw is None:
        return ()
    items = raw.split("\n") if isinstance(raw, str) else raw
    markers = (str(item or "").rstrip("\r") for item in items)
    return tuple(m for m in markers if keep_empty or m)


## ================= CommentConfiguration Class ====================
@dataclass(frozen=True)
class CommentConfiguration:
    """One comment profile for a language or a set of file extensions.

    Attributes:
        markers: Marker strings. `markers[0]` is the primary marker, the only
            one ever inserted; all of them are checked when removing.
        extensions: Lower-case file extensions (without dot) this profile
            applies to.
        language_id: Language identifier; when set it takes precedence over
            `extensions` during matching.
        insert_position: Insertion policy for new markers.
        skip_empty_lines: Leave blank lines untouched when adding.
        indent_empty_lines_on_align: With `ALIGN_TO_PREVIOUS`, give blank lines
            synthesized indentation instead of collapsing them to column 0.
        only_detect_up_to_align_column: Opt-in restricted detection; an existing
            marker only counts when it starts at or before the column a new
            marker would be inserted at.
    """

    markers: tuple[str, ...] = ()
    extensions: frozenset[str] = field(default_factory=frozenset)
    language_id: str = ""
    insert_position: InsertPosition = InsertPosition.COLUMN_START
    skip_empty_lines: bool = False
    indent_empty_lines_on_align: bool = False
    only_detect_up_to_align_column: bool = False

    def __post_init__(self) -> None:
        # Accept lists/sets/strings from callers and keep the stored value hashable.
        # An empty primary marker stays in place and disables insertion.
        object.__setattr__(self, "markers", parse_markers(self.markers, keep_empty=True))
        object.__setattr__(self, "extensions", parse_extensions(self.extensions))
        object.__setattr__(self, "language_id", (self.language_id or "").strip())
        object.__setattr__(
            self, "insert_position", InsertPosition.parse(self.insert_position)
        )

    @property
    def primary_marker(self) -> str:
        """The marker inserted when adding, or an empty string."""
        return self.markers[0] if self.markers else ""

    @property
    def is_inert(self) -> bool:
        return not any(self.markers)

    @property
    def aligns(self) -> bool:
        return self.insert_position is InsertPosition.ALIGN_TO_PREVIOUS

    def matches_extension(self, extension: Optional[str]) -> bool:
        ext = normalize_extension(extension)
        return bool(ext) and ext in self.extensions

    def matches_language(self, language_id: Optional[str]) -> bool:
        if not self.language_id or not language_id:
            return False
        return self.language_id.lower() == language_id.strip().lower()

    @property
    def display_name(self) -> str:
        if self.language_id:
            return f"Language: {self.language_id}"
        if self.extensions:
            return f"Extensions: {', '.join(sorted(self.extensions))}"
        return "Unconfigured"

    @property
    def position_display_name(self) -> str:
        return _POSITION_DISPLAY[self.insert_position]

    def copy(self, **changes: Any) -> "CommentConfiguration":
        """Returns a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CommentConfiguration":
        """Builds a configuration from one `[[custom_comments]]` TOML table.

        Recognised keys: `markers` (alias `comment_strings`), `extensions`
        (alias `file_extensions`), `language` (alias `language_id`),
        `insert_position`, `skip_empty_lines`, `indent_empty_lines`
        (alias `indent_empty_lines_on_align`) and
        `only_detect_up_to_align_column`. Unknown keys are ignored.

        Example:
            >>> CommentConfiguration.from_dict(
            ...     {"markers": ["// "], "extensions": "c, h",
            ...      "insert_position": "after_indent"}
            ... ).display_name
            'Extensions: c, h'
        """
        markers = parse_markers(data.get("markers", data.get("comment_strings")))
        config = cls(
            markers=markers,
            extensions=data.get("extensions", data.get("file_extensions")),
            language_id=str(data.get("language", data.get("language_id", "")) or ""),
            insert_position=data.get("insert_position"),
            skip_empty_lines=bool(data.get("skip_empty_lines", False)),
            indent_empty_lines_on_align=bool(
                data.get(
                    "indent_empty_lines",
                    data.get("indent_empty_lines_on_align", False),
                )
            ),
            only_detect_up_to_align_column=bool(
                data.get("only_detect_up_to_align_column", False)
            ),
        )
        if config.is_inert:
            logger.warning(
                f"Comment profile '{config.display_name}' has no markers; it will never toggle anything."
            )
        return config

    def to_dict(self) -> dict[str, Any]:
        """Serializes the configuration into a TOML-friendly dictionary."""
        data: dict[str, Any] = {
            "markers": list(self.markers),
            "extensions": sorted(self.extensions),
            "insert_position": self.insert_position.value,
            "skip_empty_lines": self.skip_empty_lines,
            "indent_empty_lines": self.indent_empty_lines_on_align,
            "only_detect_up_to_align_column": self.only_detect_up_to_align_column,
        }
        if self.language_id:
            data["language"] = self.language_id
        return data
