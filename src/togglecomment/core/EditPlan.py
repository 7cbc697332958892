# togglecomment/core/EditPlan.py
"""Edit plans produced by the comment toggling engine.

An `EditPlan` is an ordered list of line-level `TextEdit`s plus an optional
caret move. Edits must be applied in list order. Each edit carries both its
line-relative position (`line`, `column`) and an absolute character
`offset`; the offset is computed against the buffer as it looks after every
preceding edit of the same plan has been applied, so a host that applies
edits as a sequence of absolute-offset mutations needs no adjustment.
"""

from dataclasses import dataclass, field
from typing import Optional

from togglecomment.core.LineInspector import LineBuffer


ACTION_ADD = "add"
ACTION_REMOVE = "remove"
ACTION_NONE = "none"


@dataclass(frozen=True)
class TextEdit:
    """Replace `removed` at (`line`, `column`) with `inserted`."""

    line: int
    column: int
    removed: str
    inserted: str
    offset: int

    @property
    def kind(self) -> str:
        if self.removed and self.inserted:
            return "replace"
        return "delete" if self.removed else "insert"

    @property
    def end_offset(self) -> int:
        """Absolute offset of the end of the replaced range (before the edit)."""
        return self.offset + len(self.removed)

    def apply_to_line(self, text: str) -> str:
        """Returns `text` with this edit applied at its line-relative column."""
        end = self.column + len(self.removed)
        if text[self.column:end] != self.removed:
            raise ValueError(
                f"Edit at line {self.line}, column {self.column} expected {self.removed!r}, "
                f"found {text[self.column:end]!r}"
            )
        return text[: self.column] + self.inserted + text[end:]


@dataclass(frozen=True)
class CaretMove:
    line: int
    column: int = 0


@dataclass
class EditPlan:
    """The result of one toggle invocation."""

    action: str = ACTION_NONE
    edits: list[TextEdit] = field(default_factory=list)
    caret: Optional[CaretMove] = None

    @property
    def is_empty(self) -> bool:
        return not self.edits

    @property
    def affected_lines(self) -> list[int]:
        return sorted({edit.line for edit in self.edits})

    def __len__(self) -> int:
        return len(self.edits)


class OffsetTracker:
    """Computes absolute offsets while a plan is being built.

    It starts from the line lengths of `buffer` and updates them after every
    edit it is told about, so each offset reflects all earlier edits.
    """

    def __init__(self, buffer: LineBuffer, newline_length: int = 1) -> None:
        self._lengths = [
            len(buffer.get_line_text(y)) for y in range(buffer.line_count())
        ]
        self._newline_length = newline_length

    def offset_of(self, line: int, column: int) -> int:
        return sum(self._lengths[:line]) + line * self._newline_length + column

    def make_edit(self, line: int, column: int, removed: str, inserted: str) -> TextEdit:
        """Creates an edit with its absolute offset and records its effect."""
        edit = TextEdit(line, column, removed, inserted, self.offset_of(line, column))
        self._lengths[line] += len(inserted) - len(removed)
        return edit


def apply_to_text(text: str, plan: EditPlan) -> str:
    """Applies a plan to a flat string using the absolute offsets.

    Raises:
        ValueError: If the text at an edit's offset does not match the
            edit's `removed` string (the plan was built for other text).
    """
    for edit in plan.edits:
        found = text[edit.offset:edit.end_offset]
        if found != edit.removed:
            raise ValueError(
                f"Edit at offset {edit.offset} expected {edit.removed!r}, found {found!r}"
            )
        text = text[: edit.offset] + edit.inserted + text[edit.end_offset:]
    return text
