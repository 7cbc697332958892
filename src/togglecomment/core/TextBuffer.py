# togglecomment/core/TextBuffer.py
"""TextBuffer Module
=================
An in-memory line buffer that plays the host role for the comment engine:
it offers the read view the engine consumes, keeps carets and selections,
applies edit plans as one undoable step and moves the caret afterwards.

The command line tool and the tests drive the engine through this class;
an editor integration would provide the same small surface over its own
document model.
"""

import itertools
import logging
import threading
from typing import Hashable, Iterable, Optional, Sequence

from togglecomment.core.CodeCommenter import CaretSpan, CodeCommenter
from togglecomment.core.CommentConfiguration import CommentConfiguration
from togglecomment.core.EditPlan import ACTION_ADD, ACTION_REMOVE, EditPlan
from togglecomment.core.History import History


_buffer_ids = itertools.count(1)


def detect_newline(text: str) -> str:
    """Returns the line terminator used by `text` ("\\r\\n" or "\\n")."""
    return "\r\n" if "\r\n" in text else "\n"


class TextBuffer:
    """Line-indexed text with carets, selection and undo history.

    Attributes:
        text (list[str]): The lines, without terminators.
        buffer_id (Hashable): Identity token used for alignment continuity.
        newline (str): Line terminator used when joining `text`.
        filename (Optional[str]): Path the buffer was read from, if any.
        cursor_y, cursor_x (int): Primary caret position.
        is_selecting (bool): Whether the primary caret has a selection.
        selection_start, selection_end: Selection bounds as (line, column).
        extra_carets (list[CaretSpan]): Additional carets beyond the primary.
        modified (bool): Whether the text differs from what was loaded.
        status_message (str): Last user-facing message.
        history (History): Undo/redo stacks.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        buffer_id: Optional[Hashable] = None,
        newline: str = "\n",
        filename: Optional[str] = None,
    ) -> None:
        self.text: list[str] = list(lines) if lines is not None else []
        if not self.text:
            self.text = [""]
        self.buffer_id: Hashable = (
            buffer_id if buffer_id is not None else filename or f"buffer-{next(_buffer_ids)}"
        )
        self.newline = newline
        self.filename = filename
        self.cursor_y = 0
        self.cursor_x = 0
        self.is_selecting = False
        self.selection_start: Optional[tuple[int, int]] = None
        self.selection_end: Optional[tuple[int, int]] = None
        self.extra_carets: list[CaretSpan] = []
        self.modified = False
        self.status_message = "Ready"
        self._state_lock = threading.RLock()
        self.history = History(self)

    @classmethod
    def from_text(
        cls,
        content: str,
        buffer_id: Optional[Hashable] = None,
        filename: Optional[str] = None,
    ) -> "TextBuffer":
        """Splits `content` into lines, remembering its line terminator."""
        newline = detect_newline(content)
        return cls(content.split(newline), buffer_id=buffer_id, newline=newline, filename=filename)

    # ---- read view consumed by the engine ----
    def get_line_text(self, line: int) -> str:
        if not 0 <= line < len(self.text):
            raise IndexError(f"Line {line} out of range (buffer has {len(self.text)} lines)")
        return self.text[line]

    def line_count(self) -> int:
        return len(self.text)

    @property
    def content(self) -> str:
        return self.newline.join(self.text)

    # ---- carets ----
    def set_cursor(self, line: int, column: int = 0) -> None:
        self.cursor_y, self.cursor_x = line, column
        self.is_selecting = False
        self.selection_start = self.selection_end = None

    def select(self, start: tuple[int, int], end: tuple[int, int]) -> None:
        """Selects from `start` to `end`; the caret ends up at `end`."""
        self.is_selecting = True
        self.selection_start, self.selection_end = start, end
        self.cursor_y, self.cursor_x = end

    def add_caret(self, line: int, end_line: Optional[int] = None) -> None:
        """Adds a secondary caret (or a line-range selection when `end_line` is given)."""
        if end_line is None or end_line == line:
            self.extra_carets.append(CaretSpan.at(line))
        else:
            self.extra_carets.append(CaretSpan(min(line, end_line), max(line, end_line), True))

    def caret_spans(self) -> list[CaretSpan]:
        """The primary caret followed by the secondary ones."""
        if self.is_selecting and self.selection_start and self.selection_end:
            primary = CaretSpan.from_selection(self.selection_start, self.selection_end)
        else:
            primary = CaretSpan.at(self.cursor_y)
        return [primary, *self.extra_carets]

    # ---- applying plans ----
    def apply_plan(self, plan: EditPlan) -> bool:
        """Applies `plan` as one undoable action and moves the caret.

        Returns:
            bool: True if any line text changed.
        """
        with self._state_lock:
            cursor_before = (self.cursor_y, self.cursor_x)
            selection_before = (self.is_selecting, self.selection_start, self.selection_end)

            original_texts: dict[int, str] = {}
            for edit in plan.edits:
                original_texts.setdefault(edit.line, self.text[edit.line])
                self.text[edit.line] = edit.apply_to_line(self.text[edit.line])

            if plan.caret is not None:
                self.set_cursor(plan.caret.line, plan.caret.column)
            self._ensure_cursor_in_bounds()

            changes = [
                {"line_index": y, "original_text": before, "new_text": self.text[y]}
                for y, before in sorted(original_texts.items())
                if self.text[y] != before
            ]
            if not changes:
                return False

            self.modified = True
            self.history.add_action(
                {
                    "type": "comment_block" if plan.action == ACTION_ADD else "uncomment_block",
                    "changes": changes,
                    "cursor_before": cursor_before,
                    "selection_before": selection_before,
                    "cursor_after": (self.cursor_y, self.cursor_x),
                    "selection_after": (self.is_selecting, self.selection_start, self.selection_end),
                }
            )
            return True

    def toggle_comment(
        self,
        commenter: CodeCommenter,
        config: Optional[CommentConfiguration],
        carets: Optional[Sequence[CaretSpan]] = None,
    ) -> bool:
        """Toggles comments on the lines under the carets using `config`.

        `carets` overrides the buffer's own carets, for hosts that track
        them elsewhere.

        Returns:
            bool: True if the text changed.
        """
        if config is None:
            self._set_status_message("Comments not configured for this file.")
            return False

        plan = commenter.perform_toggle(
            config,
            self,
            carets if carets is not None else self.caret_spans(),
            buffer_id=self.buffer_id,
            newline_length=len(self.newline),
        )
        changed = self.apply_plan(plan)

        if plan.action == ACTION_ADD and changed:
            self._set_status_message(f"Added '{config.primary_marker}' to {len(plan.edits)} line(s)")
        elif plan.action == ACTION_REMOVE and changed:
            self._set_status_message(f"Removed comment markers from {len(plan.edits)} line(s)")
        else:
            self._set_status_message("Nothing to toggle.")
        return changed

    # ---- helpers shared with History ----
    def _set_status_message(self, msg: str) -> None:
        self.status_message = str(msg)
        logging.debug(f"TextBuffer[{self.buffer_id}]: {self.status_message}")

    def _ensure_cursor_in_bounds(self) -> None:
        """Clamp cursor coordinates to remain within valid text bounds."""
        self.cursor_y = min(max(self.cursor_y, 0), len(self.text) - 1)
        self.cursor_x = min(max(self.cursor_x, 0), len(self.text[self.cursor_y]))
