# togglecomment/core/CodeCommenter.py
"""CodeCommenter Module
====================
This module defines the `CodeCommenter` class, which implements toggle-style
line commenting driven by a `CommentConfiguration`: given the lines covered
by the current carets and selections, it decides whether to insert or remove
a marker on every line and computes exactly where.

Key Features:
-------------
- First-Line Decision: Only the first line of the earliest caret in document
  order is inspected. If it carries any configured marker the whole batch is
  uncommented, otherwise the whole batch is commented, so a mixed selection
  always toggles in one direction.
- Three Insertion Policies: column 0, after the line's indentation, or
  aligned with the marker on the nearest non-blank line above.
- Left-Shift Clamp: A marker is never inserted into non-whitespace content;
  a shallower line pulls the alignment column left.
- Flat Batches: A multi-line or multi-caret aligned batch gets one column,
  decided in a single pre-pass over all target lines before any edit exists.
- Line-by-Line Alignment: Repeated single-caret invocations on consecutive
  lines continue a common column through `AlignmentMemory`.
- Edit Plans: Nothing is mutated here. The result is an `EditPlan` whose
  edits carry absolute offsets, plus an optional caret move.

Intended Usage:
---------------
A host resolves a configuration (see `ConfigMatcher`), describes its carets
as `CaretSpan`s and calls `perform_toggle`. It applies the returned plan as
one undoable step, as `TextBuffer.toggle_comment` does.

Classes:
--------
- `CaretSpan`: Line range covered by one caret or selection.
- `CodeCommenter`: Toggle decision and plan construction.
"""

import logging
from dataclasses import dataclass
from typing import Hashable, Iterable, Optional, Sequence

from togglecomment.core.AlignmentMemory import AlignmentMemory
from togglecomment.core.CommentConfiguration import CommentConfiguration, InsertPosition
from togglecomment.core.EditPlan import (
    ACTION_ADD,
    ACTION_REMOVE,
    CaretMove,
    EditPlan,
    OffsetTracker,
)
from togglecomment.core.LineInspector import (
    LineBuffer,
    detect_marker,
    indentation_of,
    is_blank,
    leading_whitespace,
    previous_non_blank_line,
)


@dataclass(frozen=True)
class CaretSpan:
    """Lines covered by one caret (inclusive), and whether it selects text."""

    start_line: int
    end_line: int
    has_selection: bool = False

    @classmethod
    def at(cls, line: int) -> "CaretSpan":
        """A caret on `line` without a selection."""
        return cls(line, line, False)

    @classmethod
    def from_selection(
        cls, start: tuple[int, int], end: tuple[int, int]
    ) -> "CaretSpan":
        """Builds a span from (line, column) selection bounds in either order.

        A multi-line selection that ends at column 0 does not include its
        last line, matching common IDE behavior. An empty selection is a
        plain caret.
        """
        (start_y, start_x), (end_y, end_x) = sorted((start, end))
        if (start_y, start_x) == (end_y, end_x):
            return cls.at(start_y)
        if end_x == 0 and end_y > start_y:
            end_y -= 1
        return cls(start_y, end_y, True)


def collect_target_lines(carets: Iterable[CaretSpan]) -> tuple[list[int], Optional[int]]:
    """Returns the sorted unique lines covered by `carets` and the decision line.

    The decision line is the first line of the earliest caret in document
    order. Several carets on one line contribute it once.
    """
    ordered = sorted(carets, key=lambda c: (c.start_line, c.end_line))
    if not ordered:
        return [], None
    lines: set[int] = set()
    for caret in ordered:
        lines.update(range(caret.start_line, caret.end_line + 1))
    return sorted(lines), ordered[0].start_line


## ================= CodeCommenter Class ====================
class CodeCommenter:
    """Computes comment toggles as edit plans.

    Attributes:
        memory: The alignment memory shared by successive invocations. Pass
            the same instance for every buffer that should share
            line-by-line alignment; the default is a private instance.

    Methods:
        perform_toggle: Host-facing entry point taking caret spans.
        toggle: The toggle operation on an explicit target line set.
        _should_remove: The first-line decision.
        _build_removal: Removal pass.
        _build_addition: Addition pass for column 0 / after-indent policies.
        _build_aligned_addition: Addition pass for the aligned policy.
        _starting_column: Running-column seed, including the batch pre-pass.
    """

    def __init__(self, memory: Optional[AlignmentMemory] = None) -> None:
        self.memory = memory if memory is not None else AlignmentMemory()

    def perform_toggle(
        self,
        config: CommentConfiguration,
        buffer: LineBuffer,
        carets: Sequence[CaretSpan],
        buffer_id: Optional[Hashable] = None,
        newline_length: int = 1,
    ) -> EditPlan:
        """Toggles comments on every line covered by `carets`.

        Continuity with the previous invocation is only considered for a
        single caret without a selection; in that case the plan also moves
        the caret to the start of the line after the processed one (clamped
        to the last line of the buffer).

        Args:
            config: The resolved comment profile.
            buffer: Read view over the buffer's lines.
            carets: The carets/selections of the invocation.
            buffer_id: Identity token of the buffer, used for continuity.
            newline_length: Length of the buffer's line terminator, used for
                absolute offsets.

        Returns:
            The edit plan. An empty caret list yields an empty plan and
            leaves the alignment memory untouched.
        """
        target_lines, first_line = collect_target_lines(carets)
        if not target_lines or first_line is None:
            logging.debug("perform_toggle: No target lines, nothing to do.")
            return EditPlan()

        single_caret = len(carets) == 1 and not carets[0].has_selection

        with self.memory.lock:
            continuing = single_caret and self.memory.continues(buffer_id, target_lines[0])
            plan = self.toggle(
                config,
                buffer,
                target_lines,
                first_line,
                buffer_id=buffer_id,
                continuing=continuing,
                single_caret=single_caret,
                newline_length=newline_length,
            )

        if single_caret:
            next_line = min(target_lines[-1] + 1, buffer.line_count() - 1)
            plan.caret = CaretMove(next_line, 0)
        return plan

    def toggle(
        self,
        config: CommentConfiguration,
        buffer: LineBuffer,
        target_lines: Iterable[int],
        first_line: int,
        buffer_id: Optional[Hashable] = None,
        continuing: bool = False,
        single_caret: bool = True,
        newline_length: int = 1,
    ) -> EditPlan:
        """Decides add vs. remove from `first_line` and builds the plan.

        Args:
            config: The resolved comment profile.
            buffer: Read view over the buffer's lines.
            target_lines: Lines to toggle; duplicates are ignored.
            first_line: The line whose state decides the direction.
            buffer_id: Identity token of the buffer, written to the memory.
            continuing: Whether this invocation continues the alignment
                recorded in `memory`. Only honored when `single_caret`.
            single_caret: False for multi-line or multi-caret batches, which
                get a single pre-computed column under the aligned policy.
            newline_length: Length of the line terminator.

        Returns:
            The edit plan, without a caret move.
        """
        lines = sorted(set(target_lines))
        if not lines:
            return EditPlan()

        with self.memory.lock:
            carried = self.memory.last_column if (continuing and single_caret) else None
            tracker = OffsetTracker(buffer, newline_length)

            if self._should_remove(config, buffer, first_line, carried):
                plan = self._build_removal(config, buffer, lines, tracker, carried)
                # Removing breaks any alignment continuity.
                self.memory.reset()
                logging.debug(f"toggle: Removed markers from {len(plan.edits)} of {len(lines)} line(s).")
                return plan

            if not config.primary_marker:
                logging.debug(f"toggle: Profile '{config.display_name}' has no primary marker; nothing to add.")
                return EditPlan(ACTION_ADD)

            if config.aligns:
                plan = self._build_aligned_addition(
                    config, buffer, lines, tracker, carried, single_caret, buffer_id
                )
            else:
                plan = self._build_addition(config, buffer, lines, tracker)
                self.memory.reset()
            logging.debug(f"toggle: Added '{config.primary_marker}' to {len(plan.edits)} of {len(lines)} line(s).")
            return plan

    # --- Decision ---
    def _should_remove(
        self,
        config: CommentConfiguration,
        buffer: LineBuffer,
        first_line: int,
        carried: Optional[int],
    ) -> bool:
        """True if the decision line already carries a configured marker."""
        text = buffer.get_line_text(first_line)
        limit = self._detection_limit(config, buffer, first_line, carried)
        return detect_marker(text, config.markers, limit) is not None

    def _detection_limit(
        self,
        config: CommentConfiguration,
        buffer: LineBuffer,
        line: int,
        carried: Optional[int],
    ) -> Optional[int]:
        """Rightmost anchor column for restricted detection, or None if unrestricted."""
        if not config.only_detect_up_to_align_column:
            return None
        if config.insert_position is InsertPosition.COLUMN_START:
            return 0
        if config.insert_position is InsertPosition.AFTER_INDENT:
            return leading_whitespace(buffer.get_line_text(line))
        if carried is not None:
            return carried
        return self._previous_line_column(config, buffer, line)

    # --- Removal ---
    def _build_removal(
        self,
        config: CommentConfiguration,
        buffer: LineBuffer,
        lines: list[int],
        tracker: OffsetTracker,
        carried: Optional[int],
    ) -> EditPlan:
        """Deletes the detected marker on each line, bottom-up.

        Leading whitespace in front of the marker and everything after it is
        left as is. Lines without a marker are skipped.
        """
        plan = EditPlan(ACTION_REMOVE)
        for y in reversed(lines):
            text = buffer.get_line_text(y)
            match = detect_marker(
                text, config.markers, self._detection_limit(config, buffer, y, carried)
            )
            if match is None:
                continue
            plan.edits.append(tracker.make_edit(y, match.column, match.marker, ""))
        return plan

    # --- Addition ---
    def _build_addition(
        self,
        config: CommentConfiguration,
        buffer: LineBuffer,
        lines: list[int],
        tracker: OffsetTracker,
    ) -> EditPlan:
        """Inserts the primary marker at column 0 or after each line's indentation."""
        marker = config.primary_marker
        plan = EditPlan(ACTION_ADD)
        for y in lines:
            text = buffer.get_line_text(y)
            if config.skip_empty_lines and is_blank(text):
                continue
            if config.insert_position is InsertPosition.AFTER_INDENT:
                column = leading_whitespace(text)
            else:
                column = 0
            plan.edits.append(tracker.make_edit(y, column, "", marker))
        return plan

    def _build_aligned_addition(
        self,
        config: CommentConfiguration,
        buffer: LineBuffer,
        lines: list[int],
        tracker: OffsetTracker,
        carried: Optional[int],
        single_caret: bool,
        buffer_id: Optional[Hashable],
    ) -> EditPlan:
        """Inserts the primary marker aligned with the previous marker column.

        The running column starts from `_starting_column` and only ever moves
        left: each non-blank line clamps it to its own indentation. Blank
        lines either receive synthesized indentation up to the running
        column (`indent_empty_lines_on_align`) or take the marker at column
        0 without disturbing the column used by the other lines.
        """
        marker = config.primary_marker
        plan = EditPlan(ACTION_ADD)
        running = self._starting_column(config, buffer, lines, carried, single_caret)
        last_index = len(lines) - 1

        for index, y in enumerate(lines):
            text = buffer.get_line_text(y)

            if is_blank(text):
                if config.skip_empty_lines:
                    continue
                if config.indent_empty_lines_on_align and running is not None:
                    indent = self._synthesized_indent(buffer, y, running)
                    # The whole whitespace run is rewritten, so this may be a replace.
                    plan.edits.append(tracker.make_edit(y, 0, text, indent + marker))
                    continue
                plan.edits.append(tracker.make_edit(y, 0, "", marker))
                if index == last_index:
                    running = 0
                continue

            indent = leading_whitespace(text)
            column = indent if running is None else min(running, indent)
            running = column
            plan.edits.append(tracker.make_edit(y, column, "", marker))

        self.memory.record(running, buffer_id, lines[-1])
        return plan

    def _starting_column(
        self,
        config: CommentConfiguration,
        buffer: LineBuffer,
        lines: list[int],
        carried: Optional[int],
        single_caret: bool,
    ) -> Optional[int]:
        """Seeds the running column of an aligned add pass.

        A column carried over from the previous invocation wins. Otherwise
        the column is looked up from the first line that will actually be
        processed. For batches, the seed is then clamped once against the
        indentation of every non-blank target line, so the whole batch
        lands in one flat column.
        """
        if carried is not None:
            return carried

        processed = [
            y for y in lines
            if not (config.skip_empty_lines and is_blank(buffer.get_line_text(y)))
        ]
        if not processed:
            return None

        column = self._previous_line_column(config, buffer, processed[0])
        if not single_caret:
            indents = [
                leading_whitespace(text)
                for text in (buffer.get_line_text(y) for y in processed)
                if not is_blank(text)
            ]
            if indents:
                column = min(column, min(indents))
            logging.debug(f"_starting_column: Batch of {len(processed)} line(s) aligned at column {column}.")
        return column

    def _previous_line_column(
        self, config: CommentConfiguration, buffer: LineBuffer, line: int
    ) -> int:
        """Marker column of the nearest non-blank line above `line`.

        Falls back to `line`'s own indentation when that line has no
        marker (or there is no such line). For a blank `line` the fallback
        is the indentation of the line above, or 0.
        """
        text = buffer.get_line_text(line)
        previous = previous_non_blank_line(buffer, line)
        previous_text = buffer.get_line_text(previous) if previous is not None else ""

        if previous is not None:
            match = detect_marker(previous_text, config.markers)
            if match is not None:
                return match.column

        if is_blank(text):
            return leading_whitespace(previous_text)
        return leading_whitespace(text)

    def _synthesized_indent(self, buffer: LineBuffer, line: int, column: int) -> str:
        """Indentation for a blank line: the previous non-blank line's, fitted to `column`."""
        previous = previous_non_blank_line(buffer, line)
        indent = indentation_of(buffer.get_line_text(previous)) if previous is not None else ""
        if len(indent) >= column:
            return indent[:column]
        return indent + " " * (column - len(indent))


__all__ = ["CaretSpan", "CodeCommenter", "collect_target_lines"]
