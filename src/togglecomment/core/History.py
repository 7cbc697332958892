# togglecomment/core/History.py
"""History Module
==============
This module provides the `History` class, which keeps the undo and redo
stacks of a `TextBuffer`.

A comment toggle touches many lines but must undo as a single step, so it is
recorded as one action holding, for every changed line, the text before and
after the toggle together with the caret and selection state on both sides.

Key Features:
-------------
- Multi-level undo and redo of toggle actions (`comment_block`,
  `uncomment_block`).
- Failed restores are logged, the action is put back on its stack and the
  buffer's status message reports the failure.

Classes:
--------
- History: Manages the undo and redo stacks.
"""

import logging
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from togglecomment.core.TextBuffer import TextBuffer


LINE_ACTIONS = ("comment_block", "uncomment_block")


## ==================== History Class (Undo/Redo) ====================
class History:
    """Undo/redo history for one buffer.

    Attributes:
        buffer (TextBuffer): The buffer this history belongs to.
        _action_history (list[dict[str, Any]]): Stack of performed actions for undo.
        _undone_actions (list[dict[str, Any]]): Stack of undone actions for redo.

    Each action is a dictionary with a ``type`` key. Line actions also carry
    ``changes`` (a list of ``{"line_index", "original_text", "new_text"}``),
    ``cursor_before``/``cursor_after`` as ``(y, x)`` and
    ``selection_before``/``selection_after`` as
    ``(is_selecting, selection_start, selection_end)``.
    """

    def __init__(self, buffer: "TextBuffer") -> None:
        self.buffer = buffer
        self._action_history: list[dict[str, Any]] = []
        self._undone_actions: list[dict[str, Any]] = []

    def add_action(self, action: dict[str, Any]) -> None:
        """Adds a new action to the history."""
        if not isinstance(action, dict) or "type" not in action:
            logging.warning(f"History: Attempted to add invalid action: {action}")
            return

        self._action_history.append(action)
        self._undone_actions.clear()

        logging.debug(f"History: Action '{action['type']}' added. History size: {len(self._action_history)}")

    def clear(self) -> None:
        """Clears both undo and redo stacks."""
        self._action_history.clear()
        self._undone_actions.clear()
        logging.debug("History: Undo/Redo stacks cleared.")

    @property
    def can_undo(self) -> bool:
        return bool(self._action_history)

    @property
    def can_redo(self) -> bool:
        return bool(self._undone_actions)

    def undo(self) -> bool:
        """Undoes the last action, restoring line texts, caret and selection.

        Returns:
            bool: True if the buffer's text or caret changed.
        """
        with self.buffer._state_lock:
            if not self._action_history:
                self.buffer._set_status_message("Nothing to undo")
                return False

            action = self._action_history.pop()
            action_type = action.get("type")
            logging.debug(f"Undo: Attempting to undo action of type '{action_type}'.")

            try:
                changed = self._restore(action, "original_text", reverse=True)
                self._restore_caret(action, "before")
            except (IndexError, KeyError) as e:
                logging.error(f"Undo: Could not undo '{action_type}': {e}", exc_info=True)
                self._action_history.append(action)
                self.buffer._set_status_message(f"Undo error for '{action_type}'.")
                return False

            self._undone_actions.append(action)
            self.buffer.modified = bool(self._action_history)
            self.buffer._ensure_cursor_in_bounds()
            self.buffer._set_status_message("Action undone")
            return changed

    def redo(self) -> bool:
        """Re-applies the last undone action.

        Returns:
            bool: True if the buffer's text or caret changed.
        """
        with self.buffer._state_lock:
            if not self._undone_actions:
                self.buffer._set_status_message("Nothing to redo")
                return False

            action = self._undone_actions.pop()
            action_type = action.get("type")
            logging.debug(f"Redo: Attempting to redo action of type '{action_type}'.")

            try:
                changed = self._restore(action, "new_text", reverse=False)
                self._restore_caret(action, "after")
            except (IndexError, KeyError) as e:
                logging.error(f"Redo: Could not redo '{action_type}': {e}", exc_info=True)
                self._undone_actions.append(action)
                self.buffer._set_status_message(f"Redo error for '{action_type}'.")
                return False

            self._action_history.append(action)
            if changed:
                self.buffer.modified = True
            self.buffer._ensure_cursor_in_bounds()
            self.buffer._set_status_message("Action redone")
            return changed

    def _restore(self, action: dict[str, Any], text_key: str, reverse: bool) -> bool:
        """Writes `text_key` of every change of a line action back into the buffer."""
        action_type = action.get("type")
        if action_type not in LINE_ACTIONS:
            raise KeyError(f"unknown action type '{action_type}'")

        changes = action.get("changes", [])
        if not changes:
            logging.warning(f"History ({action_type}): No 'changes' data in action.")

        text = self.buffer.text
        # Validate everything first so a failed restore leaves the text untouched.
        for change in changes:
            idx = change["line_index"]
            if not 0 <= idx < len(text):
                raise IndexError(f"line {idx} out of bounds for text len {len(text)}")
            if text_key not in change:
                raise KeyError(f"change for line {idx} has no '{text_key}'")

        changed = False
        for change in reversed(changes) if reverse else changes:
            idx = change["line_index"]
            if text[idx] != change[text_key]:
                text[idx] = change[text_key]
                changed = True
        return changed

    def _restore_caret(self, action: dict[str, Any], side: str) -> None:
        cursor = action.get(f"cursor_{side}")
        if cursor is not None:
            self.buffer.cursor_y, self.buffer.cursor_x = cursor
        selection = action.get(f"selection_{side}")
        if selection is not None:
            (
                self.buffer.is_selecting,
                self.buffer.selection_start,
                self.buffer.selection_end,
            ) = selection
