# togglecomment/core/AlignmentMemory.py
"""AlignmentMemory Module
======================
Cross-invocation memory that lets repeated single-line toggles build a
vertically aligned block of markers one line at a time.

The memory is a single slot: the column used by the last aligned add pass,
the buffer it happened in and the last line it touched. A new invocation
continues that alignment only when it targets the same buffer and starts on
the line right after the remembered one. Any removal, or an add pass under a
non-aligning policy, clears the slot.

The slot is shared by every buffer that uses the same instance, so all reads
and writes go through `lock`. `CodeCommenter` holds the lock for the whole
toggle so that the continuity check and the final write are one unit.
"""

import logging
import threading
from typing import Any, Hashable, Optional


class AlignmentMemory:
    """Single-slot record of the last aligned insertion.

    Attributes:
        last_column: Column of the last marker placed by an aligned add pass,
            or None if the pass produced no column.
        buffer_id: Identity token of the buffer that pass ran in.
        last_line: Last line number processed by that pass.
        lock: Re-entrant lock serializing access to the slot.
    """

    def __init__(self) -> None:
        self.last_column: Optional[int] = None
        self.buffer_id: Optional[Hashable] = None
        self.last_line: Optional[int] = None
        self.lock = threading.RLock()

    def continues(self, buffer_id: Optional[Hashable], first_line: int) -> bool:
        """True if an invocation starting at `first_line` continues the last one."""
        with self.lock:
            return (
                self.last_line is not None
                and buffer_id is not None
                and buffer_id == self.buffer_id
                and first_line == self.last_line + 1
            )

    def record(
        self, column: Optional[int], buffer_id: Optional[Hashable], line: int
    ) -> None:
        with self.lock:
            self.last_column = column
            self.buffer_id = buffer_id
            self.last_line = line
        logging.debug(f"AlignmentMemory: recorded column={column} line={line} buffer={buffer_id!r}")

    def reset(self) -> None:
        with self.lock:
            was_set = self.last_line is not None
            self.last_column = None
            self.buffer_id = None
            self.last_line = None
        if was_set:
            logging.debug("AlignmentMemory: cleared.")

    def snapshot(self) -> dict[str, Any]:
        """Returns the current slot as a plain dictionary."""
        with self.lock:
            return {
                "last_column": self.last_column,
                "buffer_id": self.buffer_id,
                "last_line": self.last_line,
            }

    def __repr__(self) -> str:
        return (
            f"AlignmentMemory(last_column={self.last_column!r}, "
            f"buffer_id={self.buffer_id!r}, last_line={self.last_line!r})"
        )
