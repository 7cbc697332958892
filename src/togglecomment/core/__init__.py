# src/togglecomment/core/__init__.py
"""Public facade for togglecomment.core: re-export main classes from CamelCase modules.

Keeps Java-like file names (CodeCommenter.py, History.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .AlignmentMemory import AlignmentMemory  # noqa: F401
from .CodeCommenter import CaretSpan, CodeCommenter, collect_target_lines  # noqa: F401
from .CommentConfiguration import CommentConfiguration, InsertPosition  # noqa: F401
from .ConfigMatcher import ConfigMatcher, match_configuration  # noqa: F401
from .EditPlan import CaretMove, EditPlan, TextEdit, apply_to_text  # noqa: F401
from .History import History  # noqa: F401
from .TextBuffer import TextBuffer  # noqa: F401


__all__ = [
    "AlignmentMemory",
    "CaretMove",
    "CaretSpan",
    "CodeCommenter",
    "CommentConfiguration",
    "ConfigMatcher",
    "EditPlan",
    "History",
    "InsertPosition",
    "TextBuffer",
    "TextEdit",
    "apply_to_text",
    "collect_target_lines",
    "match_configuration",
]
