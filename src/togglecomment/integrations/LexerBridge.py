# togglecomment/integrations/LexerBridge.py
"""LexerBridge Module
==================
Resolves the match key of a file, that is its extension and language id,
for `ConfigMatcher`.

The language id comes from Pygments, the same way the editor picks a syntax
highlighter: first by file name, then by guessing from the content. The
plain-text lexer is never reported as a language, so unknown files fall back
to extension-only matching. Pygments problems never propagate; they are
logged and the language id is simply left out.
"""

import logging
from pathlib import Path
from typing import Optional

from pygments.lexers import TextLexer, get_lexer_for_filename, guess_lexer
from pygments.util import ClassNotFound


# Guessing from a huge buffer is slow and the first screens are enough.
CONTENT_SAMPLE_LIMIT = 10000


def file_extension(path: Path) -> Optional[str]:
    """Returns the lower-case extension without the dot, or None."""
    suffix = Path(path).suffix
    return suffix[1:].lower() if len(suffix) > 1 else None


def detect_language(path: Optional[Path], text: Optional[str] = None) -> Optional[str]:
    """Returns a Pygments-based language id (the lexer's primary alias), or None."""
    lexer = None
    if path is not None and Path(path).name:
        try:
            lexer = get_lexer_for_filename(Path(path).name)
            logging.debug(f"Pygments: Detected '{lexer.name}' by filename.")
        except ClassNotFound:
            logging.debug(f"Pygments: No lexer for filename '{Path(path).name}'.")

    if lexer is None and text and text.strip():
        try:
            lexer = guess_lexer(text[:CONTENT_SAMPLE_LIMIT])
            logging.debug(f"Pygments: Guessed '{lexer.name}' from content.")
        except ClassNotFound:
            logging.debug("Pygments: Could not guess a lexer from content.")

    if lexer is None or isinstance(lexer, TextLexer):
        return None
    return lexer.aliases[0] if lexer.aliases else lexer.name.lower()


def resolve_match_key(
    path: Path, text: Optional[str] = None
) -> tuple[Optional[str], Optional[str]]:
    """Returns ``(extension, language_id)`` for `path`; either may be None."""
    return file_extension(path), detect_language(path, text)


def extension_only(path: Path, text: Optional[str] = None) -> tuple[Optional[str], Optional[str]]:
    """Resolver that ignores the language, for hosts without language detection."""
    return file_extension(path), None
