# togglecomment/core/ConfigMatcher.py
"""Resolves which comment profile applies to a file.

Matching is a pure function of the file's match key (extension and/or
language id) and an ordered list of profiles:

1. If a language id is known, the first profile whose language equals it
   (case-insensitive) wins.
2. Otherwise the first profile whose extension set contains the extension
   (case-insensitive) wins.
3. Otherwise there is no match.

There is no implicit priority beyond language-over-extension; callers own
the list order.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from togglecomment.core.CommentConfiguration import CommentConfiguration


logger = logging.getLogger("togglecomment")

# resolve(path, text) -> (extension, language_id)
MatchKeyResolver = Callable[
    [Path, Optional[str]], tuple[Optional[str], Optional[str]]
]


def match_configuration(
    extension: Optional[str],
    language_id: Optional[str],
    configs: Sequence[CommentConfiguration],
) -> Optional[CommentConfiguration]:
    """Returns the first profile matching the language id, else the extension."""
    if language_id:
        for config in configs:
            if config.matches_language(language_id):
                logger.debug(f"Matched comment profile '{config.display_name}' by language '{language_id}'.")
                return config

    if extension:
        for config in configs:
            if config.matches_extension(extension):
                logger.debug(f"Matched comment profile '{config.display_name}' by extension '{extension}'.")
                return config

    return None


def configurations_from_config(config: Mapping[str, Any]) -> list[CommentConfiguration]:
    """Builds the ordered profile list from the `custom_comments` config section.

    Entries that are not tables are skipped with a warning, the rest keep
    their order.
    """
    raw_entries = config.get("custom_comments", [])
    if isinstance(raw_entries, Mapping):
        # A single [custom_comments] table instead of an array of tables.
        raw_entries = [raw_entries]

    configurations: list[CommentConfiguration] = []
    for index, entry in enumerate(raw_entries or []):
        if not isinstance(entry, Mapping):
            logger.warning(f"custom_comments[{index}] is not a table; skipping it.")
            continue
        configurations.append(CommentConfiguration.from_dict(entry))
    return configurations


class ConfigMatcher:
    """Holds an ordered profile list and answers match queries against it."""

    def __init__(self, configurations: Iterable[CommentConfiguration] = ()) -> None:
        self.configurations: list[CommentConfiguration] = list(configurations)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ConfigMatcher":
        return cls(configurations_from_config(config))

    def find(
        self, extension: Optional[str], language_id: Optional[str] = None
    ) -> Optional[CommentConfiguration]:
        return match_configuration(extension, language_id, self.configurations)

    def find_for_path(
        self,
        path: Path,
        resolver: MatchKeyResolver,
        text: Optional[str] = None,
    ) -> Optional[CommentConfiguration]:
        """Resolves the match key of `path` with `resolver`, then matches it."""
        extension, language_id = resolver(Path(path), text)
        config = self.find(extension, language_id)
        if config is None:
            logger.info(
                f"No comment profile for '{path}' (extension={extension!r}, language={language_id!r})."
            )
        return config

    def __len__(self) -> int:
        return len(self.configurations)
