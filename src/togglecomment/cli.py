# togglecomment/cli.py
"""Command line entry point for togglecomment.

Toggles line comments in one file, driven by the same engine an editor
would use. Each ``-l`` option places one caret:

    togglecomment src/main.c -l 12            # caret on line 12
    togglecomment src/main.c -l 3-8 -l 20     # lines 3..8 plus line 20
    togglecomment src/main.c -l 3-8 --write   # rewrite the file in place

The result goes to stdout unless ``--write`` is given. Exit status is 0 on
success, 1 for bad arguments or an unreadable file and 2 when no comment
profile matches the file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional, Sequence

from togglecomment import __version__
from togglecomment.core import CaretSpan, CodeCommenter, ConfigMatcher, TextBuffer
from togglecomment.integrations.LexerBridge import file_extension, resolve_match_key
from togglecomment.utils.logging_config import setup_logging
from togglecomment.utils.utils import load_config, read_text_file, write_text_file


logger = logging.getLogger("togglecomment")

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_NO_PROFILE = 2


class UsageError(ValueError):
    """Invalid command line input discovered after argument parsing."""


class ToggleArgumentParser(argparse.ArgumentParser):
    """Reports usage errors with exit status 1 instead of argparse's 2."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    p = ToggleArgumentParser(
        prog="togglecomment",
        description="Toggle line comments using the configured comment profiles.",
        epilog=(
            "examples:\n"
            "  togglecomment main.c -l 12\n"
            "  togglecomment main.c -l 3-8 -l 20 --write\n"
            "  togglecomment --list"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("file", nargs="?", type=Path, help="file to toggle comments in")
    p.add_argument(
        "-l",
        "--line",
        dest="lines",
        action="append",
        default=[],
        metavar="SPEC",
        help="caret: N (line N) or A-B (selection of lines A..B), 1-based; repeatable",
    )
    p.add_argument("--language", metavar="ID", help="language id to match instead of detecting it")
    p.add_argument("--config", type=Path, metavar="PATH", help="use this config.toml")
    p.add_argument("--write", action="store_true", help="write the result back to FILE")
    p.add_argument("--list", action="store_true", help="list the configured comment profiles and exit")
    return p


def parse_caret_spec(spec: str) -> CaretSpan:
    """Parses ``N`` or ``A-B`` (1-based, inclusive) into a 0-based `CaretSpan`."""
    raw = spec.strip()
    start_raw, sep, end_raw = raw.partition("-")
    try:
        start = int(start_raw)
        end = int(end_raw) if sep else start
    except ValueError:
        raise UsageError(f"invalid line spec '{spec}' (expected N or A-B)") from None
    if start < 1 or end < 1:
        raise UsageError(f"line numbers start at 1: '{spec}'")
    if not sep:
        return CaretSpan.at(start - 1)
    return CaretSpan(min(start, end) - 1, max(start, end) - 1, True)


def _list_profiles(matcher: ConfigMatcher) -> None:
    if not len(matcher):
        print("No comment profiles configured.")
        return
    for index, config in enumerate(matcher.configurations, start=1):
        markers = ", ".join(repr(m) for m in config.markers) or "(none)"
        print(f"{index}. {config.display_name} [{config.position_display_name}] markers: {markers}")


def main(argv: Optional[Sequence[str]] = None, config: Optional[dict[str, Any]] = None) -> int:
    """Runs the command line tool and returns its exit status.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv[1:]``.
        config: Already loaded configuration. Ignored when ``--config`` is
            given; loaded from the user configuration when None.
    """
    args = build_parser().parse_args(argv)

    if args.config is not None:
        if not args.config.is_file():
            print(f"togglecomment: config file not found: {args.config}", file=sys.stderr)
            return EXIT_USAGE
        config = load_config(args.config)
    elif config is None:
        config = load_config()

    matcher = ConfigMatcher.from_config(config)
    if args.list:
        _list_profiles(matcher)
        return EXIT_OK

    if args.file is None:
        print("togglecomment: a FILE is required unless --list is given", file=sys.stderr)
        return EXIT_USAGE

    try:
        carets = [parse_caret_spec(spec) for spec in args.lines] or [CaretSpan.at(0)]
    except UsageError as e:
        print(f"togglecomment: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        content, encoding = read_text_file(args.file)
    except OSError as e:
        logger.error(f"Could not read '{args.file}': {e}")
        print(f"togglecomment: cannot read {args.file}: {e}", file=sys.stderr)
        return EXIT_USAGE

    buffer = TextBuffer.from_text(content, filename=str(args.file))
    out_of_range = [c for c in carets if c.end_line >= buffer.line_count()]
    if out_of_range:
        print(
            f"togglecomment: line {out_of_range[0].end_line + 1} is past the end of "
            f"{args.file} ({buffer.line_count()} lines)",
            file=sys.stderr,
        )
        return EXIT_USAGE

    if args.language:
        profile = matcher.find(file_extension(args.file), args.language)
    else:
        profile = matcher.find_for_path(args.file, resolve_match_key, content)
    if profile is None:
        print(f"togglecomment: no comment profile matches {args.file}", file=sys.stderr)
        return EXIT_NO_PROFILE

    changed = buffer.toggle_comment(CodeCommenter(), profile, carets)
    print(buffer.status_message, file=sys.stderr)

    if args.write:
        if changed:
            try:
                write_text_file(args.file, buffer.content, encoding)
            except OSError as e:
                logger.error(f"Could not write '{args.file}': {e}")
                print(f"togglecomment: cannot write {args.file}: {e}", file=sys.stderr)
                return EXIT_USAGE
            logger.info(f"Wrote {args.file} ({buffer.status_message}).")
    else:
        sys.stdout.write(buffer.content)
    return EXIT_OK


def start() -> None:
    """Console script entry point: configure logging, then run `main`."""
    config = load_config()
    setup_logging(config)
    sys.exit(main(config=config))


if __name__ == "__main__":
    start()
