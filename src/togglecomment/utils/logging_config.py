# togglecomment/utils/logging_config.py
"""togglecomment.utils.logging_config
====================================

Logging configuration for togglecomment.

Features:
    - Rotating file log (``togglecomment.log`` by default) for everything at
      or above ``file_level``.
    - Optional console logging to stderr with its own level.
    - Optional separate ``error.log`` for ERROR and CRITICAL events.
    - Log directories are created on demand, with a fallback to the system
      temp directory when that fails.
    - Safe reconfiguration: handlers installed by a previous call are
      replaced, so calling it twice (e.g. in tests) does not duplicate output.
    - Never raises; set-up problems are reported on stderr.

Usage:
    >>> from togglecomment.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"console_level": "INFO"}})

Globals:
    logger: Main application logger ("togglecomment").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


logger = logging.getLogger("togglecomment")

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"


def _ensure_log_dir(filename: str, fallback_name: str) -> str:
    """Creates the directory of `filename`; returns a temp-dir path if that fails."""
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            filename = os.path.join(tempfile.gettempdir(), fallback_name)
            print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
    return filename


def _rotating_handler(
    filename: str, level: int, max_bytes: int, backup_count: int
) -> Optional[logging.Handler]:
    try:
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    except OSError as e_fh:
        print(
            f"Error setting up file logger for '{filename}': {e_fh}. File logging may be impaired.",
            file=sys.stderr,
        )
        return None
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    handler.setLevel(level)
    return handler


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Only the ``["logging"]`` section of `config` is consulted; recognised
    keys are:

    - ``file_level`` (str): Level for the main log file. Default ``"DEBUG"``.
    - ``log_file`` (str): Main log file path. Default ``"togglecomment.log"``.
    - ``console_level`` (str): Level for stderr output. Default ``"WARNING"``.
    - ``log_to_console`` (bool): Enable the console handler. Default ``True``.
    - ``separate_error_log`` (bool): Also write ``error.log``. Default ``False``.

    Side Effects:
        Replaces all handlers on the root logger.

    Example:
        >>> setup_logging({"logging": {"file_level": "INFO", "log_to_console": False}})
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    file_level = getattr(logging, file_level_str, logging.DEBUG)

    log_filename = _ensure_log_dir(
        os.path.expanduser(str(logging_config.get("log_file", "togglecomment.log"))), "togglecomment.log"
    )
    file_handler = _rotating_handler(log_filename, file_level, 2 * 1024 * 1024, 5)

    console_handler = None
    if logging_config.get("log_to_console", True):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_log_filename = _ensure_log_dir(
            os.path.join(os.path.dirname(log_filename), "error.log"), "togglecomment-error.log"
        )
        error_file_handler = _rotating_handler(error_log_filename, logging.ERROR, 1 * 1024 * 1024, 3)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)

    # Root must pass everything any handler wants.
    levels = [h.level for h in root_logger.handlers] or [file_level]
    root_logger.setLevel(min(levels))

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}.")
    if error_file_handler:
        logging.info("Error logging to 'error.log' at level: ERROR.")
