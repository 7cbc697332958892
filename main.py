#!/usr/bin/env python3
# /togglecomment/main.py
"""
togglecomment Main Entry Point
==============================

Runs the command line tool straight from a source checkout:
1) Path Setup: ensures the togglecomment package under src/ is importable.
2) Configuration & Logging: loads config and initializes logging first.
3) CLI Import: imports the command line module after logging is ready.
4) Run: hands the remaining arguments to the CLI and exits with its status.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

# --- Step 1: Set up the Python Path ---
project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# --- Step 2: Immediate Logging and Configuration Setup ---
try:
    from togglecomment.utils.logging_config import setup_logging
    from togglecomment.utils.utils import load_config

    config: dict[str, Any] = load_config()
    setup_logging(config)
    logger = logging.getLogger("togglecomment")
except Exception as e:
    # Logging is not ready; print to stderr and exit.
    print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
    import traceback
    traceback.print_exc()
    sys.exit(1)

# --- Step 3: Import the CLI ---
try:
    from togglecomment.cli import main
except ImportError as e:
    logger.critical("Failed to import a critical application component: %s", e, exc_info=True)
    sys.exit(1)


if __name__ == "__main__":
    logger.info("togglecomment starting...")
    try:
        sys.exit(main(sys.argv[1:], config=config))
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)
