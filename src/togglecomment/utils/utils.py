# togglecomment/utils/utils.py
"""
togglecomment.utils.utils
=========================

Core utility functions for togglecomment.

Key functionalities include:
- Automatic User Configuration: Creates `config.toml` and `.env` templates in
  `~/.config/togglecomment` on first run.
- Robust Configuration Loading: Starts from a built-in default configuration
  and recursively merges the user's TOML file over it. A missing or broken
  file never stops the tool; it falls back to the defaults.
- Environment: `~/.config/togglecomment/.env` is loaded with python-dotenv,
  so `TOGGLECOMMENT_CONFIG` can point at another configuration file.
- File I/O: Reads files with chardet-assisted encoding detection and writes
  them back in the same encoding.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import chardet
import toml
from dotenv import load_dotenv


logger = logging.getLogger("togglecomment")

CONFIG_ENV_VAR = "TOGGLECOMMENT_CONFIG"

ENV_TEMPLATE = """# Environment for togglecomment
# Point this at another config.toml to override ~/.config/togglecomment/config.toml
TOGGLECOMMENT_CONFIG=
"""

# The ultimate fallback, ensuring the tool can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": True,
        "separate_error_log": False,
        "log_file": "~/.config/togglecomment/togglecomment.log",
    },
    "custom_comments": [
        {
            "markers": ["// "],
            "extensions": ["c", "cpp", "cc", "cxx", "h", "hpp", "hh"],
            "insert_position": "align_to_previous",
            "skip_empty_lines": False,
            "indent_empty_lines": False,
        },
    ],
}

# chardet guesses below this confidence are not trusted.
MIN_ENCODING_CONFIDENCE = 0.75
ENCODING_SAMPLE_SIZE = 1024 * 20


# --- Helper Functions ---

def config_dir() -> Path:
    return Path.home() / ".config" / "togglecomment"


def ensure_user_config_exists() -> None:
    """Checks for user config files in `~/.config/togglecomment` and creates them if missing."""
    try:
        directory = config_dir()
        user_config_path = directory / "config.toml"
        user_env_path = directory / ".env"

        directory.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            user_config_path.write_text(toml.dumps(DEFAULT_CONFIG), encoding="utf-8")
            logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except OSError as e:
        logger.critical(f"Could not create user configuration files: {e}", exc_info=True)


def load_environment() -> None:
    """Loads `~/.config/togglecomment/.env` without overriding the real environment."""
    env_path = config_dir() / ".env"
    if env_path.is_file():
        load_dotenv(dotenv_path=env_path, override=False)


def resolve_config_path(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Explicit path, then `$TOGGLECOMMENT_CONFIG`, then the user config file."""
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    return config_dir() / "config.toml"


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the tool can always run.

    Lists (such as `custom_comments`) are replaced, not merged: a user file
    that defines `[[custom_comments]]` fully owns the profile list.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    if path is None:
        ensure_user_config_exists()
        load_environment()

    config_path = resolve_config_path(path)
    if config_path.is_file():
        try:
            user_config = toml.load(config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{config_path}': {e}. Using defaults.")
    elif path is not None:
        logger.warning(f"Config file '{config_path}' not found. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def read_text_file(path: Union[str, Path]) -> Tuple[str, str]:
    """
    Reads a text file, detecting its encoding.

    A confident chardet guess is tried first, then UTF-8, then latin-1
    (which always decodes).

    Returns:
        A ``(text, encoding)`` tuple.

    Raises:
        OSError: If the file cannot be read.
    """
    raw = Path(path).read_bytes()
    if not raw:
        return "", "utf-8"

    guess = chardet.detect(raw[:ENCODING_SAMPLE_SIZE])
    encoding_guess = guess.get("encoding")
    confidence = guess.get("confidence") or 0.0
    logger.debug(f"Chardet detected encoding '{encoding_guess}' with confidence {confidence:.2f} for '{path}'.")

    candidates = []
    if encoding_guess and confidence >= MIN_ENCODING_CONFIDENCE:
        candidates.append(encoding_guess)
    if "utf-8" not in candidates:
        candidates.append("utf-8")

    for encoding in candidates:
        try:
            return raw.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Decoding '{path}' as {encoding} failed, trying the next encoding.")
    # latin-1 maps every byte.
    return raw.decode("latin-1"), "latin-1"


def write_text_file(path: Union[str, Path], text: str, encoding: str = "utf-8") -> None:
    """Writes `text` back without newline translation."""
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(text)
