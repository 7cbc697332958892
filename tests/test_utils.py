# tests/test_utils.py
"""Unit tests for utility functions in the `togglecomment.utils` module.

Configuration loading is exercised against a temporary HOME so the real
`~/.config/togglecomment` is never touched.
"""

from pathlib import Path

import pytest

from togglecomment.utils import utils


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Points HOME at a temporary directory and neutralizes the config env var."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv(utils.CONFIG_ENV_VAR, "")
    return home


def test_deep_merge() -> None:
    """Verify that `deep_merge` correctly merges nested dictionaries.

    This test ensures:
    - Existing values are preserved if not overridden.
    - Nested dictionaries are merged recursively.
    - Conflicting keys are overridden by values from the second dictionary.
    """
    base = {"a": 1, "b": {"x": 10, "y": 20}}
    override = {"b": {"y": 99, "z": 100}, "c": 3}
    result = utils.deep_merge(base, override)
    expected = {"a": 1, "b": {"x": 10, "y": 99, "z": 100}, "c": 3}
    assert result == expected
    assert base == {"a": 1, "b": {"x": 10, "y": 20}}


def test_first_run_creates_user_files(fake_home: Path) -> None:
    config = utils.load_config()

    config_dir = fake_home / ".config" / "togglecomment"
    assert (config_dir / "config.toml").is_file()
    assert (config_dir / ".env").is_file()
    assert config["custom_comments"] == utils.DEFAULT_CONFIG["custom_comments"]


def test_user_profiles_replace_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        '[logging]\nfile_level = "INFO"\n\n[[custom_comments]]\nmarkers = ["# "]\nextensions = ["py"]\n',
        encoding="utf-8",
    )

    config = utils.load_config(path)

    assert config["custom_comments"] == [{"markers": ["# "], "extensions": ["py"]}]
    assert config["logging"]["file_level"] == "INFO"
    assert config["logging"]["log_to_console"] is True


def test_broken_or_missing_config_falls_back(tmp_path: Path) -> None:
    broken = tmp_path / "broken.toml"
    broken.write_text("this is not toml\n", encoding="utf-8")

    assert utils.load_config(broken) == utils.DEFAULT_CONFIG
    assert utils.load_config(tmp_path / "missing.toml") == utils.DEFAULT_CONFIG


def test_env_var_selects_config(fake_home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "other.toml"
    path.write_text('[[custom_comments]]\nmarkers = [";"]\nextensions = ["ini"]\n', encoding="utf-8")
    monkeypatch.setenv(utils.CONFIG_ENV_VAR, str(path))

    assert utils.resolve_config_path() == path
    assert utils.load_config()["custom_comments"][0]["markers"] == [";"]


def test_read_text_file_detects_utf8(tmp_path: Path) -> None:
    path = tmp_path / "ru.c"
    text = "// Привет, мир\r\nint x; // переменная\r\n"
    path.write_bytes(text.encode("utf-8"))

    content, encoding = utils.read_text_file(path)

    assert content == text
    assert encoding.lower().replace("_", "-") in ("utf-8", "utf-8-sig")


def test_read_text_file_empty_and_missing(tmp_path: Path) -> None:
    empty = tmp_path / "empty.c"
    empty.write_bytes(b"")

    assert utils.read_text_file(empty) == ("", "utf-8")
    with pytest.raises(OSError):
        utils.read_text_file(tmp_path / "nope.c")


def test_write_text_file_keeps_crlf(tmp_path: Path) -> None:
    path = tmp_path / "out.c"

    utils.write_text_file(path, "a\r\nb", "utf-8")

    assert path.read_bytes() == b"a\r\nb"
