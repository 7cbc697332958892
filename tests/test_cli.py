# tests/test_cli.py
"""Tests for the `togglecomment` command line tool.

Every test passes an explicit configuration (a file from the
`c_profile_config_file` fixture or a dictionary), so the user's own
configuration directory is never read.
"""

from pathlib import Path

import pytest

from togglecomment.cli import EXIT_NO_PROFILE, EXIT_OK, EXIT_USAGE, main, parse_caret_spec
from togglecomment.core import CaretSpan


@pytest.fixture
def c_file(tmp_path: Path) -> Path:
    path = tmp_path / "main.c"
    path.write_text("int a;\n  b();\n", encoding="utf-8")
    return path


def test_parse_caret_spec() -> None:
    assert parse_caret_spec("3") == CaretSpan.at(2)
    assert parse_caret_spec("2-4") == CaretSpan(1, 3, True)
    assert parse_caret_spec("4-2") == CaretSpan(1, 3, True)


def test_single_line_to_stdout(c_file, c_profile_config_file, capsys) -> None:
    status = main([str(c_file), "-l", "2", "--config", str(c_profile_config_file)])

    captured = capsys.readouterr()
    assert status == EXIT_OK
    assert captured.out == "int a;\n  // b();\n"
    assert "Added '// ' to 1 line(s)" in captured.err
    assert c_file.read_text(encoding="utf-8") == "int a;\n  b();\n"


def test_range_written_back(c_file, c_profile_config_file, capsys) -> None:
    status = main([str(c_file), "-l", "1-2", "--write", "--config", str(c_profile_config_file)])

    assert status == EXIT_OK
    assert capsys.readouterr().out == ""
    assert c_file.read_text(encoding="utf-8") == "// int a;\n  // b();\n"


def test_language_override(tmp_path: Path, capsys) -> None:
    path = tmp_path / "init.zzz"
    path.write_text("x = 1", encoding="utf-8")
    config = {"custom_comments": [{"markers": ["-- "], "language": "lua"}]}

    assert main([str(path), "--language", "lua"], config=config) == EXIT_OK
    assert capsys.readouterr().out == "-- x = 1"


def test_no_matching_profile(tmp_path: Path, c_profile_config_file) -> None:
    path = tmp_path / "notes.zzz"
    path.write_text("hello\n", encoding="utf-8")

    assert main([str(path), "-l", "1", "--config", str(c_profile_config_file)]) == EXIT_NO_PROFILE


@pytest.mark.parametrize("spec", ["x", "0", "2-", "99"])
def test_bad_line_specs(c_file, c_profile_config_file, spec) -> None:
    assert main([str(c_file), "-l", spec, "--config", str(c_profile_config_file)]) == EXIT_USAGE


def test_missing_inputs(tmp_path: Path, c_file, c_profile_config_file) -> None:
    assert main([str(tmp_path / "missing.c"), "--config", str(c_profile_config_file)]) == EXIT_USAGE
    assert main([str(c_file), "--config", str(tmp_path / "missing.toml")]) == EXIT_USAGE
    assert main(["--config", str(c_profile_config_file)]) == EXIT_USAGE


def test_unknown_option_exits_with_usage_status(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--bogus"], config={})

    assert excinfo.value.code == EXIT_USAGE
    assert "unrecognized arguments" in capsys.readouterr().err


def test_list_profiles(c_profile_config_file, capsys) -> None:
    assert main(["--list", "--config", str(c_profile_config_file)]) == EXIT_OK
    assert capsys.readouterr().out == "1. Extensions: c, h [After whitespace] markers: '// '\n"

    assert main(["--list"], config={"custom_comments": []}) == EXIT_OK
    assert capsys.readouterr().out == "No comment profiles configured.\n"
