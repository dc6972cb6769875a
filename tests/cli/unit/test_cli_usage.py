"""CLI usage and error-handling tests."""

from __future__ import annotations

from pathlib import Path

from tf_schema_diff import __version__
from tf_schema_diff.cli.main import main


def test_missing_arguments_print_usage(capsys) -> None:
    exit_code = main([])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Usage:" in captured.err
    assert "Missing argument" in captured.err
    assert "Traceback" not in captured.err


def test_missing_after_argument_prints_usage(write_document, capsys) -> None:
    before = write_document("before.json", {"a": ["x"]})

    exit_code = main([str(before)])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "AFTER" in captured.err


def test_nonexistent_input_file_is_a_usage_error(tmp_path: Path, capsys) -> None:
    exit_code = main([str(tmp_path / "a.json"), str(tmp_path / "b.json")])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "does not exist" in captured.err


def test_invalid_config_file_exits_with_configuration_error(
    write_document, tmp_path: Path, capsys
) -> None:
    before = write_document("before.json", {"a": ["x"]})
    after = write_document("after.json", {"a": ["x"]})
    config = tmp_path / "config.yaml"
    config.write_text("oracle:\n  on_error: sometimes\n", encoding="utf-8")

    exit_code = main([str(before), str(after), "--config", str(config)])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Configuration Error" in captured.err


def test_version_option(capsys) -> None:
    exit_code = main(["--version"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert __version__ in captured.out


def test_run_without_api_key_succeeds_when_oracle_not_needed(
    write_document, tmp_path: Path
) -> None:
    before = write_document("before.json", {"a": ["x", "y"]})
    after = write_document("after.json", {"a": ["x"], "b": ["z"]})
    output = tmp_path / "output.json"

    exit_code = main([str(before), str(after), "-o", str(output), "--no-summary"])

    assert exit_code == 0
    assert output.exists()


def test_run_without_api_key_fails_when_oracle_needed(
    write_document, tmp_path: Path, capsys
) -> None:
    before = write_document("before.json", {"a": ["x", "y"]})
    after = write_document("after.json", {"a": ["x", "z"]})
    output = tmp_path / "output.json"

    exit_code = main([str(before), str(after), "-o", str(output)])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "CLAUDE_API_KEY" in captured.err
    assert not output.exists()
