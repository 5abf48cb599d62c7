from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from tallysheet import __version__
from tallysheet.cli.main import cli

BUDGET = "1000 Salary\n[10, 50] Groceries\n100/12 Streaming\n-----\nLeft over\n\n"


def _sheet(tmp_path: Path, text: str = BUDGET) -> Path:
    path = tmp_path / "budget.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_prints_formatted_worksheet(tmp_path: Path) -> None:
    path = _sheet(tmp_path, "1 a\n22 b\n")

    result = CliRunner().invoke(cli, [str(path)])

    assert result.exit_code == 0
    assert result.stdout == " 1 a\n22 b\n"
    assert path.read_text(encoding="utf-8") == "1 a\n22 b\n"


def test_in_place_remainder_mode(tmp_path: Path) -> None:
    path = _sheet(tmp_path)

    result = CliRunner().invoke(cli, [str(path), "--in-place", "--mode", "remainder"])

    assert result.exit_code == 0
    assert path.read_text(encoding="utf-8").endswith(
        "----------------\n[941.67, 981.67] Left over\n\n"
    )


def test_output_file_with_expressions(tmp_path: Path) -> None:
    path = _sheet(tmp_path)
    target = tmp_path / "out.txt"

    result = CliRunner().invoke(cli, [str(path), "-o", str(target), "--expressions"])

    assert result.exit_code == 0
    content = target.read_text(encoding="utf-8")
    assert "100 / 12 Streaming\n" in content
    assert "[1018.33, 1058.33] Left over\n" in content


def test_config_file_and_precision_override(tmp_path: Path) -> None:
    path = _sheet(tmp_path, "1/3\n")
    config = tmp_path / "tallysheet.yaml"
    config.write_text("format:\n  precision: 4\n", encoding="utf-8")
    target = tmp_path / "out.txt"

    result = CliRunner().invoke(cli, [str(path), "-c", str(config), "-o", str(target)])
    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "0.3333\n"

    result = CliRunner().invoke(
        cli, [str(path), "-c", str(config), "-p", "1", "-o", str(target)]
    )
    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8") == "0.3\n"


def test_missing_input_exits_non_zero(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, [str(tmp_path / "missing.txt")])
    assert result.exit_code == 1


def test_invalid_precision_is_a_config_error(tmp_path: Path) -> None:
    path = _sheet(tmp_path)
    result = CliRunner().invoke(cli, [str(path), "-p", "99"])
    assert result.exit_code == 1


def test_in_place_and_output_conflict(tmp_path: Path) -> None:
    path = _sheet(tmp_path)
    result = CliRunner().invoke(cli, [str(path), "-i", "-o", str(tmp_path / "x.txt")])
    assert result.exit_code == 2


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
