from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from openpyxl import Workbook

from uxstarter.cli import run_cli

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "ux_starter.py"


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(["python3", str(SCRIPT), *args], capture_output=True, text=True)


def test_cli_reports_missing_workbook_as_alert(tmp_path: Path) -> None:
    result = _run("filter", "--workbook", str(tmp_path / "missing.xlsx"))

    assert result.returncode == 1
    assert "UX Starter must be attached to a spreadsheet." in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_reports_missing_deck_as_alert(tmp_path: Path) -> None:
    result = _run("list-layouts", "--deck", str(tmp_path / "missing.pptx"))

    assert result.returncode == 1
    assert "There was a problem opening the generated deck." in result.stderr
    assert "Traceback" not in result.stderr


def test_cli_requires_a_command() -> None:
    result = _run()

    assert result.returncode == 2
    assert "usage:" in result.stderr


def test_cli_alerts_when_configuration_sheet_is_missing(tmp_path: Path, capsys) -> None:
    path = tmp_path / "audit.xlsx"
    wb = Workbook()
    wb.active.title = "Audit"
    wb.save(str(path))

    with pytest.raises(SystemExit) as exc:
        run_cli(["filter", "--workbook", str(path)])

    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "❌  UX Starter must be attached to a spreadsheet." in err
    assert "Traceback" not in err
