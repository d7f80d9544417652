"""Integration tests for CLI functionality."""

import json
import subprocess
import sys

import pytest

from neumann_pkg import config
from neumann_pkg.cli import main_entry, print_result_pretty


def run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "neumann_pkg", *args],
        capture_output=True,
        text=True,
        timeout=30,
    )


def test_cli_version():
    """Test --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert result.stdout.strip() == config.VERSION


def test_cli_health_check():
    """Test --health-check command."""
    result = run_cli("--health-check")
    assert result.returncode == 0
    assert "health check" in result.stdout.lower()
    assert "0 failed" in result.stdout


def test_cli_eval_json():
    """Test CLI evaluation with JSON output."""
    result = run_cli("--eval", "(2+3)*4", "--format", "json")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data == {"ok": True, "result": "20"}


def test_cli_eval_human():
    """Test CLI evaluation with human output."""
    result = run_cli("-e", "2^3^2")
    assert result.returncode == 0
    assert result.stdout.strip() == "512"


def test_cli_eval_error_exit_code():
    result = run_cli("-e", "1,2", "--format", "json")
    assert result.returncode == 1
    data = json.loads(result.stdout)
    assert data["ok"] is False
    assert data["error_code"] == "SEPARATOR_OUTSIDE_GROUP"


def test_cli_precision():
    result = run_cli("-e", "1/3", "-p", "5")
    assert result.stdout.strip() == "0.33333"


def test_cli_repl_reads_until_quit():
    result = subprocess.run(
        [sys.executable, "-m", "neumann_pkg"],
        input="2+2\nhelp\nmax()\nquit\n",
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert "4" in result.stdout
    assert "Functions:" in result.stdout
    assert "Error:" in result.stdout
    assert "Goodbye." in result.stdout


class TestMainEntry:
    """main_entry() called in-process."""

    def test_eval(self, capsys):
        assert main_entry(["-e", "sqrt(abs(-9))"]) == 0
        assert capsys.readouterr().out.strip() == "3"

    def test_eval_error(self, capsys):
        assert main_entry(["-e", "1/0"]) == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_max_input_length(self, capsys, monkeypatch):
        monkeypatch.setattr(config, "MAX_INPUT_LENGTH", config.MAX_INPUT_LENGTH)
        assert main_entry(["--max-input-length", "3", "-e", "1+2+3"]) == 1
        assert "too long" in capsys.readouterr().out.lower()

    def test_invalid_format_rejected(self):
        with pytest.raises(SystemExit):
            main_entry(["-e", "1", "--format", "xml"])


def test_print_result_pretty(capsys):
    print_result_pretty({"ok": True, "result": "7"})
    print_result_pretty({"ok": False, "error": "Division by zero"})
    print_result_pretty({"ok": True, "result": "7"}, output_format="json")
    out = capsys.readouterr().out
    assert out.startswith("7\nError: Division by zero\n")
    assert '"result": "7"' in out
