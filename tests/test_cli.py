"""Tests for command-line argument parsing."""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cycletime.cli import parse_args


def test_parse_args_with_valid_arguments(monkeypatch):
    """Verify CLI parsing succeeds when all arguments are provided."""
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "pr-cycle-time",
            "--input",
            "page1.json",
            "--input",
            "page2.json",
            "--format",
            "json",
            "--log-level",
            "DEBUG",
        ],
    )

    args = parse_args()

    assert args.inputs == ["page1.json", "page2.json"]
    assert args.format == "json"
    assert args.log_level == "DEBUG"


def test_parse_args_defaults():
    """Verify format defaults to text and log level to None."""
    args = parse_args(["--input", "prs.json"])

    assert args.inputs == ["prs.json"]
    assert args.format == "text"
    assert args.log_level is None


def test_parse_args_without_input_fails():
    """Verify CLI parsing exits with an error when no input is given."""
    with pytest.raises(SystemExit):
        parse_args([])


def test_parse_args_with_unknown_format_fails():
    """Verify CLI parsing exits with an error for unsupported formats."""
    with pytest.raises(SystemExit):
        parse_args(["--input", "prs.json", "--format", "csv"])
