"""
Tests for the command line interface.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from agendaboard.cli.app import app

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text("data_file: agenda.json\nlog_level: ERROR\n", encoding="utf-8")
    return path


def _invoke(*args):
    return runner.invoke(app, [str(arg) for arg in args])


def test_durations_command():
    """The duration query prints the breakdown."""
    result = _invoke("durations", "07:00", "23:00")

    assert result.exit_code == 0
    assert "total=960 normal=540 overtime=420" in result.output


def test_durations_rejects_malformed_time():
    """Malformed input exits with status 1."""
    result = _invoke("durations", "7am", "10:00")

    assert result.exit_code == 1
    assert "Error" in result.output


def test_add_list_and_conflict(config_path):
    """Blocks can be added, listed, and overlaps are refused."""
    added = _invoke(
        "blocks", "add", "-p", 1, "--date", "2024-11-25", "--start", "08:00", "--end", "12:00",
        "--job-name", "Edit", "-c", config_path,
    )
    assert added.exit_code == 0, added.output
    assert "Block #1" in added.output

    listed = _invoke("blocks", "list", "2024-11-25", "-c", config_path)
    assert listed.exit_code == 0
    assert "Ana Silva" in listed.output

    conflict = _invoke(
        "blocks", "add", "-p", 1, "--date", "2024-11-25", "--start", "11:00", "--end", "13:00",
        "-c", config_path,
    )
    assert conflict.exit_code == 2
    assert "Conflict" in conflict.output

    touching = _invoke(
        "blocks", "add", "-p", 1, "--date", "2024-11-25", "--start", "12:00", "--end", "13:00",
        "-c", config_path,
    )
    assert touching.exit_code == 0


def test_inverted_block_is_bad_request(config_path):
    """A block ending before it starts exits with status 1."""
    result = _invoke(
        "blocks", "add", "-p", 1, "--date", "2024-11-25", "--start", "12:00", "--end", "08:00",
        "-c", config_path,
    )

    assert result.exit_code == 1
    assert "must be after start time" in result.output


def test_update_recomputes_durations_on_disk(config_path):
    """A partial time update rewrites the stored durations."""
    _invoke("blocks", "add", "-p", 2, "--date", "2024-11-25", "--start", "10:00", "--end", "19:00", "-c", config_path)

    result = _invoke("blocks", "update", 1, "--end", "21:00", "-c", config_path)

    assert result.exit_code == 0, result.output
    document = json.loads((config_path.parent / "agenda.json").read_text(encoding="utf-8"))
    block = document["blocks"][0]
    assert block["end_time"] == "21:00"
    assert block["duration_overtime_min"] == 120
    assert block["duration_normal_min"] == 540


def test_delete_unknown_block(config_path):
    """Deleting a missing block exits with status 1."""
    result = _invoke("blocks", "delete", 42, "-c", config_path)

    assert result.exit_code == 1
    assert "not found" in result.output


def test_catalog_commands(config_path):
    """Catalog entries can be added and listed."""
    assert _invoke("requesters", "add", "Zoe", "-c", config_path).exit_code == 0
    requesters = _invoke("requesters", "list", "-c", config_path)
    assert "Zoe" in requesters.output

    assert _invoke("professionals", "add", "Nina", "--column", 14, "-c", config_path).exit_code == 0
    assert _invoke("professionals", "add", "Omar", "--column", 99, "-c", config_path).exit_code == 1

    types = _invoke("activity-types", "-c", config_path)
    assert types.exit_code == 0
    assert "Design" in types.output


def test_report_command(config_path):
    """The monthly report aggregates stored blocks."""
    _invoke("blocks", "add", "-p", 1, "--date", "2024-11-25", "--start", "17:00", "--end", "21:00", "-c", config_path)

    result = _invoke("report", 2024, 11, "-c", config_path)

    assert result.exit_code == 0, result.output
    assert "Ana Silva" in result.output
    assert "2h00" in result.output

    empty = _invoke("report", 2024, 10, "-c", config_path)
    assert "No blocks" in empty.output

    assert _invoke("report", 2024, 13, "-c", config_path).exit_code == 1


def test_missing_explicit_config(tmp_path):
    """An explicit config path that does not exist is an error."""
    result = _invoke("professionals", "list", "-c", tmp_path / "nope.yaml")

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_names_are_not_read_as_markup(config_path):
    """Names with square brackets are printed literally."""
    added = _invoke("professionals", "add", "[red]Lia[/red]", "--column", 15, "-c", config_path)
    assert added.exit_code == 0, added.output
    assert "[red]Lia[/red]" in added.output

    listed = _invoke("professionals", "list", "-c", config_path)
    assert "[red]Lia[/red]" in listed.output

    _invoke("blocks", "add", "-p", 14, "--date", "2024-11-25", "--start", "08:00", "--end", "09:00", "-c", config_path)
    report = _invoke("report", 2024, 11, "--entries", "-c", config_path)
    assert report.output.count("[red]Lia[/red]") == 2
