"""Tests for the click CLI."""

import json
from pathlib import Path

from click.testing import CliRunner

from layer_audit.cli import cli

FIXTURES = Path(__file__).parent / "fixtures"
GOROOT = FIXTURES / "goroot"


def _invoke(*args):
    return CliRunner().invoke(cli, list(args))


def test_report_text():
    result = _invoke("report", "--root", str(GOROOT))
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].split() == ["internal/reflectlite", "0", "imported", "unsafe"]
    assert lines[-1].split() == ["unsafe"]
    assert any(line.split() == ["net", "3", "unimported", "C"] for line in lines)
    assert not any("internal/chain" in line for line in lines)


def test_report_json():
    result = _invoke("report", "--root", str(GOROOT), "--format", "json")
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["summary"]["reported"] == 6
    assert [e["name"] for e in data["entries"]][-1] == "net"


def test_report_with_config_and_learned_file(tmp_path):
    config_file = tmp_path / "config.txt"
    config_file.write_text(f"standardLibraryPath: {GOROOT.as_posix()}\nvendorRelPath: vendor\n")
    learned = tmp_path / "input.txt"
    learned.write_text("errors\nsync\n")
    result = _invoke("report", "-c", str(config_file), "-i", str(learned), "-f", "json")
    assert result.exit_code == 0, result.output
    names = [e["name"] for e in json.loads(result.output)["entries"]]
    assert "errors" not in names
    assert "sync" not in names


def test_bad_config_is_fatal(tmp_path):
    config_file = tmp_path / "config.txt"
    config_file.write_text("unknownKey: x\n")
    result = _invoke("report", "-c", str(config_file))
    assert result.exit_code == 1
    assert "Invalid config key" in result.output


def test_show():
    result = _invoke("show", "--root", str(GOROOT), "io")
    assert result.exit_code == 0, result.output
    assert "depth:      2" in result.output
    assert "imported:   yes" in result.output
    assert "    errors" in result.output
    assert "    net" in result.output


def test_show_unknown_package():
    result = _invoke("show", "--root", str(GOROOT), "nope")
    assert result.exit_code == 1
    assert "No package named 'nope'" in result.output
