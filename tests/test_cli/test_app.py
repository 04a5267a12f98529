"""Tests for the command line interface."""

import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from finddups.cli.app import app
from finddups.common.constants import EXIT_IO_ERROR
from finddups.detector.pipeline import DetectionPipeline

runner = CliRunner()


def test_scan_writes_report(sample_tree: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "report.txt"

    result = runner.invoke(app, ["scan", str(sample_tree), "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8") == (
        "duplicates of size 100\n"
        f"{sample_tree / 'a'}\n"
        f"{sample_tree / 'b'}\n"
    )


def test_scan_prints_report(sample_tree: Path) -> None:
    result = runner.invoke(app, ["scan", "--no-summary", str(sample_tree)])

    assert result.exit_code == 0, result.output
    assert "duplicates of size 100" in result.output
    assert str(sample_tree / "a") in result.output
    assert str(sample_tree / "c") not in result.output


def test_scan_without_duplicates(write_file, tmp_path: Path) -> None:
    write_file("one", b"1")
    write_file("two", b"22")
    output = tmp_path / "report.txt"

    result = runner.invoke(app, ["scan", str(tmp_path / "one"), str(tmp_path / "two"), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8") == ""
    assert "No duplicates found" in result.output


def test_scan_options_override_settings(sample_tree: Path, write_file, tmp_path: Path) -> None:
    write_file("e1", b"")
    write_file("e2", b"")
    output = tmp_path / "report.txt"

    result = runner.invoke(
        app,
        ["scan", str(sample_tree), "--smallest-first", "--chunk-size", "3", "-o", str(output)],
    )

    assert result.exit_code == 0, result.output
    headers = [line for line in output.read_text().splitlines() if line.startswith("duplicates")]
    assert headers == ["duplicates of size 0", "duplicates of size 100"]


def test_scan_min_size_from_environment(
    sample_tree: Path, write_file, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_file("e1", b"")
    write_file("e2", b"")
    monkeypatch.setenv("FINDDUPS_MIN_FILE_SIZE", "1")
    output = tmp_path / "report.txt"

    result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert "duplicates of size 0" not in output.read_text()


def test_scan_io_failure_exits_without_report(
    sample_tree: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A file vanishing before comparison aborts the run."""
    original = DetectionPipeline.detect_duplicates

    def remove_then_detect(self: DetectionPipeline) -> list:
        os.remove(sample_tree / "b")
        return original(self)

    monkeypatch.setattr(DetectionPipeline, "detect_duplicates", remove_then_detect)
    output = tmp_path / "report.txt"

    result = runner.invoke(app, ["scan", str(sample_tree), "-o", str(output)])

    assert result.exit_code == EXIT_IO_ERROR
    assert "Error opening" in result.output
    assert not output.exists()


def test_scan_unwritable_output_exits(sample_tree: Path, tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_bytes(b"")

    result = runner.invoke(
        app, ["scan", str(sample_tree), "-o", str(blocker / "report.txt")]
    )

    assert result.exit_code == EXIT_IO_ERROR
    assert "Report export failed" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_scan_requires_directory() -> None:
    result = runner.invoke(app, ["scan"])

    assert result.exit_code == 2


def test_report_json(sample_tree: Path, tmp_path: Path) -> None:
    output = tmp_path / "report.json"

    result = runner.invoke(
        app, ["report", str(sample_tree), "--format", "json", "--output", str(output)]
    )

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text())
    assert data["total_groups"] == 1
    assert [f["path"] for f in data["groups"][0]["files"]] == [
        str(sample_tree / "a"),
        str(sample_tree / "b"),
    ]


def test_report_csv(sample_tree: Path, tmp_path: Path) -> None:
    output = tmp_path / "report.csv"

    result = runner.invoke(app, ["report", str(sample_tree), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_text().splitlines()[0] == "group_id,size,path,device_id,inode_id"


def test_report_rejects_unknown_format(sample_tree: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["report", str(sample_tree), "-f", "xml", "-o", str(tmp_path / "r.xml")]
    )

    assert result.exit_code == 2
    assert not (tmp_path / "r.xml").exists()


def test_config_show(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FINDDUPS_CHUNK_SIZE", "4096")

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0, result.output
    assert "4096" in result.output


def test_invalid_configuration_exits(monkeypatch: pytest.MonkeyPatch, sample_tree: Path) -> None:
    monkeypatch.setenv("FINDDUPS_CHUNK_SIZE", "-5")

    result = runner.invoke(app, ["scan", str(sample_tree)])

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output
