"""Unit tests for run-spec CLI command wiring."""

from __future__ import annotations

from cli.main import main
from tests.fixture_paths import fixture_path


def test_cli_run_spec_prints_stages_and_lowest(capsys) -> None:
    """Run-spec should print stage names and scalar lowest value."""
    spec_file = str(fixture_path("pipeline_spec/valid_pipeline.yaml"))

    exit_code = main(["run-spec", spec_file])
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert lines == ["stages=seed-to-soil,soil-to-fertilizer", "lowest=52"]


def test_cli_run_spec_range_mode(capsys) -> None:
    """Range mode reads spec seeds as pairs."""
    spec_file = str(fixture_path("pipeline_spec/valid_pipeline.yaml"))

    exit_code = main(["run-spec", spec_file, "--ranges"])
    lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0 and lines[-1] == "lowest=57"


def test_cli_run_spec_invalid_spec_returns_error(capsys) -> None:
    """Invalid specs exit one with an error line."""
    spec_file = str(fixture_path("pipeline_spec/invalid_version.yaml"))

    exit_code = main(["run-spec", spec_file])
    output = capsys.readouterr().out.strip()

    assert exit_code == 1 and output.startswith("error=")
