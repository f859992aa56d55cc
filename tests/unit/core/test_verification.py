"""Unit tests for verification workflows."""

from __future__ import annotations

import pytest

from core.config import RangeshiftConfig
from core.errors import RangeshiftVerificationError
from core.types import Almanac, Pipeline
from core.verification import (
    VerificationOptions,
    render_verification_report,
    run_verification,
)
from ingest.almanac_reader import read_almanac
from remap.stage_map import build_stage_map
from tests.fixture_paths import almanac_path


def _options(mode: str = "quick", fail_fast: bool = False) -> VerificationOptions:
    return VerificationOptions(
        mode=mode,  # type: ignore[arg-type]
        samples_per_range=8,
        random_seed=7,
        fail_fast=fail_fast,
    )


def _example() -> Almanac:
    return read_almanac(almanac_path("example"), RangeshiftConfig.from_env())


def test_run_verification_passes_quick_checks_on_example() -> None:
    """Quick mode runs four passing checks."""
    report = run_verification(_example(), _options())

    assert [row.check_id for row in report.checks] == ["V001", "V002", "V003", "V004"]
    assert report.failed_count == 0
    assert report.seed_ranges == 2


def test_run_verification_full_mode_adds_singleton_check() -> None:
    """Full mode also compares singleton ranges with scalar images."""
    report = run_verification(_example(), _options(mode="full"))

    assert report.checks[-1].check_id == "V005"
    assert report.passed_count == 5


def test_run_verification_flags_colliding_destinations() -> None:
    """Two sources landing on the same values break disjointness only."""
    stage = build_stage_map("collide", [(5, 0, 5)])
    almanac = Almanac(seeds=(0, 10), pipeline=Pipeline(stages=(stage,)))

    report = run_verification(almanac, _options())

    statuses = {row.check_id: row.status for row in report.checks}
    assert statuses == {"V001": "passed", "V002": "passed", "V003": "passed", "V004": "failed"}


def test_run_verification_rejects_odd_seed_count() -> None:
    """Seeds must pair up into ranges."""
    almanac = Almanac(seeds=(1, 2, 3), pipeline=Pipeline())

    with pytest.raises(RangeshiftVerificationError):
        run_verification(almanac, _options())


def test_run_verification_rejects_negative_samples() -> None:
    """Sample counts cannot be negative."""
    options = VerificationOptions(mode="quick", samples_per_range=-1, random_seed=1, fail_fast=False)

    with pytest.raises(RangeshiftVerificationError):
        run_verification(_example(), options)


def test_render_verification_report_lists_totals() -> None:
    """Rendered report ends with pass and fail totals."""
    report = run_verification(_example(), _options())

    lines = render_verification_report(report).splitlines()

    assert lines[0] == "mode=quick"
    assert lines[-2:] == ["passed=4", "failed=0"]


def test_run_verification_rejects_seed_ranges_beyond_int64() -> None:
    """Seeds too large to sample raise a verification error."""
    almanac = Almanac(seeds=(2**63, 5), pipeline=Pipeline())

    with pytest.raises(RangeshiftVerificationError, match="int64"):
        run_verification(almanac, _options())


def test_run_verification_samples_range_ending_at_int64_limit() -> None:
    """A seed range ending exactly at the int64 limit is still sampled."""
    almanac = Almanac(seeds=(2**63 - 4, 4), pipeline=Pipeline())

    report = run_verification(almanac, _options())

    assert report.failed_count == 0


def test_run_verification_blames_input_for_overlapping_seed_ranges() -> None:
    """Overlapping seed ranges are reported as an input problem."""
    almanac = Almanac(seeds=(0, 10, 5, 10), pipeline=Pipeline())

    report = run_verification(almanac, _options())

    disjointness = report.checks[-1]
    assert disjointness.status == "failed"
    assert "Seed ranges overlap" in disjointness.details
