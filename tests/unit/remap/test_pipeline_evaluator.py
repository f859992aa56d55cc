"""Unit tests for pipeline folding in scalar and range modes."""

from __future__ import annotations

import numpy as np
import pytest
from structlog.testing import capture_logs

from core.config import RangeshiftConfig
from core.errors import RangeshiftError
from core.types import Interval, Pipeline, RangeSet
from ingest.almanac_reader import read_almanac
from remap.pipeline_evaluator import (
    lowest_range_begin,
    lowest_value,
    run_ranges,
    run_value,
    run_values_array,
    trace_value,
)
from remap.stage_map import build_stage_map
from tests.fixture_paths import almanac_path


@pytest.fixture()
def pipeline() -> Pipeline:
    return read_almanac(almanac_path("example"), RangeshiftConfig.from_env()).pipeline


def test_run_value_maps_seeds_to_locations(pipeline: Pipeline) -> None:
    """Scalar mode should fold every stage in order."""
    locations = [run_value(pipeline, seed) for seed in (79, 14, 55, 13)]

    assert locations == [82, 43, 86, 35]


def test_lowest_value_picks_smallest_location(pipeline: Pipeline) -> None:
    """Lowest scalar location across the seed list."""
    assert lowest_value(pipeline, (79, 14, 55, 13)) == 35


def test_lowest_value_rejects_empty_seed_list(pipeline: Pipeline) -> None:
    """No seeds means no lowest value."""
    with pytest.raises(RangeshiftError):
        lowest_value(pipeline, ())


def test_lowest_range_begin_for_seed_ranges(pipeline: Pipeline) -> None:
    """Range mode on [79, 93) and [55, 68) reduces to 46."""
    ranges = RangeSet((Interval(79, 93), Interval(55, 68)))

    assert lowest_range_begin(pipeline, ranges) == 46


def test_run_ranges_preserves_value_count(pipeline: Pipeline) -> None:
    """Range mode neither drops nor duplicates values."""
    ranges = RangeSet((Interval(79, 93), Interval(55, 68)))

    final = run_ranges(pipeline, ranges)

    assert final.total_length == 27
    assert final.is_disjoint()


def test_singleton_range_agrees_with_scalar(pipeline: Pipeline) -> None:
    """Range mode on [v, v + 1) yields exactly the scalar image."""
    for seed in (82, 79, 13, 0, 99, 150):
        image = run_value(pipeline, seed)

        final = run_ranges(pipeline, RangeSet((Interval(seed, seed + 1),)))

        assert final.intervals == (Interval(image, image + 1),)


def test_scalar_images_lie_inside_range_images(pipeline: Pipeline) -> None:
    """Every seed's location lies in its range's final image."""
    interval = Interval(55, 68)
    final = run_ranges(pipeline, RangeSet((interval,)))

    for seed in range(interval.begin, interval.end):
        assert final.contains(run_value(pipeline, seed))


def test_trace_value_reports_each_stage(pipeline: Pipeline) -> None:
    """Trace should list the value after every stage."""
    rows = trace_value(pipeline, 82)

    assert [row.value for row in rows] == [84, 84, 84, 77, 45, 46, 46]
    assert rows[0].stage_name == "seed-to-soil"
    assert rows[-1].stage_name == "humidity-to-location"


def test_run_values_array_matches_scalar(pipeline: Pipeline) -> None:
    """Bulk evaluation should agree with scalar evaluation."""
    seeds = np.array([79, 14, 55, 13, 98, 99, 0], dtype=np.int64)

    images = run_values_array(pipeline, seeds)

    assert images.tolist() == [run_value(pipeline, int(seed)) for seed in seeds]


def test_empty_pipeline_is_identity() -> None:
    """No stages leaves values and ranges unchanged."""
    ranges = RangeSet((Interval(1, 4),))

    assert run_value(Pipeline(), 9) == 9
    assert run_ranges(Pipeline(), ranges) == ranges


def test_run_values_array_handles_values_near_int64_limit() -> None:
    """Bulk evaluation stays exact while images fit in int64."""
    stage = build_stage_map("high", [(2**62 + 100, 2**62, 10)])
    pipeline = Pipeline(stages=(stage,))

    images = run_values_array(pipeline, np.array([2**62 + 3, 5], dtype=np.int64))

    assert images.tolist() == [2**62 + 103, 5]


def test_run_values_array_rejects_images_beyond_int64() -> None:
    """Bulk evaluation raises instead of wrapping around."""
    stage = build_stage_map("overflow", [(2 * 2**62, 2**62, 10)])
    pipeline = Pipeline(stages=(stage,))

    with pytest.raises(RangeshiftError, match="int64"):
        run_values_array(pipeline, np.array([2**62], dtype=np.int64))

    assert run_value(pipeline, 2**62) == 2**63


def test_run_values_array_rejects_inputs_beyond_int64() -> None:
    """Inputs too large for int64 are rejected up front."""
    with pytest.raises(RangeshiftError, match="int64"):
        run_values_array(Pipeline(), [2**63])
    with pytest.raises(RangeshiftError, match="int64"):
        run_values_array(Pipeline(), [-(2**64)])


def test_run_values_array_skips_entries_beyond_int64() -> None:
    """Entries whose sources no int64 value can reach are ignored."""
    stage = build_stage_map("far", [(0, 2**64, 5), (10, 0, 5)])

    images = run_values_array(Pipeline(stages=(stage,)), np.array([2, 7], dtype=np.int64))

    assert images.tolist() == [12, 7]


def test_range_evaluation_logs_only_lowest_at_info(pipeline: Pipeline) -> None:
    """Per-call range folds log at debug; the lowest result logs at info."""
    ranges = RangeSet((Interval(79, 93), Interval(55, 68)))

    with capture_logs() as logs:
        lowest_range_begin(pipeline, ranges)

    info_events = [row["event"] for row in logs if row["log_level"] == "info"]
    assert info_events == ["pipeline_ranges_lowest"]
