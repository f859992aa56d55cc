"""Verification check implementations for the remapping engine."""

from __future__ import annotations

from typing import Callable

import numpy as np

from core.errors import RangeshiftError, RangeshiftVerificationError
from core.types import Almanac, Interval, RangeSet
from core.verification_types import VerificationMode, VerificationRuntime
from remap.pipeline_evaluator import run_ranges, run_value, run_values_array

CheckCallable = Callable[[VerificationRuntime], str]
CheckRow = tuple[str, str, CheckCallable]


def build_runtime(almanac: Almanac, samples_per_range: int, random_seed: int) -> VerificationRuntime:
    """Build runtime state with seeded samples from every seed interval.

    Both endpoints of each interval are always sampled.

    Raises:
        RangeshiftVerificationError: If the sample count is negative, the
            seeds cannot be read as ranges, or a seed range exceeds int64.
    """
    if samples_per_range < 0:
        raise RangeshiftVerificationError(
            f"Sample count must be non-negative, got {samples_per_range}."
        )
    try:
        seed_ranges = almanac.seed_ranges()
    except RangeshiftError as error:
        raise RangeshiftVerificationError(str(error)) from error
    rng = np.random.default_rng(random_seed)
    samples = []
    for interval in seed_ranges:
        _check_sampleable(interval)
        drawn = rng.integers(
            interval.begin,
            interval.end - 1,
            size=samples_per_range,
            dtype=np.int64,
            endpoint=True,
        )
        edges = np.array([interval.begin, interval.end - 1], dtype=np.int64)
        samples.append(np.unique(np.concatenate([edges, drawn])))
    return VerificationRuntime(almanac=almanac, samples=tuple(samples))


def _check_sampleable(interval: Interval) -> None:
    limits = np.iinfo(np.int64)
    if interval.begin >= limits.min and interval.end - 1 <= limits.max:
        return
    raise RangeshiftVerificationError(
        f"Seed range [{interval.begin}, {interval.end}) lies outside the int64 range "
        "used for sampling. Verify with smaller seeds or use lowest --ranges directly."
    )


def build_checks(mode: VerificationMode) -> tuple[CheckRow, ...]:
    """Build ordered check list for one verification mode."""
    checks: list[CheckRow] = [
        ("V001", "Range Coverage", check_coverage),
        ("V002", "Scalar Consistency", check_scalar_consistency),
        ("V003", "Point/Range Agreement", check_point_range_agreement),
        ("V004", "Output Disjointness", check_disjointness),
    ]
    if mode == "full":
        checks.append(("V005", "Singleton Ranges", check_singleton_ranges))
    return tuple(checks)


def check_coverage(runtime: VerificationRuntime) -> str:
    """Range evaluation must keep the number of covered values."""
    seed_ranges = runtime.almanac.seed_ranges()
    final = run_ranges(runtime.almanac.pipeline, seed_ranges)
    if final.total_length != seed_ranges.total_length:
        raise RangeshiftVerificationError(
            f"Coverage changed from {seed_ranges.total_length} to {final.total_length} values."
        )
    return f"values={final.total_length} output_intervals={len(final)}"


def check_scalar_consistency(runtime: VerificationRuntime) -> str:
    """Bulk array evaluation must match one-value-at-a-time evaluation."""
    pipeline = runtime.almanac.pipeline
    checked = 0
    for values in runtime.samples:
        bulk = run_values_array(pipeline, values)
        for value, image in zip(values.tolist(), bulk.tolist()):
            expected = run_value(pipeline, value)
            if image != expected:
                raise RangeshiftVerificationError(
                    f"Seed {value}: array evaluation gave {image}, scalar gave {expected}."
                )
            checked += 1
    return f"checked={checked}"


def check_point_range_agreement(runtime: VerificationRuntime) -> str:
    """Every sampled image must land inside its interval's range-mode image."""
    pipeline = runtime.almanac.pipeline
    checked = 0
    for interval, values in zip(runtime.almanac.seed_ranges(), runtime.samples):
        final = run_ranges(pipeline, RangeSet((interval,)))
        for value, image in zip(values.tolist(), run_values_array(pipeline, values).tolist()):
            if not final.contains(image):
                raise RangeshiftVerificationError(
                    f"Seed {value} maps to {image}, outside the range image of "
                    f"[{interval.begin}, {interval.end})."
                )
            checked += 1
    return f"checked={checked}"


def check_disjointness(runtime: VerificationRuntime) -> str:
    """Final range set must not cover any value twice."""
    seed_ranges = runtime.almanac.seed_ranges()
    if not seed_ranges.is_disjoint():
        raise RangeshiftVerificationError(
            "Seed ranges overlap each other in the input, so some values are counted twice "
            "before any stage runs."
        )
    final = run_ranges(runtime.almanac.pipeline, seed_ranges)
    if not final.is_disjoint():
        raise RangeshiftVerificationError(
            "Final range set covers some values twice; a stage maps two sources onto one value."
        )
    return f"output_intervals={len(final)}"


def check_singleton_ranges(runtime: VerificationRuntime) -> str:
    """Range mode on ``[v, v + 1)`` must yield exactly the scalar image."""
    pipeline = runtime.almanac.pipeline
    checked = 0
    for values in runtime.samples:
        for value in values.tolist():
            image = run_value(pipeline, value)
            final = run_ranges(pipeline, RangeSet((Interval(value, value + 1),)))
            if final.intervals != (Interval(image, image + 1),):
                raise RangeshiftVerificationError(
                    f"Seed {value}: singleton range gave {final.intervals}, scalar gave {image}."
                )
            checked += 1
    return f"checked={checked}"
