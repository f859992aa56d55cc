"""Pipeline evaluation for scalar values and range sets.

This module folds values or range sets through every stage in order.
Scalar and range modes agree: a value's scalar image always lies in the
range-mode image of any interval that contains it.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from core.errors import RangeshiftError
from core.logging_config import get_logger
from core.types import Pipeline, RangeSet, StageTrace
from remap.stage_map import apply, apply_range

_LOGGER = get_logger(__name__)
_INT64 = np.iinfo(np.int64)


def run_value(pipeline: Pipeline, value: int) -> int:
    """Map one value through every stage."""
    for stage in pipeline.stages:
        value = apply(stage, value)
    return value


def run_ranges(pipeline: Pipeline, ranges: RangeSet) -> RangeSet:
    """Map a range set through every stage.

    Args:
        pipeline: Stages applied in order.
        ranges: Initial intervals.

    Returns:
        Final range set after the last stage.
    """
    for stage in pipeline.stages:
        ranges = apply_range(stage, ranges)
    _LOGGER.debug(
        "pipeline_ranges_evaluated",
        stages=len(pipeline.stages),
        output_intervals=len(ranges),
    )
    return ranges


def trace_value(pipeline: Pipeline, value: int) -> tuple[StageTrace, ...]:
    """Map one value and record its image after each stage."""
    rows: list[StageTrace] = []
    for stage in pipeline.stages:
        value = apply(stage, value)
        rows.append(StageTrace(stage_name=stage.name, value=value))
    return tuple(rows)


def run_values_array(pipeline: Pipeline, values: np.ndarray) -> np.ndarray:
    """Map an integer array through every stage in bulk.

    Within a stage the first matching entry wins, as in scalar lookup.
    Images must stay inside the ``int64`` range; ``run_value`` handles
    values of any size.

    Args:
        pipeline: Stages applied in order.
        values: One-dimensional integer array.

    Returns:
        New ``int64`` array of final images.

    Raises:
        RangeshiftError: If an input value or an image does not fit in ``int64``.
    """
    current = _as_int64_array(values)
    for stage in pipeline.stages:
        mapped = current.copy()
        claimed = np.zeros(current.shape, dtype=bool)
        for entry in stage.entries:
            lowest = max(entry.source.begin, _INT64.min)
            highest = min(entry.source.end - 1, _INT64.max)
            if lowest > highest:
                continue
            mask = (current >= lowest) & (current <= highest) & ~claimed
            if not mask.any():
                continue
            captured = current[mask]
            _check_image_bounds(stage.name, int(captured.min()), int(captured.max()), entry.offset)
            mapped[mask] = captured + entry.offset
            claimed |= mask
        current = mapped
    return current


def _as_int64_array(values: np.ndarray) -> np.ndarray:
    try:
        raw = np.asarray(values)
        if raw.dtype.kind == "u" and raw.size and int(raw.max()) > _INT64.max:
            raise OverflowError(f"value {int(raw.max())} exceeds {_INT64.max}")
        return np.array(raw, dtype=np.int64)
    except OverflowError as error:
        raise RangeshiftError(
            f"Values do not fit in int64: {error}. Use run_value for large values."
        ) from error


def _check_image_bounds(stage_name: str, lowest: int, highest: int, offset: int) -> None:
    offset_fits = _INT64.min <= offset <= _INT64.max
    if offset_fits and _INT64.min <= lowest + offset and highest + offset <= _INT64.max:
        return
    raise RangeshiftError(
        f"Stage '{stage_name}' maps values in [{lowest}, {highest}] by offset {offset}, "
        "outside the int64 range. Use run_value for large values."
    )


def lowest_value(pipeline: Pipeline, values: Iterable[int]) -> int:
    """Return the smallest final image among scalar ``values``.

    Raises:
        RangeshiftError: If ``values`` is empty.
    """
    images = [run_value(pipeline, value) for value in values]
    if not images:
        raise RangeshiftError("Cannot evaluate the lowest value of an empty seed list.")
    lowest = min(images)
    _LOGGER.info("pipeline_values_evaluated", values=len(images), lowest=lowest)
    return lowest


def lowest_range_begin(pipeline: Pipeline, ranges: RangeSet) -> int:
    """Return the smallest value covered by the final range set.

    Every stage adds a constant within each output piece, so each piece's
    minimum is its ``begin``.
    """
    lowest = run_ranges(pipeline, ranges).minimum()
    _LOGGER.info("pipeline_ranges_lowest", intervals=len(ranges), lowest=lowest)
    return lowest
