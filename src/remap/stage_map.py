"""Single-stage point lookup and range transform.

This module applies one piecewise-offset stage to values and range sets.
Range transforms split intervals at entry boundaries with a work stack.
"""

from __future__ import annotations

from itertools import combinations
from typing import Iterable

from core.errors import OverlappingSourceEntriesError
from core.logging_config import get_logger
from core.types import Interval, MapEntry, RangeSet, StageMap

_LOGGER = get_logger(__name__)


def build_stage_map(
    name: str,
    triples: Iterable[tuple[int, int, int]],
    validate: bool = True,
) -> StageMap:
    """Build a stage from ``(destination, source, length)`` rows.

    Args:
        name: Stage label such as ``seed-to-soil``.
        triples: Input rows in any order.
        validate: Reject stages whose source intervals overlap.

    Returns:
        Immutable stage map.

    Raises:
        MalformedIntervalError: If a row has a non-positive length.
        OverlappingSourceEntriesError: If validation is on and sources overlap.
    """
    entries = tuple(
        MapEntry.from_triple(destination, source, length)
        for destination, source, length in triples
    )
    stage = StageMap(name=name, entries=entries)
    if validate:
        validate_stage_map(stage)
    return stage


def validate_stage_map(stage: StageMap) -> None:
    """Fail when two entries of ``stage`` capture the same value.

    Raises:
        OverlappingSourceEntriesError: On the first overlapping pair found.
    """
    for left, right in combinations(stage.entries, 2):
        if left.source.overlaps(right.source):
            raise OverlappingSourceEntriesError(
                f"Stage '{stage.name}' has overlapping source intervals "
                f"[{left.source.begin}, {left.source.end}) and "
                f"[{right.source.begin}, {right.source.end}). "
                "Each value may be captured by at most one entry."
            )


def apply(stage: StageMap, value: int) -> int:
    """Map one value through ``stage``.

    The first entry containing ``value`` wins; with overlapping sources
    that choice is arbitrary. Unmapped values are returned unchanged.
    """
    for entry in stage.entries:
        if entry.source.contains(value):
            return value + entry.offset
    return value


def apply_range(stage: StageMap, ranges: RangeSet) -> RangeSet:
    """Map every interval of ``ranges`` through ``stage``.

    Each output interval is either fully inside one entry's source and
    shifted by its offset, or outside every entry and unchanged. Every
    input value lands in exactly one output interval.

    Args:
        stage: Stage to apply.
        ranges: Input intervals.

    Returns:
        Image of ``ranges`` as a new range set.
    """
    output, pops = _split_through_stage(stage, ranges)
    _LOGGER.debug(
        "stage_range_transform",
        stage=stage.name,
        input_intervals=len(ranges),
        output_intervals=len(output),
        stack_pops=pops,
    )
    return RangeSet(tuple(output))


def _split_through_stage(stage: StageMap, ranges: RangeSet) -> tuple[list[Interval], int]:
    """Run the work-stack split and report how many intervals were popped.

    Pops per input interval never exceed ``4 * len(stage.entries) + 1``:
    at most ``2 * entries + 1`` pieces, each costing one split and one pop.
    """
    stack = list(ranges.intervals)
    output: list[Interval] = []
    pops = 0
    while stack:
        interval = stack.pop()
        pops += 1
        entry = _find_overlapping_entry(stage, interval)
        if entry is None:
            output.append(interval)
            continue
        begin, end = interval.begin, interval.end
        source = entry.source
        if begin < source.begin:
            stack.append(Interval(begin, source.begin))
            stack.append(Interval(source.begin, end))
        elif end > source.end:
            stack.append(Interval(begin, source.end))
            stack.append(Interval(source.end, end))
        else:
            output.append(interval.shifted(entry.offset))
    return output, pops


def _find_overlapping_entry(stage: StageMap, interval: Interval) -> MapEntry | None:
    for entry in stage.entries:
        if entry.source.overlaps(interval):
            return entry
    return None
