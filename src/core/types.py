"""Shared typed models.

This module defines immutable data models used by the remapping engine,
input readers, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from core.errors import MalformedIntervalError, RangeshiftError, RangeshiftInputError


@dataclass(frozen=True, order=True)
class Interval:
    """Half-open run of integers ``[begin, end)``.

    Attributes:
        begin: First covered value.
        end: First value past the run. Always greater than ``begin``.
    """

    begin: int
    end: int

    def __post_init__(self) -> None:
        if self.begin >= self.end:
            raise MalformedIntervalError(
                f"Invalid interval [{self.begin}, {self.end}): begin must be below end. "
                "Check the length values supplied by the input."
            )

    @classmethod
    def from_start_length(cls, begin: int, length: int) -> "Interval":
        """Build an interval from a start value and a run length."""
        return cls(begin, begin + length)

    @property
    def length(self) -> int:
        return self.end - self.begin

    def contains(self, value: int) -> bool:
        return self.begin <= value < self.end

    def overlaps(self, other: "Interval") -> bool:
        return self.end > other.begin and self.begin < other.end

    def shifted(self, offset: int) -> "Interval":
        return Interval(self.begin + offset, self.end + offset)


@dataclass(frozen=True)
class MapEntry:
    """One piece of a stage map.

    Attributes:
        source: Values this entry captures.
        offset: Constant added to every captured value.
    """

    source: Interval
    offset: int

    @classmethod
    def from_triple(cls, destination: int, source: int, length: int) -> "MapEntry":
        """Build an entry from a ``(destination, source, length)`` input row.

        Args:
            destination: First value of the destination run.
            source: First value of the source run.
            length: Number of values in both runs.

        Returns:
            Entry shifting ``[source, source + length)`` onto the destination.

        Raises:
            MalformedIntervalError: If ``length`` is not positive.
        """
        return cls(source=Interval.from_start_length(source, length), offset=destination - source)

    @property
    def destination(self) -> Interval:
        return self.source.shifted(self.offset)


@dataclass(frozen=True)
class StageMap:
    """Piecewise-offset function; unmapped values pass through unchanged.

    Entry order carries no meaning. Source intervals are expected to be
    pairwise disjoint.
    """

    name: str
    entries: tuple[MapEntry, ...] = ()


@dataclass(frozen=True)
class Pipeline:
    """Ordered stage maps applied left to right."""

    stages: tuple[StageMap, ...] = ()

    @property
    def stage_names(self) -> tuple[str, ...]:
        return tuple(stage.name for stage in self.stages)


@dataclass(frozen=True)
class RangeSet:
    """Unordered collection of intervals.

    Only the set of covered values is meaningful, not the order of
    ``intervals``.
    """

    intervals: tuple[Interval, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> "RangeSet":
        """Build a range set from ``(begin, length)`` pairs."""
        return cls(tuple(Interval.from_start_length(begin, length) for begin, length in pairs))

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    @property
    def total_length(self) -> int:
        return sum(interval.length for interval in self.intervals)

    def contains(self, value: int) -> bool:
        return any(interval.contains(value) for interval in self.intervals)

    def minimum(self) -> int:
        """Return the smallest covered value.

        Each interval's minimum sits at its ``begin``, so the global
        minimum is the smallest ``begin``.

        Raises:
            RangeshiftError: If the set is empty.
        """
        if not self.intervals:
            raise RangeshiftError("Cannot take the minimum of an empty range set.")
        return min(interval.begin for interval in self.intervals)

    def is_disjoint(self) -> bool:
        ordered = sorted(self.intervals)
        return all(left.end <= right.begin for left, right in zip(ordered, ordered[1:]))

    def normalized(self) -> "RangeSet":
        """Return sorted intervals with overlapping or touching pieces merged."""
        merged: list[Interval] = []
        for interval in sorted(self.intervals):
            if merged and interval.begin <= merged[-1].end:
                last = merged[-1]
                merged[-1] = Interval(last.begin, max(last.end, interval.end))
                continue
            merged.append(interval)
        return RangeSet(tuple(merged))


@dataclass(frozen=True)
class Almanac:
    """Parsed puzzle input: seed numbers plus the stage pipeline.

    Attributes:
        seeds: Seed numbers in input order.
        pipeline: Stages in input order.
    """

    seeds: tuple[int, ...]
    pipeline: Pipeline

    def seed_values(self) -> tuple[int, ...]:
        return self.seeds

    def seed_ranges(self) -> RangeSet:
        """Read seeds as ``(begin, length)`` pairs.

        Raises:
            RangeshiftInputError: If the seed count is odd.
        """
        if len(self.seeds) % 2 != 0:
            raise RangeshiftInputError(
                f"Seed list has {len(self.seeds)} numbers; range mode needs "
                "an even count of (begin, length) pairs."
            )
        pairs = zip(self.seeds[0::2], self.seeds[1::2])
        return RangeSet.from_pairs(pairs)


@dataclass(frozen=True)
class StageTrace:
    """Value observed after one stage during a traced evaluation."""

    stage_name: str
    value: int
