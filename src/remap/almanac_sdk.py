"""Client SDK for almanac evaluation.

This module exposes the primary client object for loading almanacs and
evaluating them in scalar or range mode. CLI commands call into it.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import RangeshiftConfig
from core.pipeline_spec import load_pipeline_spec
from core.types import Almanac, RangeSet, StageTrace
from core.verification import VerificationOptions, VerificationReport, run_verification
from ingest.almanac_reader import read_almanac
from remap.pipeline_evaluator import (
    lowest_range_begin,
    lowest_value,
    run_ranges,
    trace_value,
)


class RangeshiftClient:
    """Primary SDK entry point for remapping workflows."""

    def __init__(self, config: RangeshiftConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or RangeshiftConfig.from_env()

    @property
    def config(self) -> RangeshiftConfig:
        return self._config

    def load_almanac(self, source: str) -> Almanac:
        """Load almanac text from a path or the inputs cache.

        Args:
            source: File path or cached input name.

        Returns:
            Parsed almanac.

        Raises:
            RangeshiftInputError: If the input is missing or invalid.
        """
        return read_almanac(source, self._config)

    def load_pipeline_spec(self, spec_file: str) -> Almanac:
        """Load a declarative YAML pipeline spec.

        Raises:
            PipelineSpecError: If the spec is invalid.
        """
        return load_pipeline_spec(spec_file, validate_stages=self._config.validate_stages)

    def lowest(self, almanac: Almanac, ranges: bool = False) -> int:
        """Return the lowest final value for an almanac's seeds.

        Args:
            almanac: Parsed almanac.
            ranges: Read seeds as ``(begin, length)`` pairs instead of values.

        Returns:
            Minimum final value.
        """
        if ranges:
            return lowest_range_begin(almanac.pipeline, almanac.seed_ranges())
        return lowest_value(almanac.pipeline, almanac.seed_values())

    def final_ranges(self, almanac: Almanac) -> RangeSet:
        """Return the merged final range set for the almanac's seed ranges."""
        return run_ranges(almanac.pipeline, almanac.seed_ranges()).normalized()

    def trace(self, almanac: Almanac, value: int) -> tuple[StageTrace, ...]:
        return trace_value(almanac.pipeline, value)

    def verify(self, almanac: Almanac, options: VerificationOptions) -> VerificationReport:
        """Run engine consistency checks against an almanac."""
        return run_verification(almanac, options)

    def with_inputs_root(self, inputs_root: str) -> "RangeshiftClient":
        """Clone the client with a different inputs directory.

        Args:
            inputs_root: New inputs root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(inputs_root).expanduser().resolve()
        return RangeshiftClient(replace(self._config, inputs_root=resolved_root))
