"""Public SDK surface for Rangeshift.

This module provides a stable import path for library users.
It re-exports the primary client, engine functions, and typed models.
"""

from __future__ import annotations

from core.config import RangeshiftConfig
from core.pipeline_spec import load_pipeline_spec
from core.types import Almanac, Interval, MapEntry, Pipeline, RangeSet, StageMap, StageTrace
from ingest.almanac_reader import parse_almanac
from remap.almanac_sdk import RangeshiftClient
from remap.pipeline_evaluator import (
    lowest_range_begin,
    lowest_value,
    run_ranges,
    run_value,
    run_values_array,
    trace_value,
)
from remap.stage_map import apply, apply_range, build_stage_map, validate_stage_map

__all__ = [
    "Almanac",
    "Interval",
    "MapEntry",
    "Pipeline",
    "RangeSet",
    "RangeshiftClient",
    "RangeshiftConfig",
    "StageMap",
    "StageTrace",
    "apply",
    "apply_range",
    "build_stage_map",
    "load_pipeline_spec",
    "lowest_range_begin",
    "lowest_value",
    "parse_almanac",
    "run_ranges",
    "run_value",
    "run_values_array",
    "trace_value",
    "validate_stage_map",
]
