"""Pipeline-spec CLI command wiring.

This module registers the run-spec subcommand and evaluates a declarative
YAML pipeline through the SDK client.
"""

from __future__ import annotations

import argparse
from typing import Any

from remap.almanac_sdk import RangeshiftClient


def add_pipeline_spec_command(subparsers: Any) -> None:
    """Register run-spec subcommand."""
    parser = subparsers.add_parser(
        "run-spec",
        help="Evaluate a declarative YAML pipeline spec",
    )
    parser.add_argument("spec_file", help="Path to YAML pipeline-spec file")
    parser.add_argument(
        "--ranges",
        action="store_true",
        help="Read seeds as (begin, length) pairs",
    )


def run_pipeline_spec_command(client: RangeshiftClient, args: argparse.Namespace) -> int:
    """Handle run-spec command invocation."""
    almanac = client.load_pipeline_spec(args.spec_file)
    print(f"stages={','.join(almanac.pipeline.stage_names)}")
    print(f"lowest={client.lowest(almanac, ranges=args.ranges)}")
    return 0
