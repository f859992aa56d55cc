"""Rangeshift CLI entry points.

This module exposes commands for evaluating almanacs and pipeline specs.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from cli.pipeline_spec_command import add_pipeline_spec_command, run_pipeline_spec_command
from cli.verify_command import add_verify_command, run_verify_command
from core.config import RangeshiftConfig
from core.errors import RangeshiftError
from core.logging_config import configure_logging
from remap.almanac_sdk import RangeshiftClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="rangeshift", description="Rangeshift remapping CLI")
    parser.add_argument("--inputs-root", help="Override RANGESHIFT_INPUTS_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_lowest_command(subparsers)
    _add_trace_command(subparsers)
    _add_map_ranges_command(subparsers)
    add_pipeline_spec_command(subparsers)
    add_verify_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Rangeshift CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.inputs_root)
        return _dispatch(parser, client, args)
    except RangeshiftError as error:
        print(f"error={error}")
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: RangeshiftClient,
    args: argparse.Namespace,
) -> int:
    if args.command == "lowest":
        return _run_lowest_command(client, args)
    if args.command == "trace":
        return _run_trace_command(client, args)
    if args.command == "map-ranges":
        return _run_map_ranges_command(client, args)
    if args.command == "run-spec":
        return run_pipeline_spec_command(client, args)
    if args.command == "verify":
        return run_verify_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(inputs_root: str | None) -> RangeshiftClient:
    """Build SDK client with optional inputs-root override.

    Args:
        inputs_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = RangeshiftConfig.from_env()
    configure_logging(config.log_level)
    client = RangeshiftClient(config)
    if inputs_root:
        client = client.with_inputs_root(inputs_root)
    return client


def _run_lowest_command(client: RangeshiftClient, args: argparse.Namespace) -> int:
    """Handle lowest command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    almanac = client.load_almanac(args.almanac)
    print(client.lowest(almanac, ranges=args.ranges))
    return 0


def _run_trace_command(client: RangeshiftClient, args: argparse.Namespace) -> int:
    """Handle trace command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    almanac = client.load_almanac(args.almanac)
    for row in client.trace(almanac, args.value):
        print(f"{row.stage_name}\t{row.value}")
    return 0


def _run_map_ranges_command(client: RangeshiftClient, args: argparse.Namespace) -> int:
    almanac = client.load_almanac(args.almanac)
    for interval in client.final_ranges(almanac):
        print(f"{interval.begin}\t{interval.end}")
    return 0


def _add_lowest_command(subparsers: Any) -> None:
    """Register lowest subcommand."""
    parser = subparsers.add_parser("lowest", help="Print the lowest final value for the seeds")
    parser.add_argument("almanac", help="Almanac file path or cached input name")
    parser.add_argument(
        "--ranges",
        action="store_true",
        help="Read seeds as (begin, length) pairs",
    )


def _add_trace_command(subparsers: Any) -> None:
    """Register trace subcommand."""
    parser = subparsers.add_parser("trace", help="Print one value's image after every stage")
    parser.add_argument("almanac", help="Almanac file path or cached input name")
    parser.add_argument("value", type=int, help="Value to trace")


def _add_map_ranges_command(subparsers: Any) -> None:
    """Register map-ranges subcommand."""
    parser = subparsers.add_parser(
        "map-ranges",
        help="Print merged final ranges for the seed ranges as 'begin end' rows",
    )
    parser.add_argument("almanac", help="Almanac file path or cached input name")
