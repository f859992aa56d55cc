"""Verification command wiring for Rangeshift CLI."""

from __future__ import annotations

import argparse
from typing import Any, cast

from core.constants import DEFAULT_VERIFICATION_SAMPLES
from core.errors import RangeshiftVerificationError
from core.verification import (
    VerificationMode,
    VerificationOptions,
    render_verification_report,
)
from remap.almanac_sdk import RangeshiftClient


def add_verify_command(subparsers: Any) -> None:
    """Register verify subcommand."""
    parser = subparsers.add_parser(
        "verify",
        help="Check scalar and range evaluation agree on an almanac",
    )
    parser.add_argument("almanac", help="Almanac file path or cached input name")
    parser.add_argument(
        "--mode",
        choices=("quick", "full"),
        default="quick",
        help="Verification mode",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_VERIFICATION_SAMPLES,
        help="Random seeds sampled from each seed range",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop after the first failed check",
    )


def run_verify_command(client: RangeshiftClient, args: argparse.Namespace) -> int:
    """Execute verification workflow and print check report."""
    options = VerificationOptions(
        mode=cast(VerificationMode, args.mode),
        samples_per_range=args.samples,
        random_seed=client.config.random_seed,
        fail_fast=args.fail_fast,
    )
    almanac = client.load_almanac(args.almanac)
    try:
        report = client.verify(almanac, options)
    except RangeshiftVerificationError as error:
        print(f"verification_error={error}")
        return 1
    print(render_verification_report(report))
    return 0 if report.failed_count == 0 else 1
