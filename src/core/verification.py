"""Verification workflow orchestration and report formatting."""

from __future__ import annotations

import time
from typing import Callable

from core.errors import RangeshiftError
from core.logging_config import get_logger
from core.types import Almanac
from core.verification_checks import build_checks, build_runtime
from core.verification_types import (
    VerificationCheckResult,
    VerificationMode,
    VerificationOptions,
    VerificationReport,
    VerificationRuntime,
    VerificationStatus,
)

__all__ = [
    "VerificationCheckResult",
    "VerificationMode",
    "VerificationOptions",
    "VerificationReport",
    "run_verification",
    "render_verification_report",
]

_LOGGER = get_logger(__name__)


def run_verification(almanac: Almanac, options: VerificationOptions) -> VerificationReport:
    """Run verification checks and return structured report."""
    runtime = build_runtime(almanac, options.samples_per_range, options.random_seed)
    checks = build_checks(options.mode)
    results = _run_checks(runtime, checks, options.fail_fast)
    report = VerificationReport(
        mode=options.mode,
        seed_ranges=len(runtime.samples),
        sampled_values=sum(len(values) for values in runtime.samples),
        checks=tuple(results),
    )
    _LOGGER.info(
        "verification_completed",
        passed=report.passed_count,
        failed=report.failed_count,
    )
    return report


def _run_checks(
    runtime: VerificationRuntime,
    checks: tuple[tuple[str, str, Callable[[VerificationRuntime], str]], ...],
    fail_fast: bool,
) -> list[VerificationCheckResult]:
    results: list[VerificationCheckResult] = []
    for check_id, title, check_fn in checks:
        started_at = time.monotonic()
        status, details = _run_single_check(check_fn, runtime)
        results.append(
            VerificationCheckResult(
                check_id=check_id,
                title=title,
                status=status,
                details=details,
                duration_seconds=round(time.monotonic() - started_at, 3),
            )
        )
        if status == "failed" and fail_fast:
            break
    return results


def _run_single_check(
    check_fn: Callable[[VerificationRuntime], str],
    runtime: VerificationRuntime,
) -> tuple[VerificationStatus, str]:
    try:
        details = str(check_fn(runtime))
        return "passed", details
    except RangeshiftError as error:
        return "failed", str(error)


def render_verification_report(report: VerificationReport) -> str:
    """Render report into stable multi-line text for CLI output."""
    lines = [
        f"mode={report.mode}",
        f"seed_ranges={report.seed_ranges}",
        f"sampled_values={report.sampled_values}",
    ]
    for row in report.checks:
        lines.append(
            f"[{row.status.upper()}] {row.check_id} {row.title} "
            f"({row.duration_seconds:.3f}s) :: {row.details}"
        )
    lines.append(f"passed={report.passed_count}")
    lines.append(f"failed={report.failed_count}")
    return "\n".join(lines)
