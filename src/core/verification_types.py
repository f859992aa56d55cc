"""Typed models for verification workflows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np

from core.types import Almanac

VerificationMode = Literal["quick", "full"]
VerificationStatus = Literal["passed", "failed"]


@dataclass(frozen=True)
class VerificationOptions:
    """Options controlling verification execution."""

    mode: VerificationMode
    samples_per_range: int
    random_seed: int
    fail_fast: bool


@dataclass(frozen=True)
class VerificationCheckResult:
    """One verification check result row."""

    check_id: str
    title: str
    status: VerificationStatus
    details: str
    duration_seconds: float


@dataclass(frozen=True)
class VerificationReport:
    """Final verification report for a complete run."""

    mode: VerificationMode
    seed_ranges: int
    sampled_values: int
    checks: tuple[VerificationCheckResult, ...]

    @property
    def failed_count(self) -> int:
        """Count failed checks in this report."""
        return sum(1 for check in self.checks if check.status == "failed")

    @property
    def passed_count(self) -> int:
        """Count passed checks in this report."""
        return sum(1 for check in self.checks if check.status == "passed")


@dataclass
class VerificationRuntime:
    """Shared state used by check functions.

    ``samples[i]`` holds sampled seeds drawn from the i-th seed interval.
    """

    almanac: Almanac
    samples: tuple[np.ndarray, ...]
