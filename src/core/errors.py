"""Rangeshift exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class RangeshiftError(Exception):
    """Base exception for all Rangeshift failures."""


class RangeshiftConfigError(RangeshiftError):
    """Raised for invalid runtime configuration."""


class MalformedIntervalError(RangeshiftError):
    """Raised when an interval is built with ``begin >= end``."""


class OverlappingSourceEntriesError(RangeshiftError):
    """Raised when two entries of one stage share source values."""


class RangeshiftInputError(RangeshiftError):
    """Raised for almanac parsing and input file failures."""


class PipelineSpecError(RangeshiftError):
    """Raised for invalid or unsupported pipeline spec files."""


class RangeshiftDependencyError(RangeshiftError):
    """Raised when an optional runtime dependency is missing."""


class RangeshiftVerificationError(RangeshiftError):
    """Raised when verification checks cannot be executed."""
