"""Core constants used across Rangeshift modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_INPUTS_ROOT = Path("inputs")
DEFAULT_RANDOM_SEED = 42
INPUT_FILE_SUFFIX = ".txt"
SEEDS_HEADER = "seeds:"
MAP_HEADER_SUFFIX = "map:"
PIPELINE_SPEC_VERSION = 1
DEFAULT_VERIFICATION_SAMPLES = 64
TRUE_ENV_VALUES = ("1", "true", "yes", "on")
FALSE_ENV_VALUES = ("0", "false", "no", "off")
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
