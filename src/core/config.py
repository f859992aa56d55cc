"""Runtime configuration model for Rangeshift.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_INPUTS_ROOT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RANDOM_SEED,
    FALSE_ENV_VALUES,
    SUPPORTED_LOG_LEVELS,
    TRUE_ENV_VALUES,
)
from core.errors import RangeshiftConfigError


@dataclass(frozen=True)
class RangeshiftConfig:
    """Validated runtime configuration.

    Attributes:
        inputs_root: Directory holding cached puzzle inputs as ``<name>.txt``.
        validate_stages: Reject stages whose source intervals overlap.
        random_seed: Seed used for deterministic verification sampling.
        log_level: Minimum structured log level name.
    """

    inputs_root: Path
    validate_stages: bool
    random_seed: int
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "RangeshiftConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            RangeshiftConfigError: If environment values are invalid.
        """
        inputs_root_value = os.getenv("RANGESHIFT_INPUTS_ROOT", str(DEFAULT_INPUTS_ROOT))
        validate_value = os.getenv("RANGESHIFT_VALIDATE_STAGES", "true")
        random_seed_value = os.getenv("RANGESHIFT_RANDOM_SEED", str(DEFAULT_RANDOM_SEED))
        log_level = os.getenv("RANGESHIFT_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        return cls(
            inputs_root=Path(inputs_root_value).expanduser().resolve(),
            validate_stages=_parse_bool("RANGESHIFT_VALIDATE_STAGES", validate_value),
            random_seed=_parse_random_seed(random_seed_value),
            log_level=_parse_log_level(log_level),
        )


def _parse_bool(env_name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag.

    Args:
        env_name: Variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag value.

    Raises:
        RangeshiftConfigError: If value is not a recognized boolean word.
    """
    normalized = raw_value.strip().lower()
    if normalized in TRUE_ENV_VALUES:
        return True
    if normalized in FALSE_ENV_VALUES:
        return False
    raise RangeshiftConfigError(
        f"Invalid {env_name} value: expected one of "
        f"{TRUE_ENV_VALUES + FALSE_ENV_VALUES}, got '{raw_value}'."
    )


def _parse_random_seed(raw_value: str) -> int:
    """Parse the random seed environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed integer seed.

    Raises:
        RangeshiftConfigError: If value cannot be parsed into int.
    """
    try:
        return int(raw_value)
    except ValueError as error:
        raise RangeshiftConfigError(
            "Invalid RANGESHIFT_RANDOM_SEED value: "
            f"expected integer, got '{raw_value}'. "
            "Set RANGESHIFT_RANDOM_SEED to a numeric value."
        ) from error


def _parse_log_level(raw_value: str) -> str:
    if raw_value in SUPPORTED_LOG_LEVELS:
        return raw_value
    raise RangeshiftConfigError(
        f"Invalid RANGESHIFT_LOG_LEVEL value '{raw_value}'. "
        f"Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
    )
