"""Almanac readers for pipeline input.

This module loads almanac text from local files or the cached inputs
directory and parses it into seeds plus an ordered stage pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from core.config import RangeshiftConfig
from core.constants import INPUT_FILE_SUFFIX, MAP_HEADER_SUFFIX, SEEDS_HEADER
from core.errors import RangeshiftInputError
from core.logging_config import get_logger
from core.types import Almanac, Pipeline, StageMap
from remap.stage_map import build_stage_map

_LOGGER = get_logger(__name__)


@dataclass
class _StageDraft:
    """Stage rows collected while scanning one map block."""

    name: str
    rows: list[tuple[int, int, int]] = field(default_factory=list)


def read_almanac(source: str, config: RangeshiftConfig) -> Almanac:
    """Load and parse an almanac from disk.

    Args:
        source: File path, or a bare input name such as ``5`` resolved to
            ``<inputs_root>/5.txt``.
        config: Runtime configuration for input root and stage validation.

    Returns:
        Parsed almanac.

    Raises:
        RangeshiftInputError: If the file is missing, unreadable, or invalid.
    """
    input_path = resolve_input_path(source, config)
    try:
        text = input_path.read_text(encoding="utf-8")
    except OSError as error:
        raise RangeshiftInputError(
            f"Failed to read almanac at {input_path}: {error}. Check file permissions and retry."
        ) from error
    almanac = parse_almanac(text, validate_stages=config.validate_stages)
    _LOGGER.info(
        "almanac_loaded",
        path=str(input_path),
        seeds=len(almanac.seeds),
        stages=len(almanac.pipeline.stages),
    )
    return almanac


def resolve_input_path(source: str, config: RangeshiftConfig) -> Path:
    """Resolve a path or cached input name to an existing file.

    Raises:
        RangeshiftInputError: If neither location exists.
    """
    direct_path = Path(source).expanduser()
    if direct_path.is_file():
        return direct_path
    cached_path = config.inputs_root / f"{source}{INPUT_FILE_SUFFIX}"
    if cached_path.is_file():
        return cached_path
    raise RangeshiftInputError(
        f"Almanac not found at {direct_path} or {cached_path}. "
        "Provide an existing file path or place the input under RANGESHIFT_INPUTS_ROOT."
    )


def parse_almanac(text: str, validate_stages: bool = True) -> Almanac:
    """Parse almanac text into seeds and a stage pipeline.

    The text starts with a ``seeds:`` line followed by blocks headed
    ``<name> map:`` whose rows are ``destination source length`` triples.

    Args:
        text: Raw almanac text.
        validate_stages: Reject stages with overlapping source intervals.

    Returns:
        Parsed almanac.

    Raises:
        RangeshiftInputError: If the text is structurally invalid.
        MalformedIntervalError: If a stage row has a non-positive length.
        OverlappingSourceEntriesError: If validation is on and a stage overlaps.
    """
    seeds: tuple[int, ...] | None = None
    drafts: list[_StageDraft] = []
    for line_number, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.strip()
        if not line:
            continue
        if seeds is None:
            seeds = _parse_seeds_line(line, line_number)
            continue
        if line.endswith(MAP_HEADER_SUFFIX):
            name = line[: -len(MAP_HEADER_SUFFIX)].strip()
            drafts.append(_StageDraft(name=name))
            continue
        if not drafts:
            raise RangeshiftInputError(
                f"Unexpected row at line {line_number}: '{line}'. "
                f"Stage rows must follow a '<name> {MAP_HEADER_SUFFIX}' header."
            )
        drafts[-1].rows.append(_parse_stage_row(line, line_number))
    if seeds is None:
        raise RangeshiftInputError(f"Almanac is empty. Start it with a '{SEEDS_HEADER}' line.")
    stages = tuple(_build_stage(draft, validate_stages) for draft in drafts)
    return Almanac(seeds=seeds, pipeline=Pipeline(stages=stages))


def _parse_seeds_line(line: str, line_number: int) -> tuple[int, ...]:
    if not line.startswith(SEEDS_HEADER):
        raise RangeshiftInputError(
            f"Expected '{SEEDS_HEADER}' at line {line_number}, got '{line}'."
        )
    seeds = _parse_numbers(line[len(SEEDS_HEADER) :], line_number)
    if not seeds:
        raise RangeshiftInputError(f"Seed line {line_number} lists no numbers.")
    return seeds


def _parse_stage_row(line: str, line_number: int) -> tuple[int, int, int]:
    numbers = _parse_numbers(line, line_number)
    if len(numbers) != 3:
        raise RangeshiftInputError(
            f"Invalid stage row at line {line_number}: expected "
            f"'destination source length', got {len(numbers)} numbers."
        )
    return numbers[0], numbers[1], numbers[2]


def _parse_numbers(raw: str, line_number: int) -> tuple[int, ...]:
    try:
        return tuple(int(token) for token in raw.split())
    except ValueError as error:
        raise RangeshiftInputError(
            f"Invalid number at line {line_number}: {error}. Use base-10 integers."
        ) from error


def _build_stage(draft: _StageDraft, validate: bool) -> StageMap:
    return build_stage_map(draft.name, draft.rows, validate=validate)
