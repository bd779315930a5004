"""
Module: combiner.output.naming

Purpose:
    Suggest unique file names for combined sprites.

Key Functions:
    - suggest_file_name(): "combined_20250101_120000.png"
    - unique_path(): Avoid overwriting an existing file

Used By:
    - combiner.pipeline: save_combined()
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from ..config import DEFAULT_FILE_PREFIX, DEFAULT_TIMESTAMP_FORMAT

PNG_SUFFIX = ".png"


def suggest_file_name(
    prefix: str = DEFAULT_FILE_PREFIX,
    now: datetime | None = None,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> str:
    """
    Build a timestamped file name.

    Example:
        >>> suggest_file_name("combined", datetime(2025, 3, 9, 14, 5, 7))
        'combined_20250309_140507.png'
    """
    now = now or datetime.now()
    return f"{prefix}_{now.strftime(timestamp_format)}{PNG_SUFFIX}"


def unique_path(directory: Path, file_name: str) -> Path:
    """
    Path in directory that does not exist yet.

    Appends _1, _2, ... to the stem when needed (two combines within the
    same second would otherwise collide).

    Example:
        >>> unique_path(Path("out"), "combined_20250309_140507.png")
        PosixPath('out/combined_20250309_140507_1.png')  # if the first exists
    """
    candidate = directory / file_name
    stem, suffix = candidate.stem, candidate.suffix
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}_{counter}{suffix}"
        counter += 1
    return candidate
