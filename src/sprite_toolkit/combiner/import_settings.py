"""
Module: combiner.import_settings

Purpose:
    Read and write the per-image ".import.json" sidecar. The sidecar is
    this toolkit's stand-in for an engine's texture importer: it records
    whether raw pixel access is enabled for a source image and how a
    combined sprite should be imported.

Key Functions:
    - sidecar_path(): Path of the sidecar for an image
    - read_import_settings(): Load sidecar dict ({} if absent)
    - write_import_settings(): Atomically write sidecar dict

Dependencies:
    - json (std)
    - tempfile (std)

Used By:
    - combiner.extraction.sources: Initial readable flag of ImageSource
    - combiner.extraction.readability: SidecarReadability
    - combiner.output.writer: Sprite import settings
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".import.json"


def sidecar_path(image_path: Path) -> Path:
    """
    Get the sidecar path for an image.

    Example:
        >>> sidecar_path(Path("Sprites/hero.png"))
        PosixPath('Sprites/hero.png.import.json')
    """
    return image_path.with_name(image_path.name + SIDECAR_SUFFIX)


def read_import_settings(image_path: Path) -> Dict[str, Any]:
    """
    Load import settings for an image.

    Args:
        image_path: Path to the image (not the sidecar)

    Returns:
        Settings dict, empty if no sidecar exists.

    Raises:
        ValueError: If the sidecar exists but is not a JSON object
    """
    path = sidecar_path(image_path)
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Import settings must be a JSON object: {path}")
    return data


def write_import_settings(image_path: Path, settings: Dict[str, Any]) -> Path:
    """
    Write import settings for an image atomically.

    Args:
        image_path: Path to the image (not the sidecar)
        settings: Settings dict to write

    Returns:
        Path to the written sidecar.
    """
    path = sidecar_path(image_path)
    _atomic_write_json(settings, path)
    logger.debug(f"Wrote import settings {path}")
    return path


def _atomic_write_json(data: Dict[str, Any], path: Path) -> None:
    """Write JSON atomically using temp file. The temp file never outlives a failure."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".json",
        dir=path.parent,
        delete=False,
        encoding="utf-8",
    ) as f:
        temp_path = Path(f.name)
        try:
            json.dump(data, f, indent=2, sort_keys=True)
        except BaseException:
            f.close()
            temp_path.unlink(missing_ok=True)
            raise

    try:
        # replace() overwrites existing files on all platforms
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
