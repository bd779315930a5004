"""
Module: combiner.output.writer

Purpose:
    Persist an encoded sprite and register its import settings.

    The PNG is written atomically (temp file then replace) so a failed
    write never leaves a partial image behind. The .import.json sidecar
    records that the file is a point-filtered sprite with no mipmaps.

Key Functions:
    - write_sprite(): Write PNG bytes (+ sidecar) to a path

Dependencies:
    - tempfile (std)
    - combiner.import_settings: Sidecar writing

Used By:
    - combiner.pipeline: save_combined()
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from sprite_toolkit.core.errors import PersistenceFailure

from ..config import SpriteImportSettings
from ..import_settings import write_import_settings

logger = logging.getLogger(__name__)


def write_sprite(
    data: bytes,
    path: Path,
    *,
    settings: Optional[SpriteImportSettings] = None,
    pixel_size: Optional[Tuple[int, int]] = None,
    regions: Optional[List[Dict[str, Any]]] = None,
) -> Tuple[Path, Optional[Path]]:
    """
    Write an encoded sprite to disk.

    Creates:
        {path}              # PNG bytes
        {path}.import.json  # Import settings (if settings given)

    Args:
        data: Encoded PNG bytes
        path: Destination file
        settings: Import settings for the sidecar; None skips the sidecar
        pixel_size: (width, height) recorded in the sidecar
        regions: Per-region records (source, rect, included) for the sidecar

    Returns:
        Tuple of (image_path, sidecar_path or None).

    Raises:
        PersistenceFailure: If either file cannot be written. When the
            sidecar fails, the image written just before is removed again.
    """
    try:
        _atomic_write_bytes(data, path)
    except OSError as exc:
        raise PersistenceFailure(f"Could not write sprite {path}: {exc}") from exc

    if settings is None:
        logger.debug(f"Wrote sprite {path} ({len(data)} bytes)")
        return path, None

    sidecar = settings.to_dict()
    if pixel_size is not None:
        sidecar["width"], sidecar["height"] = pixel_size
    if regions is not None:
        sidecar["regions"] = regions
    try:
        sidecar_file = write_import_settings(path, sidecar)
    except OSError as exc:
        path.unlink(missing_ok=True)
        raise PersistenceFailure(f"Could not write import settings for {path}: {exc}") from exc

    logger.debug(f"Wrote sprite {path} ({len(data)} bytes) with import settings")
    return path, sidecar_file


def _atomic_write_bytes(data: bytes, path: Path) -> None:
    """Write bytes atomically using temp file. The temp file never outlives a failure."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        suffix=path.suffix or ".tmp",
        dir=path.parent,
        delete=False,
    ) as f:
        temp_path = Path(f.name)
        try:
            f.write(data)
        except BaseException:
            f.close()
            temp_path.unlink(missing_ok=True)
            raise

    try:
        # Use replace() instead of rename() for Windows compatibility
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
