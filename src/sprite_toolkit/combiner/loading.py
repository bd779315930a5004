"""
Module: combiner.loading

Purpose:
    Turn region specs ("path" or "path@x,y,w,h") into a CompositionRequest.

    A bare path selects the whole image. Specs that name the same file
    share one ImageSource, so each file is opened (and toggled readable)
    at most once per run. Missing files are reported and left out of the
    request, the same as an unloadable texture in the editor.

Key Functions:
    - parse_region_spec(): Split a spec into path and optional rect values
    - open_request(): Context manager yielding a request, closing sources after

Dependencies:
    - combiner.extraction.sources: ImageSource

Used By:
    - cli
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from sprite_toolkit.core.models import CompositionRequest, LayoutMode, Rect, SourceRegion

from .extraction.sources import ImageSource

logger = logging.getLogger(__name__)

RECT_SEPARATOR = "@"

RectValues = Tuple[int, int, int, int]


def parse_region_spec(spec: str) -> Tuple[Path, Optional[RectValues]]:
    """
    Parse a region spec.

    Args:
        spec: "path" or "path@x,y,width,height"

    Returns:
        Tuple of (path, rect values or None for the whole image).

    Raises:
        ValueError: If the rect part is malformed

    Example:
        >>> parse_region_spec("atlas.png@0,16,16,16")
        (PosixPath('atlas.png'), (0, 16, 16, 16))
        >>> parse_region_spec("hero.png")
        (PosixPath('hero.png'), None)
    """
    if not spec:
        raise ValueError("Empty region spec")
    path_part, sep, rect_part = spec.rpartition(RECT_SEPARATOR)
    if not sep:
        return Path(spec), None
    if not path_part:
        raise ValueError(f"Region spec has no path: {spec!r}")

    fields = [f.strip() for f in rect_part.split(",")]
    if len(fields) != 4:
        raise ValueError(f"Rect must be x,y,width,height: {rect_part!r}")
    try:
        x, y, w, h = (int(f) for f in fields)
    except ValueError:
        raise ValueError(f"Rect values must be integers: {rect_part!r}") from None
    return Path(path_part), (x, y, w, h)


@contextmanager
def open_request(
    specs: Sequence[str],
    mode: LayoutMode,
    *,
    bottom_left: bool = False,
) -> Iterator[CompositionRequest]:
    """
    Open sources for specs and yield a request.

    Args:
        specs: Region specs in layout order
        mode: Layout mode
        bottom_left: Interpret rect y as measured from the image bottom

    Yields:
        CompositionRequest over the specs whose images could be opened.
        Missing or undecodable images are logged and skipped.

    Raises:
        ValueError: If a spec is malformed

    Example:
        >>> with open_request(["a.png", "b.png"], LayoutMode.HORIZONTAL) as request:
        ...     result = combine_sprites(request)
    """
    parsed = [parse_region_spec(spec) for spec in specs]
    sources: Dict[Path, ImageSource] = {}
    regions: List[SourceRegion] = []
    try:
        for path, values in parsed:
            key = path.resolve()
            if key not in sources:
                if not path.is_file():
                    logger.error(f"Failed to load image at path {path}")
                    continue
                sources[key] = ImageSource.open(path)
            source = sources[key]
            try:
                rect = _rect_for(source, values, bottom_left)
            except OSError as exc:
                logger.error(f"Failed to load image at path {path}: {exc}")
                continue
            regions.append(SourceRegion(source, rect))
        yield CompositionRequest.of(regions, mode)
    finally:
        for source in sources.values():
            source.close()


def _rect_for(source: ImageSource, values: Optional[RectValues], bottom_left: bool) -> Rect:
    if values is None:
        width, height = source.size
        return Rect(0, 0, width, height)
    x, y, w, h = values
    if bottom_left:
        return Rect.from_bottom_left(x, y, w, h, image_height=source.size[1])
    return Rect(x, y, w, h)
