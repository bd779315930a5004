"""
Module: combiner.extraction.surfaces

Purpose:
    Temporary offscreen surfaces for the render-and-read-back extraction
    path. Surfaces are acquired in a `with` block and are always returned
    to the pool when the block exits, including on exceptions.

Key Classes:
    - OffscreenSurfacePool: Size-keyed pool of RGBA surfaces

Dependencies:
    - PIL.Image: Surface storage

Used By:
    - combiner.extraction.extractor: Render strategy
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple

from PIL import Image

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class OffscreenSurfacePool:
    """
    Pool of temporary RGBA surfaces, keyed by size.

    Every surface handed out is cleared to transparent and sized exactly
    as requested. `active_count` is zero whenever no `acquire()` block is
    open.

    Example:
        >>> pool = OffscreenSurfacePool()
        >>> with pool.acquire(16, 16) as surface:
        ...     source.render(rect, surface)
        ...     buf = PixelBuffer.from_image(surface)
        >>> pool.active_count
        0
    """

    def __init__(self, max_pooled: int = 8) -> None:
        """
        Initialize pool.

        Args:
            max_pooled: Maximum idle surfaces kept for reuse. Extra surfaces
                are closed on release.
        """
        if max_pooled < 0:
            raise ValueError(f"max_pooled must be non-negative: {max_pooled}")
        self._max_pooled = max_pooled
        self._idle: Dict[Tuple[int, int], List[Image.Image]] = {}
        self._active = 0

    @property
    def active_count(self) -> int:
        """Surfaces currently acquired and not yet released."""
        return self._active

    @property
    def idle_count(self) -> int:
        """Surfaces waiting in the pool."""
        return sum(len(v) for v in self._idle.values())

    @contextmanager
    def acquire(self, width: int, height: int) -> Iterator[Image.Image]:
        """
        Acquire a cleared surface of exactly width x height.

        The surface is released when the block exits, whether normally or
        by exception. Do not keep references to it after the block.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Surface must be at least 1x1: {width}x{height}")
        surface = self._take(width, height)
        self._active += 1
        try:
            yield surface
        finally:
            self._active -= 1
            self._release(surface)

    def clear(self) -> None:
        """Close every idle surface."""
        for surfaces in self._idle.values():
            for surface in surfaces:
                surface.close()
        self._idle.clear()

    def _take(self, width: int, height: int) -> Image.Image:
        bucket = self._idle.get((width, height))
        if bucket:
            surface = bucket.pop()
            surface.paste(TRANSPARENT, (0, 0, width, height))
            return surface
        logger.debug(f"Allocating offscreen surface {width}x{height}")
        return Image.new("RGBA", (width, height), TRANSPARENT)

    def _release(self, surface: Image.Image) -> None:
        if self.idle_count >= self._max_pooled:
            surface.close()
            return
        self._idle.setdefault(surface.size, []).append(surface)
