"""
Module: combiner.extraction.extractor

Purpose:
    Obtain the RGBA pixels of one crop of one source image.

    Two strategies are tried in order:
    1. direct - read the crop straight from the source's backing pixels
       (requires the source to be readable)
    2. render - draw the crop into a temporary offscreen surface of exactly
       the crop size and read the surface back

    Only when both fail is an ExtractionFailure raised; the caller decides
    whether that aborts anything.

Key Classes:
    - RegionExtractor: Try-primary, fall-back-to-secondary extraction

Dependencies:
    - combiner.extraction.surfaces: Offscreen surfaces for the render path
    - combiner.extraction.readability: Optional capability lease

Used By:
    - combiner.pipeline: combine_sprites()
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from sprite_toolkit.core.errors import ExtractionFailure
from sprite_toolkit.core.models import PixelBuffer, Rect, SourceRegion

from .readability import ReadabilityLease
from .sources import SpriteSource
from .surfaces import OffscreenSurfacePool

logger = logging.getLogger(__name__)

Strategy = Callable[[SpriteSource, Rect, Optional[ReadabilityLease]], PixelBuffer]


class RegionExtractor:
    """
    Extracts region pixels with a render fallback.

    Attributes:
        surfaces: Pool used by the render strategy
        use_fallback: Whether the render strategy is tried at all

    Example:
        >>> extractor = RegionExtractor()
        >>> buf = extractor.extract(source, Rect(0, 0, 16, 16))
        >>> buf.size
        (16, 16)
    """

    def __init__(
        self,
        surfaces: Optional[OffscreenSurfacePool] = None,
        *,
        use_fallback: bool = True,
    ) -> None:
        self.surfaces = surfaces or OffscreenSurfacePool()
        self.use_fallback = use_fallback
        self._strategies: List[Tuple[str, Strategy]] = [("direct", self._read_direct)]
        if use_fallback:
            self._strategies.append(("render", self._render_and_read_back))

    def extract(
        self,
        source: SpriteSource,
        rect: Rect,
        *,
        lease: Optional[ReadabilityLease] = None,
    ) -> PixelBuffer:
        """
        Extract one crop.

        Args:
            source: Source image handle
            rect: Crop rectangle in source-pixel space
            lease: Readability lease to request raw access through

        Returns:
            PixelBuffer of exactly rect.size

        Raises:
            ExtractionFailure: If every strategy failed
        """
        reason = "no extraction strategy available"
        for name, strategy in self._strategies:
            try:
                buffer = strategy(source, rect, lease)
            except Exception as exc:
                reason = f"{name}: {exc}"
                logger.debug(f"{name} extraction of {source.source_id} {rect.as_box()} failed: {exc}")
                continue
            if buffer.size != rect.size:
                reason = f"{name}: got {buffer.size}, expected {rect.size}"
                logger.debug(f"{name} extraction of {source.source_id} returned wrong size {buffer.size}")
                continue
            if name != "direct":
                logger.debug(f"Extracted {source.source_id} {rect.as_box()} via {name} fallback")
            return buffer
        raise ExtractionFailure(reason)

    def extract_region(
        self,
        region: SourceRegion,
        *,
        lease: Optional[ReadabilityLease] = None,
    ) -> PixelBuffer:
        """Extract a SourceRegion (see extract())."""
        return self.extract(region.source, region.rect, lease=lease)

    # ─────────────────────────────────────────────────────────────────────────
    # Strategies
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _read_direct(
        source: SpriteSource,
        rect: Rect,
        lease: Optional[ReadabilityLease],
    ) -> PixelBuffer:
        if lease is not None:
            lease.request(source)
        return source.read_pixels(rect)

    def _render_and_read_back(
        self,
        source: SpriteSource,
        rect: Rect,
        lease: Optional[ReadabilityLease],
    ) -> PixelBuffer:
        with self.surfaces.acquire(rect.width, rect.height) as surface:
            source.render(rect, surface)
            return PixelBuffer.from_image(surface)
