"""
Module: combiner.compositing.compositor

Purpose:
    Lay extracted regions out on a single transparent canvas.

Key Functions:
    - compose(): Build the canvas from entries and a layout mode

Key Classes:
    - CompositeEntry: Planned size of a region plus its pixels (or None
      when extraction failed)

Dependencies:
    - combiner.layout: Canvas size and offsets
    - combiner.compositing.blending: overwrite / source_over

Used By:
    - combiner.pipeline: combine_sprites()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from sprite_toolkit.core.errors import NoUsableRegionsError
from sprite_toolkit.core.models import LayoutMode, PixelBuffer

from ..layout import canvas_size, placement_offsets
from .blending import overwrite, source_over

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompositeEntry:
    """
    One slot in the layout.

    Attributes:
        size: Planned (width, height), taken from the crop rect
        buffer: Extracted pixels, or None if extraction failed
    """
    size: Tuple[int, int]
    buffer: Optional[PixelBuffer] = None

    @classmethod
    def of(cls, buffer: PixelBuffer) -> CompositeEntry:
        """Entry whose planned size is the buffer's own size."""
        return cls(buffer.size, buffer)

    @property
    def usable(self) -> bool:
        return self.buffer is not None


def compose(entries: Sequence[CompositeEntry], mode: LayoutMode) -> PixelBuffer:
    """
    Compose entries onto a transparent canvas.

    The canvas is sized from every entry, usable or not, so a missing
    region leaves a transparent gap at its planned position. Entries are
    drawn in order: under overlay, later entries end up on top.

    Args:
        entries: Layout slots in request order
        mode: Layout mode (selects offsets and blend rule)

    Returns:
        The finished canvas.

    Raises:
        EmptyCompositionError: If entries is empty
        NoUsableRegionsError: If no entry has pixels

    Example:
        >>> red = PixelBuffer.solid(4, 4, (255, 0, 0, 255))
        >>> blue = PixelBuffer.solid(4, 4, (0, 0, 255, 255))
        >>> canvas = compose([CompositeEntry.of(red), CompositeEntry.of(blue)], LayoutMode.OVERLAY)
        >>> canvas.pixel(0, 0)
        (0, 0, 255, 255)
    """
    sizes = [entry.size for entry in entries]
    width, height = canvas_size(sizes, mode)

    if not any(entry.usable for entry in entries):
        raise NoUsableRegionsError(f"None of the {len(entries)} regions could be extracted")

    offsets = placement_offsets(sizes, mode, (width, height))
    blend = source_over if mode.blends else overwrite

    canvas = PixelBuffer.transparent(width, height)
    for index, (entry, (x, y)) in enumerate(zip(entries, offsets)):
        if entry.buffer is None:
            logger.debug(f"Leaving gap for region {index} at ({x}, {y})")
            continue
        written = blend(canvas.pixels, entry.buffer.pixels, x, y)
        if written < entry.buffer.width * entry.buffer.height:
            logger.debug(
                f"Region {index} clipped: wrote {written} of "
                f"{entry.buffer.width * entry.buffer.height} pixels at ({x}, {y})"
            )

    return canvas
