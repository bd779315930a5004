"""
Module: combiner.layout.sizer

Purpose:
    Compute the output canvas size from the region sizes and layout mode.

Key Functions:
    - canvas_size(): (width, height) of the combined canvas

Dependencies:
    None (pure functions)

Used By:
    - combiner.compositing.compositor: Canvas allocation
    - combiner.layout.offsets: Centering in overlay mode
"""

from __future__ import annotations

from typing import Sequence, Tuple

from sprite_toolkit.core.errors import EmptyCompositionError
from sprite_toolkit.core.models import LayoutMode

Size = Tuple[int, int]


def canvas_size(sizes: Sequence[Size], mode: LayoutMode) -> Size:
    """
    Calculate canvas dimensions.

    - horizontal: (sum of widths, max height)
    - vertical:   (max width, sum of heights)
    - overlay:    (max width, max height)

    Args:
        sizes: (width, height) of every region, in request order
        mode: Layout mode

    Returns:
        (width, height), each at least 1.

    Raises:
        EmptyCompositionError: If sizes is empty

    Example:
        >>> canvas_size([(16, 16), (32, 8)], LayoutMode.HORIZONTAL)
        (48, 16)
        >>> canvas_size([(16, 16), (32, 8)], LayoutMode.VERTICAL)
        (32, 24)
    """
    if not sizes:
        raise EmptyCompositionError("Cannot size a canvas for zero regions")

    widths = [w for w, _ in sizes]
    heights = [h for _, h in sizes]

    if mode is LayoutMode.HORIZONTAL:
        width, height = sum(widths), max(heights)
    elif mode is LayoutMode.VERTICAL:
        width, height = max(widths), sum(heights)
    elif mode is LayoutMode.OVERLAY:
        width, height = max(widths), max(heights)
    else:
        raise ValueError(f"Unsupported layout mode: {mode!r}")

    return (max(1, width), max(1, height))
