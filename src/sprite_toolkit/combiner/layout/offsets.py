"""
Module: combiner.layout.offsets

Purpose:
    Calculate where each region's top-left corner lands on the canvas.

Key Functions:
    - placement_offsets(): Offsets for every region of a request
    - centered_offset(): Offset that centers one size inside another

Dependencies:
    None (pure functions)

Used By:
    - combiner.compositing.compositor

Design Notes:
    Offsets are in canvas space with row 0 at the top.
    - horizontal: regions side by side in order, all top-aligned (y = 0)
    - vertical:   regions stacked top to bottom in order, left-aligned (x = 0)
    - overlay:    every region centered; odd leftovers round toward top-left

    Offsets are computed from every region in the request, including
    regions whose extraction later fails, so a skipped region leaves a
    transparent gap rather than shifting its neighbours.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from sprite_toolkit.core.models import LayoutMode

Size = Tuple[int, int]
Offset = Tuple[int, int]


def centered_offset(canvas: Size, region: Size) -> Offset:
    """
    Offset that centers region inside canvas.

    Example:
        >>> centered_offset((32, 32), (16, 8))
        (8, 12)
        >>> centered_offset((5, 5), (2, 2))
        (1, 1)
    """
    return ((canvas[0] - region[0]) // 2, (canvas[1] - region[1]) // 2)


def placement_offsets(
    sizes: Sequence[Size],
    mode: LayoutMode,
    canvas: Size,
) -> List[Offset]:
    """
    Calculate the top-left offset of every region.

    Args:
        sizes: (width, height) of every region, in request order
        mode: Layout mode
        canvas: Canvas (width, height) from canvas_size()

    Returns:
        List of (x, y) offsets, one per size.

    Example:
        >>> placement_offsets([(16, 16), (8, 32)], LayoutMode.HORIZONTAL, (24, 32))
        [(0, 0), (16, 0)]
        >>> placement_offsets([(16, 16), (8, 32)], LayoutMode.VERTICAL, (16, 48))
        [(0, 0), (0, 16)]
    """
    offsets: List[Offset] = []

    if mode is LayoutMode.HORIZONTAL:
        x = 0
        for width, _ in sizes:
            offsets.append((x, 0))
            x += width
    elif mode is LayoutMode.VERTICAL:
        y = 0
        for _, height in sizes:
            offsets.append((0, y))
            y += height
    elif mode is LayoutMode.OVERLAY:
        offsets = [centered_offset(canvas, size) for size in sizes]
    else:
        raise ValueError(f"Unsupported layout mode: {mode!r}")

    return offsets
