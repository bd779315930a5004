"""
Module: combiner.compositing.blending

Purpose:
    Write one region's pixels into the canvas array, either replacing the
    destination or alpha-blending over it (Porter-Duff source-over).

    Both operations work on whole clipped windows with numpy; any part of
    the region that falls outside the canvas is dropped silently.

Key Functions:
    - clip_window(): Canvas/region slices for the visible overlap
    - overwrite(): Replace destination pixels
    - source_over(): Non-premultiplied source-over blend

Dependencies:
    - numpy: Bulk pixel math

Used By:
    - combiner.compositing.compositor
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

Window = Tuple[Tuple[slice, slice], Tuple[slice, slice]]


def clip_window(
    canvas_shape: Tuple[int, ...],
    region_shape: Tuple[int, ...],
    x: int,
    y: int,
) -> Optional[Window]:
    """
    Calculate the visible overlap of a region placed at (x, y).

    Args:
        canvas_shape: Canvas array shape (height, width, ...)
        region_shape: Region array shape (height, width, ...)
        x: Region left edge in canvas space (may be negative)
        y: Region top edge in canvas space (may be negative)

    Returns:
        ((canvas_rows, canvas_cols), (region_rows, region_cols)) slices, or
        None when the region lies entirely outside the canvas.

    Example:
        >>> clip_window((4, 4, 4), (2, 2, 4), 3, 3)
        ((slice(3, 4, None), slice(3, 4, None)), (slice(0, 1, None), slice(0, 1, None)))
    """
    canvas_h, canvas_w = canvas_shape[0], canvas_shape[1]
    region_h, region_w = region_shape[0], region_shape[1]

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + region_w, canvas_w), min(y + region_h, canvas_h)
    if x1 <= x0 or y1 <= y0:
        return None

    dst = (slice(y0, y1), slice(x0, x1))
    src = (slice(y0 - y, y1 - y), slice(x0 - x, x1 - x))
    return dst, src


def overwrite(canvas: np.ndarray, region: np.ndarray, x: int, y: int) -> int:
    """
    Copy region pixels over the canvas (alpha included).

    Args:
        canvas: (H, W, 4) uint8 canvas, modified in place
        region: (h, w, 4) uint8 region
        x, y: Region top-left in canvas space

    Returns:
        Number of pixels written.
    """
    window = clip_window(canvas.shape, region.shape, x, y)
    if window is None:
        return 0
    dst, src = window
    canvas[dst] = region[src]
    return _area(dst)


def source_over(canvas: np.ndarray, region: np.ndarray, x: int, y: int) -> int:
    """
    Blend region pixels over the canvas with Porter-Duff source-over.

    For each pixel, with alphas normalized to [0, 1]:

        out_a = src_a + dst_a * (1 - src_a)
        out_c = (src_c * src_a + dst_c * dst_a * (1 - src_a)) / out_a

    Where out_a is 0 the result is (0, 0, 0, 0). Results are rounded to the
    nearest integer (halves round up).

    Args:
        canvas: (H, W, 4) uint8 canvas, modified in place
        region: (h, w, 4) uint8 region, non-premultiplied
        x, y: Region top-left in canvas space

    Returns:
        Number of pixels written.
    """
    window = clip_window(canvas.shape, region.shape, x, y)
    if window is None:
        return 0
    dst, src = window

    src_px = region[src].astype(np.float64)
    dst_px = canvas[dst].astype(np.float64)

    src_a = src_px[..., 3:4] / 255.0
    dst_a = dst_px[..., 3:4] / 255.0
    dst_weight = dst_a * (1.0 - src_a)

    out_a = src_a + dst_weight
    numerator = src_px[..., :3] * src_a + dst_px[..., :3] * dst_weight
    covered = out_a > 0.0

    out_c = np.divide(numerator, out_a, out=np.zeros_like(numerator), where=covered)

    out = np.empty_like(src_px)
    out[..., :3] = out_c
    out[..., 3:4] = out_a * 255.0
    out = np.floor(out + 0.5)
    np.clip(out, 0.0, 255.0, out=out)
    out[~covered[..., 0]] = 0.0

    canvas[dst] = out.astype(np.uint8)
    return _area(dst)


def _area(window: Tuple[slice, slice]) -> int:
    rows, cols = window
    return (rows.stop - rows.start) * (cols.stop - cols.start)
