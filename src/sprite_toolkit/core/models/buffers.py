"""
Module: core.models.buffers

Purpose:
    Provides the PixelBuffer dataclass - an RGBA8 raster held as a numpy
    array. Extraction produces buffers, the compositor blends them and the
    encoder serializes the final canvas.

Key Functions:
    - PixelBuffer.transparent(w, h): Fully transparent buffer
    - PixelBuffer.solid(w, h, rgba): Single-colour buffer
    - PixelBuffer.from_image(img): Copy pixels out of a PIL image
    - PixelBuffer.to_image(): Wrap pixels as a PIL RGBA image

Dependencies:
    - numpy: Pixel storage
    - PIL.Image: Conversion to and from images

Used By:
    - combiner.extraction: Region pixels
    - combiner.compositing: Canvas and region blending
    - combiner.output.encoder: PNG encoding

Design Notes:
    Pixels are non-premultiplied RGBA8, row-major, row 0 at the top.
    Array shape is always (height, width, 4) with dtype uint8.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image

CHANNELS = 4

RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    RGBA8 raster.

    The dataclass is frozen but the underlying array is not: the compositor
    writes into the canvas array in place. Buffers are never shared between
    compositions.

    Attributes:
        pixels: numpy array of shape (height, width, 4), dtype uint8

    Example:
        >>> buf = PixelBuffer.solid(2, 3, (255, 0, 0, 255))
        >>> buf.size
        (2, 3)
        >>> buf.pixel(1, 2)
        (255, 0, 0, 255)
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        """Validate array layout on construction."""
        arr = self.pixels
        if not isinstance(arr, np.ndarray):
            raise TypeError(f"pixels must be a numpy array, got {type(arr).__name__}")
        if arr.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {arr.dtype}")
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise ValueError(f"pixels must have shape (h, w, 4), got {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError(f"buffer must be at least 1x1, got {arr.shape[1]}x{arr.shape[0]}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) tuple, same order as PIL."""
        return (self.width, self.height)

    # ─────────────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def transparent(cls, width: int, height: int) -> PixelBuffer:
        """Buffer with every pixel (0, 0, 0, 0)."""
        return cls(np.zeros((height, width, CHANNELS), dtype=np.uint8))

    @classmethod
    def solid(cls, width: int, height: int, rgba: RGBA) -> PixelBuffer:
        """Buffer filled with one colour."""
        arr = np.empty((height, width, CHANNELS), dtype=np.uint8)
        arr[:, :] = rgba
        return cls(arr)

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        """
        Copy pixels out of a PIL image.

        Non-RGBA images are converted first. The returned buffer owns its
        array and does not alias the image.
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    # ─────────────────────────────────────────────────────────────────────────
    # Accessors
    # ─────────────────────────────────────────────────────────────────────────

    def to_image(self) -> Image.Image:
        """Wrap a copy of the pixels as a PIL RGBA image."""
        return Image.fromarray(self.pixels.copy())

    def tobytes(self) -> bytes:
        """Raw RGBA bytes, row-major from the top row."""
        return self.pixels.tobytes()

    def pixel(self, x: int, y: int) -> RGBA:
        """Single pixel as an (r, g, b, a) tuple. Intended for tests and debugging."""
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def copy(self) -> PixelBuffer:
        return PixelBuffer(self.pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
