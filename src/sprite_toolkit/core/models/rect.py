"""
Module: core.models.rect

Purpose:
    Provides the Rect dataclass - a crop rectangle in source-pixel space.
    Every region handed to the combiner is described by one Rect.

Key Functions:
    - Rect.as_box(): PIL crop box (left, top, right, bottom)
    - Rect.intersect(w, h): Visible part of the rect inside an image
    - Rect.from_bottom_left(): Convert engine-style (bottom-left origin) rects
    - Rect.to_dict(): JSON form recorded in combined sprite import settings

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.regions.SourceRegion
    - combiner.extraction: Crop and render paths
    - combiner.loading: Parsing "path@x,y,w,h" specs
    - combiner.pipeline: Region list recorded in import settings
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Crop rectangle in pixels.

    Coordinates use a top-left origin, matching PIL. The covered area is
    [x, x + width) x [y, y + height).

    Attributes:
        x: Left edge (inclusive)
        y: Top edge (inclusive)
        width: Width in pixels
        height: Height in pixels

    Invariants:
        - x >= 0, y >= 0
        - width >= 1, height >= 1

    Example:
        >>> rect = Rect(16, 0, 16, 32)
        >>> rect.as_box()
        (16, 0, 32, 32)
    """

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate rect on construction."""
        if self.x < 0:
            raise ValueError(f"x must be >= 0: {self.x}")
        if self.y < 0:
            raise ValueError(f"y must be >= 0: {self.y}")
        if self.width < 1:
            raise ValueError(f"width must be >= 1: {self.width}")
        if self.height < 1:
            raise ValueError(f"height must be >= 1: {self.height}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> int:
        """X-coordinate of the right edge (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Y-coordinate of the bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) tuple."""
        return (self.width, self.height)

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry
    # ─────────────────────────────────────────────────────────────────────────

    def as_box(self) -> Tuple[int, int, int, int]:
        """Get as (left, top, right, bottom) tuple for PIL."""
        return (self.x, self.y, self.right, self.bottom)

    def fits_within(self, width: int, height: int) -> bool:
        """True if the whole rect lies inside an image of the given size."""
        return self.right <= width and self.bottom <= height

    def intersect(self, width: int, height: int) -> Optional[Rect]:
        """
        Clip this rect to an image of the given size.

        Args:
            width: Image width
            height: Image height

        Returns:
            The visible part of the rect, or None if nothing is visible.

        Example:
            >>> Rect(8, 8, 16, 16).intersect(16, 16)
            Rect(x=8, y=8, width=8, height=8)
        """
        right = min(self.right, width)
        bottom = min(self.bottom, height)
        if right <= self.x or bottom <= self.y:
            return None
        return Rect(self.x, self.y, right - self.x, bottom - self.y)

    @classmethod
    def from_bottom_left(
        cls,
        x: int,
        y: int,
        width: int,
        height: int,
        image_height: int,
    ) -> Rect:
        """
        Build a Rect from a bottom-left origin rect.

        Sprite rects exported from the game engine measure y from the
        bottom of the texture. This flips them into PIL's top-left space.

        Example:
            >>> Rect.from_bottom_left(0, 0, 16, 16, image_height=64)
            Rect(x=0, y=48, width=16, height=16)
        """
        return cls(x, image_height - y - height, width, height)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
