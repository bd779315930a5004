"""
Module: core.models.regions

Purpose:
    Request/result models for one sprite composition: the layout mode,
    the ordered list of source regions, and the outcome.

Key Classes:
    - LayoutMode: horizontal | vertical | overlay
    - SourceRegion: (source handle, crop rect)
    - CompositionRequest: Ordered regions + layout mode
    - CompositionResult: Canvas plus included/skipped accounting

Dependencies:
    - core.models.rect, core.models.buffers
    - core.errors.ErrorKind

Used By:
    - combiner.pipeline
    - combiner.loading
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence, Tuple

from ..errors import ErrorKind
from .buffers import PixelBuffer
from .rect import Rect

if TYPE_CHECKING:
    from sprite_toolkit.combiner.extraction.sources import SpriteSource


class LayoutMode(str, Enum):
    """
    How regions are arranged on the canvas.

    Selects both the canvas sizing formula and the placement/blend rule.
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    OVERLAY = "overlay"

    @classmethod
    def parse(cls, value: str) -> LayoutMode:
        """
        Parse a mode identifier (case-insensitive).

        Raises:
            ValueError: If value is not a known mode
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown layout mode {value!r} (expected one of: {valid})") from None

    @property
    def blends(self) -> bool:
        """True if regions are alpha-blended rather than copied."""
        return self is LayoutMode.OVERLAY


@dataclass(frozen=True)
class SourceRegion:
    """
    One crop of one source image.

    The region borrows the source handle for the duration of a
    composition; it never closes it.

    Attributes:
        source: Source image handle
        rect: Crop rectangle in source-pixel space
    """
    source: SpriteSource
    rect: Rect

    @property
    def source_id(self) -> str:
        return self.source.source_id

    @property
    def size(self) -> Tuple[int, int]:
        return self.rect.size


@dataclass(frozen=True)
class CompositionRequest:
    """
    Ordered regions plus layout mode.

    Order determines horizontal/vertical stacking order and overlay
    z-order (later entries are drawn on top).
    """
    regions: Tuple[SourceRegion, ...]
    mode: LayoutMode

    @classmethod
    def of(cls, regions: Sequence[SourceRegion], mode: LayoutMode | str) -> CompositionRequest:
        """Build a request from any sequence and a mode or mode identifier."""
        if isinstance(mode, str) and not isinstance(mode, LayoutMode):
            mode = LayoutMode.parse(mode)
        return cls(tuple(regions), mode)

    def __len__(self) -> int:
        return len(self.regions)


@dataclass(frozen=True)
class CompositionResult:
    """
    Outcome of a composition (immutable).

    Attributes:
        canvas: Finished RGBA canvas
        included_count: Regions successfully extracted and composited
        skipped_count: Regions skipped because extraction failed
        errors: (region_index, ErrorKind) for every skipped region

    Example:
        >>> result = combine_sprites(request)
        >>> print(f"{result.included_count} combined, {result.skipped_count} skipped")
    """
    canvas: PixelBuffer
    included_count: int
    skipped_count: int
    errors: Tuple[Tuple[int, ErrorKind], ...] = ()

    @property
    def attempted(self) -> int:
        """Regions that had an extraction attempt."""
        return self.included_count + self.skipped_count

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.canvas.size

    @property
    def skipped_indices(self) -> Tuple[int, ...]:
        return tuple(index for index, _ in self.errors)
