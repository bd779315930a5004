"""
Core Models Package

Immutable, validated data models shared by every combiner stage.

All request/result models are frozen dataclasses. PixelBuffer is frozen
too, but its numpy array is the one mutable thing in a composition: the
compositor writes into the canvas array in place.
"""

from .rect import Rect
from .buffers import PixelBuffer
from .regions import LayoutMode, SourceRegion, CompositionRequest, CompositionResult

__all__ = [
    "Rect",
    "PixelBuffer",
    "LayoutMode",
    "SourceRegion",
    "CompositionRequest",
    "CompositionResult",
]
