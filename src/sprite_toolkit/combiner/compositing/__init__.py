"""
Module: combiner.compositing

Purpose:
    Canvas assembly: placing regions and blending them in.
"""

from .compositor import compose, CompositeEntry
from .blending import overwrite, source_over, clip_window

__all__ = [
    "compose",
    "CompositeEntry",
    "overwrite",
    "source_over",
    "clip_window",
]
