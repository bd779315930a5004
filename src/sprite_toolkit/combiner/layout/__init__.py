"""
Module: combiner.layout

Purpose:
    Canvas sizing and region placement for each layout mode.

Key Functions:
    - canvas_size(): Output dimensions
    - placement_offsets(): Top-left offset of every region
"""

from .sizer import canvas_size
from .offsets import placement_offsets, centered_offset

__all__ = [
    "canvas_size",
    "placement_offsets",
    "centered_offset",
]
