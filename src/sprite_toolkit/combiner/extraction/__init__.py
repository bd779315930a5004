"""
Module: combiner.extraction

Purpose:
    Region extraction: source handles, the direct/render extraction
    strategies, offscreen surfaces and scoped readability toggling.

Key Classes:
    - SpriteSource, ImageSource: Source image handles
    - RegionExtractor: Direct read with render fallback
    - OffscreenSurfacePool: Temporary surfaces for the render path
    - ReadabilityLease: Enable raw access, restore on exit
"""

from .sources import SpriteSource, ImageSource
from .surfaces import OffscreenSurfacePool
from .readability import (
    ReadabilityController,
    InMemoryReadability,
    SidecarReadability,
    ReadabilityLease,
)
from .extractor import RegionExtractor

__all__ = [
    "SpriteSource",
    "ImageSource",
    "OffscreenSurfacePool",
    "ReadabilityController",
    "InMemoryReadability",
    "SidecarReadability",
    "ReadabilityLease",
    "RegionExtractor",
]
