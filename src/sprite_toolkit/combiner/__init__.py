"""
Module: combiner

Purpose:
    Combine rectangular crops of one or more images into a single sprite,
    laid out horizontally, vertically, or as a centered alpha-blended
    overlay, and write it as a lossless PNG.

Key Functions:
    - combine_sprites(): Request -> CompositionResult (in memory)
    - save_combined(): Request -> PNG file + import settings
    - open_request(): Build a request from "path@x,y,w,h" specs

Key Classes:
    - CombineConfig: Output/encoding configuration
    - RegionExtractor: Direct read with render fallback
"""

from .config import CombineConfig, SpriteImportSettings
from .extraction import ImageSource, RegionExtractor, ReadabilityLease
from .pipeline import combine_sprites, save_combined, SaveResult
from .loading import open_request, parse_region_spec

__all__ = [
    "CombineConfig",
    "SpriteImportSettings",
    "ImageSource",
    "RegionExtractor",
    "ReadabilityLease",
    "combine_sprites",
    "save_combined",
    "SaveResult",
    "open_request",
    "parse_region_spec",
]
