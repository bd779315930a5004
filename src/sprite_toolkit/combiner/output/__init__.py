"""
Module: combiner.output

Purpose:
    PNG encoding, file naming and persistence of combined sprites.
"""

from .encoder import encode_png, decode_png
from .naming import suggest_file_name, unique_path
from .writer import write_sprite

__all__ = [
    "encode_png",
    "decode_png",
    "suggest_file_name",
    "unique_path",
    "write_sprite",
]
