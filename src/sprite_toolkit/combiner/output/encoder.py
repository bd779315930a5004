"""
Module: combiner.output.encoder

Purpose:
    Serialize a finished canvas to PNG bytes.

    Encoding is deterministic: the same pixels always produce the same
    bytes. No text, time or colour-profile chunks are written; anything
    run-dependent (like the timestamped file name) belongs to the writer.

Key Functions:
    - encode_png(): PixelBuffer -> PNG bytes
    - decode_png(): PNG bytes -> PixelBuffer

Dependencies:
    - PIL.Image: PNG codec

Used By:
    - combiner.pipeline: save_combined()
"""

from __future__ import annotations

import io
import logging

from PIL import Image

from sprite_toolkit.core.errors import EncodingFailure
from sprite_toolkit.core.models import PixelBuffer

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def encode_png(canvas: PixelBuffer, *, compress_level: int = 6) -> bytes:
    """
    Encode a canvas as an RGBA PNG.

    Args:
        canvas: Finished canvas
        compress_level: zlib level 0-9 (affects size only, never pixels)

    Returns:
        PNG file contents.

    Raises:
        EncodingFailure: If Pillow cannot encode the buffer

    Example:
        >>> data = encode_png(PixelBuffer.solid(2, 2, (255, 0, 0, 255)))
        >>> data[:8] == PNG_SIGNATURE
        True
    """
    image = canvas.to_image()
    # Fresh image from an array carries no info dict, so no ancillary chunks
    image.info.clear()

    out = io.BytesIO()
    try:
        image.save(out, format="PNG", compress_level=compress_level, optimize=False)
    except (OSError, ValueError) as exc:
        raise EncodingFailure(f"Could not encode {canvas.width}x{canvas.height} canvas: {exc}") from exc
    finally:
        image.close()

    data = out.getvalue()
    logger.debug(f"Encoded {canvas.width}x{canvas.height} canvas to {len(data)} bytes")
    return data


def decode_png(data: bytes) -> PixelBuffer:
    """
    Decode PNG bytes back into a PixelBuffer.

    Raises:
        ValueError: If data is not a PNG
    """
    if not data.startswith(PNG_SIGNATURE):
        raise ValueError("Data is not a PNG")
    with Image.open(io.BytesIO(data)) as image:
        image.load()
        return PixelBuffer.from_image(image)
