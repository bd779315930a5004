"""
Module: combiner.extraction.sources

Purpose:
    Source image handles. A source exposes two ways of getting at a crop:
    raw pixel access (only while the source is readable) and rendering
    into an offscreen surface (always available).

Key Classes:
    - SpriteSource: Abstract source handle
    - ImageSource: Source backed by a PIL image (in memory or lazily opened)

Dependencies:
    - PIL: Image access
    - combiner.import_settings: Initial readable flag from sidecar

Used By:
    - combiner.extraction.extractor: Direct and render strategies
    - combiner.loading: Opening sources named on the command line
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

from sprite_toolkit.core.errors import SourceNotReadableError
from sprite_toolkit.core.models import PixelBuffer, Rect

from ..import_settings import read_import_settings

logger = logging.getLogger(__name__)


class SpriteSource(ABC):
    """
    Abstract source image handle.

    Mirrors a texture in a game engine: its pixels can be read directly
    only while the source is flagged readable, but it can always be drawn.
    """

    @property
    @abstractmethod
    def source_id(self) -> str:
        """Stable identifier used in logs and error reports."""

    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """(width, height) of the whole source image."""

    @property
    @abstractmethod
    def readable(self) -> bool:
        """Whether raw pixel access is currently enabled."""

    @readable.setter
    @abstractmethod
    def readable(self, value: bool) -> None:
        ...

    @abstractmethod
    def read_pixels(self, rect: Rect) -> PixelBuffer:
        """
        Read a crop directly from the backing pixels.

        Args:
            rect: Crop rectangle, must lie inside the source

        Returns:
            PixelBuffer of exactly rect.size

        Raises:
            SourceNotReadableError: If raw access is disabled
            ValueError: If rect exceeds the source bounds
        """

    @abstractmethod
    def render(self, rect: Rect, surface: Image.Image) -> None:
        """
        Draw a crop into an RGBA surface of exactly rect.size.

        The part of rect that falls outside the source is left untouched
        (transparent on a cleared surface).

        Raises:
            ValueError: If rect does not overlap the source at all
        """

    def close(self) -> None:
        """Release any backing resources."""

    def __enter__(self) -> "SpriteSource":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source_id!r})"


class ImageSource(SpriteSource):
    """
    Source backed by a PIL image.

    Either wraps an image already in memory or loads one lazily from a
    path on first access.

    Example:
        >>> with ImageSource.open(Path("Sprites/hero.png")) as src:
        ...     buf = src.read_pixels(Rect(0, 0, 16, 16))
    """

    def __init__(
        self,
        image: Optional[Image.Image] = None,
        *,
        source_id: Optional[str] = None,
        path: Optional[Path] = None,
        readable: bool = True,
    ) -> None:
        """
        Initialize source.

        Args:
            image: Image already in memory (takes precedence over path)
            source_id: Identifier (defaults to the path, or "<memory>")
            path: Image file to load lazily when image is None
            readable: Initial raw-access flag
        """
        if image is None and path is None:
            raise ValueError("ImageSource needs an image or a path")
        self._image: Optional[Image.Image] = None
        self._owns_image = image is None
        self._path = path
        self._source_id = source_id or (str(path) if path is not None else "<memory>")
        self._readable = readable
        if image is not None:
            self._image = image if image.mode == "RGBA" else image.convert("RGBA")

    @classmethod
    def open(cls, path: Path, *, readable: Optional[bool] = None) -> ImageSource:
        """
        Create a lazily loaded source for an image file.

        Args:
            path: Image file
            readable: Raw-access flag; None reads it from the .import.json
                sidecar (readable when there is no sidecar, not readable
                when the sidecar cannot be parsed)
        """
        if readable is None:
            try:
                readable = bool(read_import_settings(path).get("readable", True))
            except (OSError, ValueError) as exc:
                logger.warning(f"Ignoring unreadable import settings for {path}, using render path: {exc}")
                readable = False
        return cls(source_id=str(path), path=path, readable=readable)

    @property
    def source_id(self) -> str:
        return self._source_id

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def size(self) -> Tuple[int, int]:
        return self._get_image().size

    @property
    def readable(self) -> bool:
        return self._readable

    @readable.setter
    def readable(self, value: bool) -> None:
        self._readable = bool(value)

    def read_pixels(self, rect: Rect) -> PixelBuffer:
        if not self._readable:
            raise SourceNotReadableError(f"Source is not readable: {self._source_id}")
        image = self._get_image()
        if not rect.fits_within(*image.size):
            raise ValueError(
                f"Rect {rect.as_box()} exceeds source {self._source_id} size {image.size}"
            )
        return PixelBuffer.from_image(image.crop(rect.as_box()))

    def render(self, rect: Rect, surface: Image.Image) -> None:
        if surface.size != rect.size:
            raise ValueError(f"Surface size {surface.size} does not match rect size {rect.size}")
        image = self._get_image()
        visible = rect.intersect(*image.size)
        if visible is None:
            raise ValueError(
                f"Rect {rect.as_box()} lies outside source {self._source_id} size {image.size}"
            )
        # Visible part always starts at the rect origin; only right/bottom are clipped
        surface.paste(image.crop(visible.as_box()), (0, 0))

    def _get_image(self) -> Image.Image:
        """Lazy load image."""
        if self._image is None:
            assert self._path is not None
            if not self._path.exists():
                raise FileNotFoundError(f"Source image not found: {self._path}")
            with Image.open(self._path) as img:
                img.load()
                self._image = img.convert("RGBA")
        return self._image

    def close(self) -> None:
        """Drop the loaded image if this source opened it."""
        if self._owns_image and self._image is not None:
            self._image.close()
            self._image = None
