import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import sprite_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from sprite_toolkit.combiner.extraction.sources import ImageSource, SpriteSource  # noqa: E402
from sprite_toolkit.core.models import PixelBuffer, Rect  # noqa: E402

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


class BrokenSource(SpriteSource):
    """Source whose direct and render paths both fail."""

    def __init__(self, source_id: str = "broken", size=(16, 16)):
        self._size = size
        self._source_id = source_id
        self._readable = True
        self.render_calls = 0

    @property
    def source_id(self):
        return self._source_id

    @property
    def size(self):
        return self._size

    @property
    def readable(self):
        return self._readable

    @readable.setter
    def readable(self, value):
        self._readable = value

    def read_pixels(self, rect: Rect) -> PixelBuffer:
        raise OSError("backing pixels unavailable")

    def render(self, rect: Rect, surface: Image.Image) -> None:
        self.render_calls += 1
        raise OSError("render target lost")


# Common test fixtures
@pytest.fixture
def solid_source():
    """Factory for in-memory solid-colour sources."""
    def _make(width, height, color, *, readable=True, source_id=None):
        image = Image.new("RGBA", (width, height), color)
        return ImageSource(image, source_id=source_id or f"solid-{width}x{height}", readable=readable)
    return _make


@pytest.fixture
def broken_source():
    """Factory for sources that cannot be extracted."""
    def _make(source_id="broken", size=(16, 16)):
        return BrokenSource(source_id, size)
    return _make


@pytest.fixture
def sample_png(tmp_path: Path):
    """Write a 32x16 image: left half red, right half blue."""
    img = Image.new("RGBA", (32, 16), RED)
    img.paste(Image.new("RGBA", (16, 16), BLUE), (16, 0))
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
