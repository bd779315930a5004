"""
Tests for combiner.loading

Test Coverage:
- parse_region_spec(): Whole image, crop, malformed specs
- open_request(): Shared sources, missing and undecodable files, bottom-left rects
"""
from pathlib import Path

import pytest

from sprite_toolkit.combiner.loading import open_request, parse_region_spec
from sprite_toolkit.core.models import LayoutMode, Rect


def test_parse_whole_image():
    assert parse_region_spec("hero.png") == (Path("hero.png"), None)


def test_parse_crop():
    assert parse_region_spec("atlas.png@0, 16, 16,16") == (Path("atlas.png"), (0, 16, 16, 16))


def test_parse_uses_last_separator():
    """Paths may themselves contain '@'."""
    assert parse_region_spec("art@2x/atlas.png@1,2,3,4") == (Path("art@2x/atlas.png"), (1, 2, 3, 4))


@pytest.mark.parametrize("spec", [
    "",
    "@1,2,3,4",
    "atlas.png@1,2,3",
    "atlas.png@a,b,c,d",
])
def test_parse_rejects_malformed(spec):
    with pytest.raises(ValueError):
        parse_region_spec(spec)


def test_open_request_whole_image(sample_png):
    with open_request([str(sample_png)], LayoutMode.OVERLAY) as request:
        assert request.mode is LayoutMode.OVERLAY
        assert [r.rect for r in request.regions] == [Rect(0, 0, 32, 16)]


def test_open_request_shares_sources(sample_png):
    """Several crops of one file share one source handle."""
    specs = [f"{sample_png}@0,0,16,16", f"{sample_png}@16,0,16,16"]

    with open_request(specs, LayoutMode.HORIZONTAL) as request:
        first, second = request.regions
        assert first.source is second.source
        assert second.rect == Rect(16, 0, 16, 16)


def test_open_request_skips_missing_files(sample_png, tmp_path, caplog):
    specs = [str(tmp_path / "missing.png"), str(sample_png)]

    with open_request(specs, LayoutMode.VERTICAL) as request:
        assert len(request) == 1

    assert "Failed to load image" in caplog.text


def test_open_request_bottom_left(sample_png):
    with open_request([f"{sample_png}@0,0,8,4"], LayoutMode.OVERLAY, bottom_left=True) as request:
        assert request.regions[0].rect == Rect(0, 12, 8, 4)


def test_open_request_closes_sources(sample_png):
    with open_request([str(sample_png)], LayoutMode.OVERLAY) as request:
        source = request.regions[0].source

    assert source._image is None


def test_open_request_skips_undecodable_image(sample_png, tmp_path, caplog):
    """A file that is not an image is skipped like a missing one."""
    # Arrange
    garbage = tmp_path / "garbage.png"
    garbage.write_bytes(b"not an image")

    # Act
    with open_request([str(sample_png), str(garbage)], LayoutMode.HORIZONTAL) as request:
        source_ids = [r.source_id for r in request.regions]

    # Assert
    assert source_ids == [str(sample_png)]
    assert "garbage.png" in caplog.text
