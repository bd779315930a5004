"""
Tests for combiner.output.writer

Test Coverage:
- write_sprite(): Image bytes, import-settings sidecar, no sidecar
- PersistenceFailure on unwritable destinations
- Failed writes leave no temp files behind
"""
from pathlib import Path

import pytest

from sprite_toolkit.combiner.config import SpriteImportSettings
from sprite_toolkit.combiner.import_settings import read_import_settings
from sprite_toolkit.combiner.output import write_sprite
from sprite_toolkit.core.errors import PersistenceFailure


def test_writes_bytes_and_sidecar(tmp_path):
    # Arrange
    path = tmp_path / "out" / "combined.png"

    # Act
    image_path, sidecar = write_sprite(
        b"png-bytes",
        path,
        settings=SpriteImportSettings(),
        pixel_size=(48, 16),
    )

    # Assert
    assert image_path.read_bytes() == b"png-bytes"
    assert sidecar == tmp_path / "out" / "combined.png.import.json"
    assert read_import_settings(path) == {
        "texture_type": "sprite",
        "filter_mode": "point",
        "mipmaps": False,
        "readable": False,
        "width": 48,
        "height": 16,
    }


def test_no_settings_no_sidecar(tmp_path):
    path = tmp_path / "combined.png"

    _, sidecar = write_sprite(b"x", path)

    assert sidecar is None
    assert not (tmp_path / "combined.png.import.json").exists()


def test_overwrites_existing_file(tmp_path):
    path = tmp_path / "combined.png"
    path.write_bytes(b"old")

    write_sprite(b"new", path)

    assert path.read_bytes() == b"new"


def test_unwritable_destination_raises(tmp_path):
    """A file where the directory should be is a persistence failure."""
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")

    with pytest.raises(PersistenceFailure):
        write_sprite(b"x", blocker / "combined.png")


def test_leaves_no_temp_files(tmp_path):
    write_sprite(b"x", tmp_path / "combined.png", settings=SpriteImportSettings())

    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "combined.png",
        "combined.png.import.json",
    ]


def test_failed_replace_leaves_no_temp_file(tmp_path):
    """A write that cannot land on its destination leaves the directory clean."""
    # Arrange - a directory squats on the destination name
    out_dir = tmp_path / "out"
    (out_dir / "combined.png").mkdir(parents=True)

    # Act
    with pytest.raises(PersistenceFailure):
        write_sprite(b"\x89PNG partial", out_dir / "combined.png")

    # Assert
    assert [p.name for p in out_dir.iterdir()] == ["combined.png"]
    assert (out_dir / "combined.png").is_dir()


def test_failed_sidecar_removes_image_and_temp_file(tmp_path, monkeypatch):
    """When the sidecar cannot be written, neither file nor temp file remains."""
    original_replace = Path.replace

    def replace_failing_for_sidecar(self, target):
        if str(target).endswith(".import.json"):
            raise OSError("disk full")
        return original_replace(self, target)

    monkeypatch.setattr(Path, "replace", replace_failing_for_sidecar)

    with pytest.raises(PersistenceFailure):
        write_sprite(b"x", tmp_path / "combined.png", settings=SpriteImportSettings())

    assert list(tmp_path.iterdir()) == []


def test_writes_region_records(tmp_path):
    regions = [{"source": "hero.png", "rect": {"x": 0, "y": 0, "width": 2, "height": 2}, "included": True}]

    write_sprite(b"x", tmp_path / "combined.png", settings=SpriteImportSettings(), regions=regions)

    assert read_import_settings(tmp_path / "combined.png")["regions"] == regions
