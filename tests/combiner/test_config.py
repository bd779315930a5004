"""
Tests for combiner.config and combiner.import_settings

Test Coverage:
- CombineConfig / SpriteImportSettings defaults and validation
- Sidecar read/write
"""
import json
from pathlib import Path

import pytest

from sprite_toolkit.combiner.config import CombineConfig, SpriteImportSettings
from sprite_toolkit.combiner.import_settings import (
    read_import_settings,
    sidecar_path,
    write_import_settings,
)


def test_config_defaults():
    config = CombineConfig()

    assert config.output_dir == Path("CombinedSprites")
    assert config.file_prefix == "combined"
    assert config.compress_level == 6
    assert config.import_settings == SpriteImportSettings()
    assert config.write_import_settings is True


@pytest.mark.parametrize("kwargs", [
    dict(compress_level=10),
    dict(compress_level=-1),
    dict(file_prefix=""),
    dict(file_prefix="a/b"),
    dict(timestamp_format=""),
])
def test_config_rejects_invalid(kwargs):
    with pytest.raises(ValueError):
        CombineConfig(**kwargs)


def test_import_settings_defaults_are_pixel_art():
    assert SpriteImportSettings().to_dict() == {
        "texture_type": "sprite",
        "filter_mode": "point",
        "mipmaps": False,
        "readable": False,
    }


def test_import_settings_rejects_unknown_filter():
    with pytest.raises(ValueError):
        SpriteImportSettings(filter_mode="anisotropic")


def test_sidecar_path():
    assert sidecar_path(Path("Sprites/hero.png")) == Path("Sprites/hero.png.import.json")


def test_read_missing_sidecar(tmp_path):
    assert read_import_settings(tmp_path / "hero.png") == {}


def test_write_then_read(tmp_path):
    image = tmp_path / "hero.png"

    written = write_import_settings(image, {"readable": True})

    assert written == tmp_path / "hero.png.import.json"
    assert read_import_settings(image) == {"readable": True}


def test_read_rejects_non_object(tmp_path):
    image = tmp_path / "hero.png"
    sidecar_path(image).write_text(json.dumps([1, 2]), encoding="utf-8")

    with pytest.raises(ValueError):
        read_import_settings(image)
