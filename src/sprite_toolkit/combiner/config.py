"""
Module: combiner.config

Purpose:
    Configuration dataclasses for sprite combining. Immutable
    configuration with validation on construction.

Key Classes:
    - SpriteImportSettings: How the output is registered as a sprite asset
    - CombineConfig: Output location, naming and encoding settings

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - combiner.pipeline: save_combined()
    - combiner.output.writer: Import-settings sidecar
    - cli: Built from command-line options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_OUTPUT_DIR = Path("CombinedSprites")
DEFAULT_FILE_PREFIX = "combined"
DEFAULT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

TEXTURE_TYPES = ("sprite", "default")
FILTER_MODES = ("point", "bilinear", "trilinear")


@dataclass(frozen=True)
class SpriteImportSettings:
    """
    Import settings recorded next to a combined sprite.

    Combined sprites are pixel art: point filtering, no mip chain.

    Attributes:
        texture_type: Asset type to import as ("sprite")
        filter_mode: Sampling filter ("point")
        mipmaps: Whether to generate mipmaps (False)
        readable: Whether raw pixel access is enabled on the imported asset
    """
    texture_type: str = "sprite"
    filter_mode: str = "point"
    mipmaps: bool = False
    readable: bool = False

    def __post_init__(self) -> None:
        """Validate settings on construction."""
        if self.texture_type not in TEXTURE_TYPES:
            raise ValueError(f"texture_type must be one of {TEXTURE_TYPES}: {self.texture_type!r}")
        if self.filter_mode not in FILTER_MODES:
            raise ValueError(f"filter_mode must be one of {FILTER_MODES}: {self.filter_mode!r}")

    def to_dict(self) -> dict:
        return {
            "texture_type": self.texture_type,
            "filter_mode": self.filter_mode,
            "mipmaps": self.mipmaps,
            "readable": self.readable,
        }


@dataclass(frozen=True)
class CombineConfig:
    """
    Configuration for combining sprites (immutable).

    Attributes:
        output_dir: Directory combined sprites are written to
        file_prefix: File name prefix ("combined" -> combined_20250101_120000.png)
        timestamp_format: strftime format for the name suffix
        compress_level: zlib level for PNG encoding (0-9)
        import_settings: Settings written to the .import.json sidecar
        write_import_settings: Whether to write the sidecar at all
        request_readability: Ask the readability collaborator to enable raw
            access before extraction (restored afterwards)

    Example:
        >>> config = CombineConfig(output_dir=Path("Assets/CombinedSprites"))
        >>> config.compress_level
        6
    """

    # Output
    output_dir: Path = DEFAULT_OUTPUT_DIR
    file_prefix: str = DEFAULT_FILE_PREFIX
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT

    # Encoding
    compress_level: int = 6

    # Import
    import_settings: SpriteImportSettings = field(default_factory=SpriteImportSettings)
    write_import_settings: bool = True

    # Extraction
    request_readability: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not 0 <= self.compress_level <= 9:
            raise ValueError(f"compress_level must be 0-9: {self.compress_level}")
        if not self.file_prefix:
            raise ValueError("file_prefix must not be empty")
        if any(sep in self.file_prefix for sep in ("/", "\\")):
            raise ValueError(f"file_prefix must not contain path separators: {self.file_prefix!r}")
        if not self.timestamp_format:
            raise ValueError("timestamp_format must not be empty")
