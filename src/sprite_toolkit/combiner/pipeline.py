"""
Module: combiner.pipeline

Purpose:
    Orchestrate one sprite combine:
    Validate → Extract (with readability lease) → Size → Compose → Encode → Write

Key Functions:
    - combine_sprites(): Build the canvas for a request (no I/O)
    - save_combined(): combine_sprites() + encode + write to the output dir

Key Classes:
    - SaveResult: Where the sprite went, plus the composition result

Dependencies:
    - combiner.extraction: RegionExtractor, ReadabilityLease
    - combiner.compositing: compose()
    - combiner.output: encode_png(), naming, write_sprite()

Used By:
    - cli: Combine-Horizontal / Combine-Vertical / Combine-Overlay
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from sprite_toolkit.core.errors import (
    ErrorKind,
    ExtractionFailure,
    NoInputSelectedError,
    PersistenceFailure,
)
from sprite_toolkit.core.models import CompositionRequest, CompositionResult

from .compositing import CompositeEntry, compose
from .config import CombineConfig
from .extraction import (
    InMemoryReadability,
    ReadabilityController,
    ReadabilityLease,
    RegionExtractor,
)
from .output import encode_png, suggest_file_name, unique_path, write_sprite
from .timing import TimingLog, timed_phase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    """
    Result of save_combined() (immutable).

    Attributes:
        path: Written PNG file
        settings_path: Written .import.json sidecar (None if disabled)
        result: Composition result (canvas and counts)
        encoded_size: PNG size in bytes
        timing: Phase timings for the run
    """
    path: Path
    settings_path: Optional[Path]
    result: CompositionResult
    encoded_size: int
    timing: TimingLog


def combine_sprites(
    request: CompositionRequest,
    *,
    config: Optional[CombineConfig] = None,
    extractor: Optional[RegionExtractor] = None,
    readability: Optional[ReadabilityController] = None,
    timing: Optional[TimingLog] = None,
) -> CompositionResult:
    """
    Combine the regions of a request into one canvas.

    Pipeline:
    1. Reject empty requests
    2. Extract every region in order; failures are logged, counted and
       skipped (readability changes are restored afterwards)
    3. Size the canvas from the full region list, so skipped regions
       leave transparent gaps
    4. Compose regions onto the canvas

    Args:
        request: Regions and layout mode
        config: Combine configuration (only request_readability is used here)
        extractor: Region extractor (default: RegionExtractor())
        readability: Capability collaborator (default: InMemoryReadability())
        timing: Timing log to record phases into

    Returns:
        CompositionResult with the canvas and included/skipped counts.

    Raises:
        NoInputSelectedError: If the request has no regions
        NoUsableRegionsError: If every region failed extraction

    Example:
        >>> request = CompositionRequest.of(regions, LayoutMode.HORIZONTAL)
        >>> result = combine_sprites(request)
        >>> result.canvas.size
        (48, 16)
    """
    config = config or CombineConfig()
    extractor = extractor or RegionExtractor()
    timing = timing if timing is not None else TimingLog()

    if not request.regions:
        raise NoInputSelectedError()

    logger.info(f"Combining {len(request.regions)} sprites ({request.mode.value})")

    controller: Optional[ReadabilityController] = None
    if config.request_readability:
        controller = readability or InMemoryReadability()

    entries: List[CompositeEntry] = []
    errors: List[Tuple[int, ErrorKind]] = []

    with ReadabilityLease(controller) as lease:
        for index, region in enumerate(request.regions):
            buffer = None
            with timed_phase(timing, "extract", region_index=index):
                try:
                    buffer = extractor.extract_region(region, lease=lease)
                except ExtractionFailure as exc:
                    failure = exc.at_index(index)
                    logger.warning(f"Skipping region {index} ({region.source_id}): {failure.reason}")
                    errors.append((index, failure.kind))
            entries.append(CompositeEntry(region.size, buffer))

    with timed_phase(timing, "compose"):
        canvas = compose(entries, request.mode)

    included = sum(1 for entry in entries if entry.usable)
    result = CompositionResult(
        canvas=canvas,
        included_count=included,
        skipped_count=len(errors),
        errors=tuple(errors),
    )

    logger.info(
        f"Combined {result.included_count} of {len(request.regions)} sprites into "
        f"{canvas.width}x{canvas.height} canvas ({result.skipped_count} skipped)"
    )
    return result


def save_combined(
    request: CompositionRequest,
    config: Optional[CombineConfig] = None,
    *,
    extractor: Optional[RegionExtractor] = None,
    readability: Optional[ReadabilityController] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> SaveResult:
    """
    Combine, encode and write a sprite.

    Nothing is written unless composition and encoding both succeed.

    Args:
        request: Regions and layout mode
        config: Combine configuration (output dir, naming, encoding)
        extractor: Region extractor
        readability: Capability collaborator
        clock: Returns "now" for the file name timestamp (default datetime.now)

    Returns:
        SaveResult with the written path.

    Raises:
        NoInputSelectedError, NoUsableRegionsError: From combine_sprites()
        EncodingFailure: If the canvas cannot be encoded
        PersistenceFailure: If the output cannot be written

    Example:
        >>> saved = save_combined(request, CombineConfig(output_dir=Path("Assets/CombinedSprites")))
        >>> saved.path.name
        'combined_20250309_140507.png'
    """
    config = config or CombineConfig()
    timing = TimingLog()

    result = combine_sprites(
        request,
        config=config,
        extractor=extractor,
        readability=readability,
        timing=timing,
    )

    with timed_phase(timing, "encode"):
        data = encode_png(result.canvas, compress_level=config.compress_level)

    now = clock() if clock is not None else None
    file_name = suggest_file_name(config.file_prefix, now, config.timestamp_format)
    settings = config.import_settings if config.write_import_settings else None

    with timed_phase(timing, "write"):
        try:
            config.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceFailure(f"Could not create output directory {config.output_dir}: {exc}") from exc
        path = unique_path(config.output_dir, file_name)
        path, settings_path = write_sprite(
            data,
            path,
            settings=settings,
            pixel_size=result.canvas_size,
            regions=_region_records(request, result),
        )

    logger.info(f"Combined {result.included_count} sprites -> {path}")
    logger.debug(timing.summary())

    return SaveResult(
        path=path,
        settings_path=settings_path,
        result=result,
        encoded_size=len(data),
        timing=timing,
    )


def _region_records(request: CompositionRequest, result: CompositionResult) -> List[Dict[str, Any]]:
    """Source, crop rect and inclusion of every region, in layout order."""
    skipped = set(result.skipped_indices)
    return [
        {
            "source": region.source_id,
            "rect": region.rect.to_dict(),
            "included": index not in skipped,
        }
        for index, region in enumerate(request.regions)
    ]
