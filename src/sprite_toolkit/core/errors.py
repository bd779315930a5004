"""
Module: core.errors

Purpose:
    Error taxonomy for sprite combining. Every fatal error carries an
    ErrorKind so callers (CLI, editor integrations) can report a single,
    explicit reason why nothing was produced.

Key Classes:
    - ErrorKind: Enum of failure kinds
    - CombineError: Base exception (carries .kind)
    - NoInputSelectedError, ExtractionFailure, NoUsableRegionsError,
      EmptyCompositionError, EncodingFailure, PersistenceFailure
    - SourceNotReadableError: Raw pixel access refused by a source

Used By:
    - combiner.* (raised)
    - cli (reported)
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure kinds surfaced by the combiner."""
    NO_INPUT_SELECTED = "no_input_selected"
    EXTRACTION_FAILURE = "extraction_failure"
    NO_USABLE_REGIONS = "no_usable_regions"
    EMPTY_COMPOSITION = "empty_composition"
    ENCODING_FAILURE = "encoding_failure"
    PERSISTENCE_FAILURE = "persistence_failure"


class CombineError(Exception):
    """Error during sprite combining."""
    kind: ErrorKind


class NoInputSelectedError(CombineError):
    """Zero regions were provided."""
    kind = ErrorKind.NO_INPUT_SELECTED

    def __init__(self, message: str = "No sprites selected") -> None:
        super().__init__(message)


class ExtractionFailure(CombineError):
    """
    A region's pixels could not be obtained by any extraction path.

    Recoverable: the pipeline records it and skips the region.

    Attributes:
        region_index: Index of the region in the request (None when the
            extractor is called outside a composition)
        reason: Message from the last path that failed
    """
    kind = ErrorKind.EXTRACTION_FAILURE

    def __init__(self, reason: str, region_index: Optional[int] = None) -> None:
        self.reason = reason
        self.region_index = region_index
        if region_index is None:
            super().__init__(f"Extraction failed: {reason}")
        else:
            super().__init__(f"Extraction failed for region {region_index}: {reason}")

    def at_index(self, region_index: int) -> ExtractionFailure:
        """Copy of this failure bound to a region index."""
        return ExtractionFailure(self.reason, region_index)


class NoUsableRegionsError(CombineError):
    """Every region failed extraction."""
    kind = ErrorKind.NO_USABLE_REGIONS


class EmptyCompositionError(CombineError):
    """Canvas sizing was asked to size zero regions."""
    kind = ErrorKind.EMPTY_COMPOSITION


class EncodingFailure(CombineError):
    """The finished canvas could not be serialized."""
    kind = ErrorKind.ENCODING_FAILURE


class PersistenceFailure(CombineError):
    """Writing the encoded sprite (or its import settings) failed."""
    kind = ErrorKind.PERSISTENCE_FAILURE


class SourceNotReadableError(Exception):
    """Raw pixel access is disabled for a source. Extraction falls back to rendering."""
    pass
