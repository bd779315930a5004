"""
Sprite Toolkit Core Package

Shared data models and the error taxonomy. Nothing in here touches the
filesystem or knows about extraction strategies.
"""

from .models import (
    Rect,
    PixelBuffer,
    LayoutMode,
    SourceRegion,
    CompositionRequest,
    CompositionResult,
)
from .errors import (
    ErrorKind,
    CombineError,
    NoInputSelectedError,
    ExtractionFailure,
    NoUsableRegionsError,
    EmptyCompositionError,
    EncodingFailure,
    PersistenceFailure,
    SourceNotReadableError,
)

__all__ = [
    "Rect",
    "PixelBuffer",
    "LayoutMode",
    "SourceRegion",
    "CompositionRequest",
    "CompositionResult",
    "ErrorKind",
    "CombineError",
    "NoInputSelectedError",
    "ExtractionFailure",
    "NoUsableRegionsError",
    "EmptyCompositionError",
    "EncodingFailure",
    "PersistenceFailure",
    "SourceNotReadableError",
]
