"""
Module: combiner.extraction.readability

Purpose:
    Temporarily enable raw pixel access on sources and guarantee the
    original setting is restored afterwards.

    Enabling access is best effort: if the collaborator cannot toggle a
    source, extraction simply takes the render fallback path.

Key Classes:
    - ReadabilityController: Protocol for the capability collaborator
    - InMemoryReadability: Toggles the flag on the source object only
    - SidecarReadability: Also persists the flag in the .import.json sidecar
    - ReadabilityLease: Scoped acquire/restore over one composition

Dependencies:
    - combiner.import_settings: Sidecar persistence

Used By:
    - combiner.pipeline: One lease per combine_sprites() call
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable

from ..import_settings import read_import_settings, write_import_settings
from .sources import SpriteSource

logger = logging.getLogger(__name__)


@runtime_checkable
class ReadabilityController(Protocol):
    """Collaborator that can query and toggle raw pixel access."""

    def is_readable(self, source: SpriteSource) -> bool:
        ...

    def set_readable(self, source: SpriteSource, readable: bool) -> None:
        ...


class InMemoryReadability:
    """Controller that flips the flag on the source object itself."""

    def is_readable(self, source: SpriteSource) -> bool:
        return source.readable

    def set_readable(self, source: SpriteSource, readable: bool) -> None:
        source.readable = readable


class SidecarReadability(InMemoryReadability):
    """
    Controller that persists the flag in the source's .import.json sidecar.

    Equivalent to flipping the read/write flag on a texture importer and
    reimporting. Only sources with a backing file can be toggled.
    """

    def set_readable(self, source: SpriteSource, readable: bool) -> None:
        path = getattr(source, "path", None)
        if path is None:
            raise ValueError(f"Source has no backing file: {source.source_id}")
        settings = read_import_settings(path)
        settings["readable"] = readable
        write_import_settings(path, settings)
        source.readable = readable


class ReadabilityLease:
    """
    Scoped readability grant for one composition.

    Each source is touched at most once: its original flag is remembered
    the first time it is requested. On exit every source that was switched
    on is switched back, even if extraction raised.

    Example:
        >>> with ReadabilityLease(InMemoryReadability()) as lease:
        ...     if lease.request(source):
        ...         buf = source.read_pixels(rect)
        >>> source.readable  # restored
        False
    """

    def __init__(self, controller: Optional[ReadabilityController] = None) -> None:
        """
        Initialize lease.

        Args:
            controller: Capability collaborator. None never toggles anything
                and just reports each source's current flag.
        """
        self._controller = controller
        self._originals: Dict[int, bool] = {}
        self._changed: List[Tuple[SpriteSource, bool]] = []

    @property
    def changed_count(self) -> int:
        """Sources currently switched away from their original flag."""
        return len(self._changed)

    def request(self, source: SpriteSource) -> bool:
        """
        Ask for raw pixel access on a source.

        Returns:
            True if raw access is available now, False if the render
            fallback is required. Never raises for collaborator failures.
        """
        if self._controller is None:
            return source.readable

        key = id(source)
        if key in self._originals:
            return source.readable

        try:
            original = self._controller.is_readable(source)
        except Exception as exc:
            logger.warning(f"Could not query readability of {source.source_id}: {exc}")
            return False
        self._originals[key] = original
        if original:
            return True

        # Record before toggling so a half-applied toggle is still restored
        self._changed.append((source, original))
        try:
            self._controller.set_readable(source, True)
        except Exception as exc:
            logger.warning(
                f"Could not enable read access on {source.source_id}, using render fallback: {exc}"
            )
            return False
        logger.debug(f"Enabled read access on {source.source_id}")
        return True

    def restore(self) -> None:
        """Restore every toggled source to its original flag."""
        while self._changed:
            source, original = self._changed.pop()
            try:
                self._controller.set_readable(source, original)
                logger.debug(f"Restored read access on {source.source_id} to {original}")
            except Exception as exc:
                logger.warning(f"Could not restore read access on {source.source_id}: {exc}")
        self._originals.clear()

    def __enter__(self) -> "ReadabilityLease":
        return self

    def __exit__(self, *args) -> None:
        self.restore()
