"""
Tests for combiner.extraction.readability

Test Coverage:
- ReadabilityLease.request(): Already readable, toggled, toggle failure
- Restore on exit, including when the block raises
- SidecarReadability: Flag persisted to the .import.json sidecar
"""
import pytest

from sprite_toolkit.combiner.extraction import (
    ImageSource,
    InMemoryReadability,
    ReadabilityController,
    ReadabilityLease,
    SidecarReadability,
)
from sprite_toolkit.combiner.import_settings import read_import_settings

RED = (255, 0, 0, 255)


class RecordingReadability(InMemoryReadability):
    """Controller that records every toggle."""

    def __init__(self):
        self.calls = []

    def set_readable(self, source, readable):
        self.calls.append((source.source_id, readable))
        super().set_readable(source, readable)


class RefusingReadability(InMemoryReadability):
    """Controller that cannot change anything."""

    def set_readable(self, source, readable):
        raise PermissionError("importer locked")


class BlindReadability(InMemoryReadability):
    """Controller that cannot even query the flag."""

    def is_readable(self, source):
        raise RuntimeError("importer unavailable")


def test_controllers_satisfy_protocol():
    assert isinstance(InMemoryReadability(), ReadabilityController)
    assert isinstance(SidecarReadability(), ReadabilityController)


def test_readable_source_is_not_toggled(solid_source):
    controller = RecordingReadability()
    source = solid_source(2, 2, RED, readable=True)

    with ReadabilityLease(controller) as lease:
        assert lease.request(source) is True

    assert controller.calls == []


def test_unreadable_source_is_enabled_then_restored(solid_source):
    """Lease enables raw access and restores the original flag on exit."""
    # Arrange
    controller = RecordingReadability()
    source = solid_source(2, 2, RED, readable=False)

    # Act
    with ReadabilityLease(controller) as lease:
        granted = lease.request(source)
        during = source.readable
        count = lease.changed_count

    # Assert
    assert granted is True
    assert during is True
    assert count == 1
    assert source.readable is False
    assert controller.calls == [(source.source_id, True), (source.source_id, False)]


def test_each_source_toggled_once(solid_source):
    controller = RecordingReadability()
    source = solid_source(2, 2, RED, readable=False)

    with ReadabilityLease(controller) as lease:
        lease.request(source)
        lease.request(source)
        lease.request(source)

    assert controller.calls == [(source.source_id, True), (source.source_id, False)]


def test_restored_when_block_raises(solid_source):
    """Flags are restored even if extraction raises mid-composition."""
    source = solid_source(2, 2, RED, readable=False)

    with pytest.raises(RuntimeError):
        with ReadabilityLease(InMemoryReadability()) as lease:
            lease.request(source)
            raise RuntimeError("boom")

    assert source.readable is False


def test_toggle_failure_is_not_fatal(solid_source, caplog):
    """A refusing controller means the fallback path is used."""
    source = solid_source(2, 2, RED, readable=False)

    with ReadabilityLease(RefusingReadability()) as lease:
        assert lease.request(source) is False

    assert source.readable is False
    assert "render fallback" in caplog.text


def test_query_failure_is_not_fatal(solid_source):
    source = solid_source(2, 2, RED, readable=False)

    with ReadabilityLease(BlindReadability()) as lease:
        assert lease.request(source) is False

    assert lease.changed_count == 0


def test_no_controller_reports_current_flag(solid_source):
    source = solid_source(2, 2, RED, readable=False)

    with ReadabilityLease(None) as lease:
        assert lease.request(source) is False

    assert source.readable is False


def test_sidecar_readability_persists_and_restores(sample_png):
    """Sidecar controller writes the flag next to the image."""
    source = ImageSource.open(sample_png, readable=False)

    with ReadabilityLease(SidecarReadability()) as lease:
        assert lease.request(source) is True
        assert read_import_settings(sample_png)["readable"] is True

    assert read_import_settings(sample_png)["readable"] is False
    assert source.readable is False


def test_sidecar_readability_needs_backing_file(solid_source):
    source = solid_source(2, 2, RED, readable=False)

    with ReadabilityLease(SidecarReadability()) as lease:
        assert lease.request(source) is False
