from __future__ import annotations

import logging

import pytest

from encore.domain.catalog_ingest import (
    LoggingProgressReporter,
    MonotonicProgress,
    NullProgressReporter,
    ProgressBus,
    ProgressEvent,
    ProgressReporter,
)
from tests.helpers.catalog import RecordingReporter


def test_reporters_satisfy_protocol() -> None:
    assert isinstance(NullProgressReporter(), ProgressReporter)
    assert isinstance(LoggingProgressReporter(), ProgressReporter)
    assert isinstance(ProgressBus(), ProgressReporter)


def test_monotonic_progress_never_goes_backwards() -> None:
    reporter = RecordingReporter()
    progress = MonotonicProgress(reporter)

    progress.report("importing-songs", 40, "details")
    progress.report("importing-songs", 35, "late album callback")
    progress.report("importing-songs", 120, "overshoot")

    assert reporter.percents == [40, 40, 100]
    assert progress.last == 100


def test_monotonic_progress_without_reporter_is_silent() -> None:
    progress = MonotonicProgress(None)
    progress.report("importing-songs", 5, "start")
    progress.report_error(RuntimeError("boom"), "importing-songs")
    assert progress.last == 5


def test_progress_bus_isolates_failing_listeners(caplog: pytest.LogCaptureFixture) -> None:
    received: list[ProgressEvent] = []

    def broken(event: ProgressEvent) -> None:
        raise RuntimeError(f"listener broke at {event.progress}")

    bus = ProgressBus()
    bus.subscribe(broken)
    bus.subscribe(received.append)

    with caplog.at_level(logging.ERROR):
        bus.report("importing-songs", 55, "features")

    assert received == [ProgressEvent(stage="importing-songs", progress=55, message="features")]
    assert "listener broke at 55" in caplog.text


def test_progress_bus_error_channel_and_unsubscribe() -> None:
    received: list[ProgressEvent] = []
    bus = ProgressBus()
    bus.subscribe(received.append)

    bus.report_error(RuntimeError("spotify down"), "importing-songs")
    bus.unsubscribe(received.append)
    bus.report("importing-songs", 100, "ignored")

    assert len(received) == 1
    assert received[0].error == "spotify down"


def test_logging_reporter_writes_stage_and_percent(caplog: pytest.LogCaptureFixture) -> None:
    reporter = LoggingProgressReporter("artist-1")

    with caplog.at_level(logging.INFO):
        reporter.report("importing-songs", 70, "Filtering studio tracks")

    assert "[artist-1] importing-songs - 70% - Filtering studio tracks" in caplog.text
