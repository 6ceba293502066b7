"""Progress reporting for ingest runs.

The pipeline pushes ``(stage, percent, message)`` tuples to a reporter at fixed
checkpoints and calls ``report_error`` once before re-raising a fatal error.
Every reporter is optional: ``NullProgressReporter`` is used when none is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    stage: str
    progress: int
    message: str
    error: str | None = None


@runtime_checkable
class ProgressReporter(Protocol):
    def report(self, stage: str, progress: int, message: str) -> None: ...

    def report_error(self, error: BaseException, stage: str) -> None: ...


class NullProgressReporter:
    def report(self, stage: str, progress: int, message: str) -> None:
        del stage, progress, message

    def report_error(self, error: BaseException, stage: str) -> None:
        del error, stage


class LoggingProgressReporter:
    def __init__(self, name: str = "ingest", *, logger: logging.Logger | None = None) -> None:
        self._name = name
        self._log = logger or log

    def report(self, stage: str, progress: int, message: str) -> None:
        self._log.info("[%s] %s - %s%% - %s", self._name, stage, progress, message)

    def report_error(self, error: BaseException, stage: str) -> None:
        self._log.error("[%s] %s failed: %s", self._name, stage, error)


type ProgressListener = Callable[[ProgressEvent], None]


@dataclass(slots=True)
class ProgressBus:
    """Fan progress events out to subscribed listeners.

    A failing listener is logged and skipped so one broken consumer cannot abort
    an ingest run.
    """

    listeners: list[ProgressListener] = field(default_factory=list["ProgressListener"])

    def subscribe(self, listener: ProgressListener) -> None:
        self.listeners.append(listener)

    def unsubscribe(self, listener: ProgressListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def report(self, stage: str, progress: int, message: str) -> None:
        self._emit(ProgressEvent(stage=stage, progress=progress, message=message))

    def report_error(self, error: BaseException, stage: str) -> None:
        self._emit(ProgressEvent(stage=stage, progress=100, message=str(error), error=str(error)))

    def _emit(self, event: ProgressEvent) -> None:
        for listener in tuple(self.listeners):
            try:
                listener(event)
            except Exception:
                log.exception("Progress listener %r failed for stage %s", listener, event.stage)


class MonotonicProgress:
    """Wrap a reporter so the percent never goes backwards within one run."""

    def __init__(self, reporter: ProgressReporter | None) -> None:
        self._reporter: ProgressReporter = reporter or NullProgressReporter()
        self._last = 0

    @property
    def last(self) -> int:
        return self._last

    def report(self, stage: str, progress: int, message: str) -> None:
        clamped = min(100, max(self._last, progress))
        self._last = clamped
        self._reporter.report(stage, clamped, message)

    def report_error(self, error: BaseException, stage: str) -> None:
        self._reporter.report_error(error, stage)
