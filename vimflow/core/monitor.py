"""
Exercise monitor.

Polls the editor on a fixed interval, feeds every snapshot to the flow
controller and publishes progress to the display sinks until the exercise
completes or is cancelled.

Runs inline (run()) or on a background worker (start()/stop()/wait()). The
worker is the only writer of the exercise progress; the caller only ever
signals cancellation through the stop event.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from loguru import logger

from .exercise import Exercise
from .flow import ExerciseProgress, FlowController, ProgressEvent
from .sampler import SamplerError, StateSampler
from .state import EditorState

if TYPE_CHECKING:
    from loguru import Logger


class MonitorFinishedError(RuntimeError):
    """Raised when a monitor whose exercise already ended is started again."""


class DisplaySink(Protocol):
    """Receiver of progress events (instruction pane, progress file, ...)."""

    def publish(self, event: ProgressEvent) -> None:
        ...


class Outcome(str, Enum):
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    FAILED = "failed"


@dataclass(frozen=True)
class ExerciseResult:
    """How a monitored exercise ended."""

    outcome: Outcome
    reason: str | None = None

    @classmethod
    def completed(cls) -> ExerciseResult:
        return cls(Outcome.COMPLETED)

    @classmethod
    def incomplete(cls) -> ExerciseResult:
        return cls(Outcome.INCOMPLETE)

    @classmethod
    def failed(cls, reason: str) -> ExerciseResult:
        return cls(Outcome.FAILED, reason)

    @property
    def is_completed(self) -> bool:
        return self.outcome is Outcome.COMPLETED


@dataclass
class ExerciseMonitor:
    """
    Drive one exercise from live editor snapshots.

    Usage:
        monitor = ExerciseMonitor(exercise, sampler, sinks=[console_sink])
        monitor.start()
        # ... learner works in the editor ...
        monitor.stop()          # optional: cancel early
        result = monitor.wait()
    """

    exercise: Exercise
    sampler: StateSampler
    sinks: Sequence[DisplaySink] = ()
    interval_seconds: float = 0.1
    progress: ExerciseProgress | None = None
    log: Logger | None = field(default=None, repr=False)

    # Internal state
    _controller: FlowController = field(init=False, repr=False)
    _last_good: EditorState | None = field(default=None, init=False, repr=False)
    _result: ExerciseResult | None = field(default=None, init=False, repr=False)
    _thread: threading.Thread | None = field(default=None, init=False, repr=False)
    _stop_event: threading.Event = field(default_factory=threading.Event, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if self.log is None:
            self.log = logger.bind(component="monitor", exercise=self.exercise.title)
        self._controller = FlowController(self.exercise, self.progress, log=self.log)
        self.progress = self._controller.progress

    @property
    def controller(self) -> FlowController:
        return self._controller

    @property
    def result(self) -> ExerciseResult | None:
        """Result once the loop has ended, else None."""
        return self._result

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Run the loop on a background worker."""
        if self.is_running:
            self.log.warning("Monitor already running")
            return
        self._ensure_not_finished()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run,
            name=f"vimflow-monitor-{self.exercise.title}",
            daemon=True,
        )
        self._thread.start()
        self.log.info("Monitoring started (interval: {}s)", self.interval_seconds)

    def stop(self) -> None:
        """Signal cancellation; the loop exits within one interval."""
        self._stop_event.set()

    def wait(self, timeout: float | None = None) -> ExerciseResult | None:
        """Join the worker and return its result (None if still running)."""
        if self._thread is not None:
            self._thread.join(timeout=timeout)
        return self._result

    # -------------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------------

    def run(self) -> ExerciseResult:
        """
        Poll until the exercise completes or the stop event is set.

        Returns:
            Completed, Incomplete (cancelled) or Failed(reason)

        Raises:
            MonitorFinishedError: this monitor already ran to an end; build a
                new one to retry the exercise
        """
        self._ensure_not_finished()
        self._publish(self._controller.opening_event())

        while not self._stop_event.is_set():
            state = self._pull()
            try:
                events = self._controller.step(state)
            except Exception as exc:
                self.log.exception("Goal tracking failed: {}", exc)
                return self._finish(ExerciseResult.failed(str(exc)))

            for event in events:
                self._publish(event)

            if self._controller.progress.is_complete:
                return self._finish(ExerciseResult.completed())

            if self._stop_event.wait(timeout=self.interval_seconds):
                break

        self._controller.abandon()
        return self._finish(ExerciseResult.incomplete())

    def _ensure_not_finished(self) -> None:
        if self._result is not None or self._controller.progress.is_terminal:
            raise MonitorFinishedError(
                f"Monitor for '{self.exercise.title}' already finished "
                f"({self._controller.progress.status.value})"
            )

    def _pull(self) -> EditorState:
        """Latest snapshot; sampler failures fall back to the last good one."""
        try:
            state = self.sampler.sample()
        except SamplerError as exc:
            self.log.debug("Sampler unavailable, reusing last snapshot: {}", exc)
            return self._last_good or EditorState.default()
        except Exception as exc:
            self.log.warning("Sampler raised unexpectedly: {}", exc)
            return self._last_good or EditorState.default()

        self._last_good = state
        return state

    def _publish(self, event: ProgressEvent) -> None:
        for sink in self.sinks:
            try:
                sink.publish(event)
            except Exception as exc:
                self.log.warning("Display sink {} failed: {}", type(sink).__name__, exc)

    def _finish(self, result: ExerciseResult) -> ExerciseResult:
        self._result = result
        self.log.info("Monitoring finished: {}", result.outcome.value)
        return result
