"""
Exercise flow controller.

Owns the progress of one running exercise and advances it one sample at a
time according to the exercise's flow policy:

- sequential: only the active goal is checked; the index moves by one
- any_order: every open goal is checked; completions accumulate
- parallel: every goal is checked against the same sample; all must hold

The monitor is the only caller of step(), so progress has a single writer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from .detector import satisfied
from .exercise import Exercise, FlowPolicy
from .state import EditorState

if TYPE_CHECKING:
    from loguru import Logger

COMPLETED_TOKEN = "completed"


class ProgressStatus(str, Enum):
    """Lifecycle of one exercise run."""

    AWAITING = "awaiting"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class EventKind(str, Enum):
    """Progress events published to display sinks."""

    STARTED = "started"
    GOAL_ADVANCED = "goal_advanced"  # sequential: next goal is now active
    GOAL_SATISFIED = "goal_satisfied"  # any_order: one more goal done
    EXERCISE_COMPLETED = "exercise_completed"


@dataclass(frozen=True)
class ProgressEvent:
    """One progress signal for the display driver."""

    kind: EventKind
    exercise_title: str
    completed_count: int
    total: int
    goal_index: int | None = None  # Goal the event refers to (0-based)
    next_goal_index: int | None = None  # First goal still open, None when all are done
    description: str = ""
    hint: str | None = None

    @property
    def is_completion(self) -> bool:
        return self.kind is EventKind.EXERCISE_COMPLETED

    def display_token(self) -> str | None:
        """1-based position of the next open goal, "completed", or None if no goal is open."""
        if self.is_completion:
            return COMPLETED_TOKEN
        if self.next_goal_index is None:
            return None
        return str(self.next_goal_index + 1)


@dataclass
class ExerciseProgress:
    """
    Mutable progress of one exercise run.

    Sequential invariant: completed[i] is True exactly for i < active_goal_index,
    and active_goal_index == len(completed) iff the run is complete.
    """

    completed: list[bool]
    active_goal_index: int = 0
    status: ProgressStatus = ProgressStatus.AWAITING

    @classmethod
    def start(cls, exercise: Exercise) -> ExerciseProgress:
        return cls(completed=[False] * exercise.goal_count)

    @property
    def completed_count(self) -> int:
        return sum(self.completed)

    @property
    def is_complete(self) -> bool:
        return self.status is ProgressStatus.COMPLETED

    @property
    def is_terminal(self) -> bool:
        return self.status is not ProgressStatus.AWAITING


@dataclass
class FlowController:
    """
    Drives one exercise through its goals.

    Usage:
        controller = FlowController(exercise)
        for state in samples:
            events = controller.step(state)
            if controller.progress.is_complete:
                break
    """

    exercise: Exercise
    progress: ExerciseProgress | None = None
    log: Logger | None = field(default=None, repr=False)
    latest_state: EditorState | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.progress is None:
            self.progress = ExerciseProgress.start(self.exercise)
        elif len(self.progress.completed) != self.exercise.goal_count:
            raise ValueError(
                f"Progress tracks {len(self.progress.completed)} goals, "
                f"exercise has {self.exercise.goal_count}"
            )
        if self.log is None:
            self.log = logger.bind(component="flow", exercise=self.exercise.title)

    def opening_event(self) -> ProgressEvent:
        """Event describing the goal the learner should work on first."""
        index = self._first_open_goal()
        goal = self.exercise.goals[index] if index is not None else None
        return ProgressEvent(
            kind=EventKind.STARTED,
            exercise_title=self.exercise.title,
            completed_count=self.progress.completed_count,
            total=self.exercise.goal_count,
            goal_index=index,
            next_goal_index=index,
            description=goal.description if goal else "",
            hint=goal.hint if goal else None,
        )

    def step(self, state: EditorState) -> list[ProgressEvent]:
        """
        Run one transition against a fresh snapshot.

        Returns:
            Events produced by this sample, in order; empty when nothing
            changed or the run already reached a terminal state.
        """
        if self.progress.is_terminal:
            return []

        self.latest_state = state
        policy = self.exercise.flow_policy
        if policy is FlowPolicy.SEQUENTIAL:
            return self._step_sequential(state)
        if policy is FlowPolicy.ANY_ORDER:
            return self._step_any_order(state)
        return self._step_parallel(state)

    def abandon(self) -> None:
        """Mark the run abandoned (external cancellation only)."""
        if self.progress.is_terminal:
            return
        self.progress.status = ProgressStatus.ABANDONED
        self.log.info(
            "Exercise abandoned at {}/{} goals",
            self.progress.completed_count,
            self.exercise.goal_count,
        )

    # -------------------------------------------------------------------------
    # Policies
    # -------------------------------------------------------------------------

    def _step_sequential(self, state: EditorState) -> list[ProgressEvent]:
        progress = self.progress
        index = progress.active_goal_index
        goal = self.exercise.goals[index]
        if not satisfied(goal, state):
            return []

        progress.completed[index] = True
        progress.active_goal_index = index + 1
        self.log.debug("Goal {} reached: {}", index + 1, goal.description)

        if progress.active_goal_index == self.exercise.goal_count:
            return [self._complete()]

        next_goal = self.exercise.goals[progress.active_goal_index]
        self.log.debug("Next goal: {}", next_goal.description)
        return [
            ProgressEvent(
                kind=EventKind.GOAL_ADVANCED,
                exercise_title=self.exercise.title,
                completed_count=progress.completed_count,
                total=self.exercise.goal_count,
                goal_index=progress.active_goal_index,
                next_goal_index=progress.active_goal_index,
                description=next_goal.description,
                hint=next_goal.hint,
            )
        ]

    def _step_any_order(self, state: EditorState) -> list[ProgressEvent]:
        progress = self.progress
        events: list[ProgressEvent] = []
        for index, goal in enumerate(self.exercise.goals):
            if progress.completed[index] or not satisfied(goal, state):
                continue
            progress.completed[index] = True
            self.log.debug("Goal {} reached: {}", index + 1, goal.description)
            events.append(
                ProgressEvent(
                    kind=EventKind.GOAL_SATISFIED,
                    exercise_title=self.exercise.title,
                    completed_count=progress.completed_count,
                    total=self.exercise.goal_count,
                    goal_index=index,
                    next_goal_index=self._first_open_goal(),
                    description=goal.description,
                    hint=goal.hint,
                )
            )

        if all(progress.completed):
            events.append(self._complete())
        return events

    def _step_parallel(self, state: EditorState) -> list[ProgressEvent]:
        progress = self.progress
        # Only the current sample counts; earlier hits are forgotten.
        progress.completed = [satisfied(goal, state) for goal in self.exercise.goals]
        if all(progress.completed):
            return [self._complete()]
        return []

    def _complete(self) -> ProgressEvent:
        progress = self.progress
        progress.active_goal_index = self.exercise.goal_count
        progress.status = ProgressStatus.COMPLETED
        self.log.info("All {} goals reached", self.exercise.goal_count)
        return ProgressEvent(
            kind=EventKind.EXERCISE_COMPLETED,
            exercise_title=self.exercise.title,
            completed_count=progress.completed_count,
            total=self.exercise.goal_count,
        )

    def _first_open_goal(self) -> int | None:
        if self.exercise.flow_policy is FlowPolicy.SEQUENTIAL:
            index = self.progress.active_goal_index
            return index if index < self.exercise.goal_count else None
        for index, done in enumerate(self.progress.completed):
            if not done:
                return index
        return None
