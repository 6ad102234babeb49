"""
Core goal tracking and exercise progression.

Components:
- state: EditorMode / EditorState snapshot model
- goals: goal compiler (declarative {kind, target} -> typed goal)
- exercise: exercise schema and compile_exercise()
- detector: satisfied(goal, state)
- flow: FlowController and ExerciseProgress (sequential / any_order / parallel)
- sampler: StateSampler protocol and SamplerError
- monitor: ExerciseMonitor polling loop and ExerciseResult
"""

from .detector import satisfied
from .exercise import Exercise, ExerciseDefinition, FlowPolicy, MalformedExerciseError, compile_exercise
from .flow import EventKind, ExerciseProgress, FlowController, ProgressEvent, ProgressStatus
from .goals import (
    BufferChangedGoal,
    ConfigError,
    Goal,
    GoalDefinition,
    GoalKind,
    MalformedTargetError,
    ModeGoal,
    PositionGoal,
    RegisterGoal,
    TextGoal,
    UnknownGoalKindError,
    UnknownModeError,
    compile_goal,
)
from .monitor import DisplaySink, ExerciseMonitor, ExerciseResult, MonitorFinishedError, Outcome
from .sampler import SamplerError, StateSampler
from .state import EditorMode, EditorState, ModeKind

__all__ = [
    "BufferChangedGoal",
    "ConfigError",
    "DisplaySink",
    "EditorMode",
    "EditorState",
    "EventKind",
    "Exercise",
    "ExerciseDefinition",
    "ExerciseMonitor",
    "ExerciseProgress",
    "ExerciseResult",
    "FlowController",
    "FlowPolicy",
    "Goal",
    "GoalDefinition",
    "GoalKind",
    "MalformedExerciseError",
    "MalformedTargetError",
    "MonitorFinishedError",
    "ModeGoal",
    "ModeKind",
    "Outcome",
    "PositionGoal",
    "ProgressEvent",
    "ProgressStatus",
    "RegisterGoal",
    "SamplerError",
    "StateSampler",
    "TextGoal",
    "UnknownGoalKindError",
    "UnknownModeError",
    "compile_exercise",
    "compile_goal",
    "satisfied",
]
