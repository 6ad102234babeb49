"""
Goal compiler.

Turns the declarative {kind, target} goal description handed over by the
content loader into one of the typed goal variants below. Validation happens
once, at exercise load time; the detector only ever sees compiled goals.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .state import (
    COMMAND,
    INSERT,
    NORMAL,
    VISUAL,
    VISUAL_BLOCK,
    VISUAL_LINE,
    EditorMode,
)


# =============================================================================
# Errors
# =============================================================================


class ConfigError(Exception):
    """Raised when exercise content cannot be compiled."""


class UnknownGoalKindError(ConfigError):
    """Raised for a goal kind the compiler does not know."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown goal kind: {kind}")


class UnknownModeError(ConfigError):
    """Raised for a mode target that names no editor mode."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown mode: {value}")


class MalformedTargetError(ConfigError):
    """Raised when a goal target has the wrong shape for its kind."""


# =============================================================================
# Declarative form
# =============================================================================


class GoalKind(str, Enum):
    """Goal kinds accepted in exercise content."""

    POSITION = "position"
    MODE = "mode"
    TEXT = "text"
    REGISTER = "register"
    BUFFER_CHANGE = "buffer_change"


class GoalDefinition(BaseModel):
    """Goal as written in exercise content (`type` is accepted for `kind`)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(validation_alias=AliasChoices("kind", "type"))
    target: Any = None
    description: str = ""
    hint: str | None = None


# =============================================================================
# Compiled form
# =============================================================================


@dataclass(frozen=True)
class PositionGoal:
    line: int
    col: int
    description: str = field(default="", compare=False)
    hint: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ModeGoal:
    mode: EditorMode
    description: str = field(default="", compare=False)
    hint: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class TextGoal:
    line: int
    expected: str
    description: str = field(default="", compare=False)
    hint: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class RegisterGoal:
    register: str
    expected: str
    description: str = field(default="", compare=False)
    hint: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class BufferChangedGoal:
    description: str = field(default="", compare=False)
    hint: str | None = field(default=None, compare=False)


Goal = Union[PositionGoal, ModeGoal, TextGoal, RegisterGoal, BufferChangedGoal]

MODE_NAMES: dict[str, EditorMode] = {
    "normal": NORMAL,
    "insert": INSERT,
    "visual": VISUAL,
    "visual_line": VISUAL_LINE,
    "visual_block": VISUAL_BLOCK,
    "command": COMMAND,
}

OPERATOR_PREFIX = "operator_"


# Compiler registry - populated by @register decorator
COMPILERS: dict[GoalKind, Callable[[GoalDefinition], Goal]] = {}


def register(kind: GoalKind):
    """Decorator to register the compiler for a goal kind."""
    def decorator(func):
        COMPILERS[kind] = func
        return func
    return decorator


def _coerce_index(value: Any) -> int:
    """Non-negative int, or 0 for anything missing or non-integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


def _coerce_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _require_mapping(definition: GoalDefinition) -> Mapping[str, Any]:
    if not isinstance(definition.target, Mapping):
        raise MalformedTargetError(
            f"{definition.kind} target must be an object, got {type(definition.target).__name__}"
        )
    return definition.target


@register(GoalKind.POSITION)
def _compile_position(definition: GoalDefinition) -> Goal:
    target = definition.target
    if not isinstance(target, (list, tuple)):
        raise MalformedTargetError(
            f"position target must be an array [line, col], got {type(target).__name__}"
        )
    line = _coerce_index(target[0]) if len(target) > 0 else 0
    col = _coerce_index(target[1]) if len(target) > 1 else 0
    return PositionGoal(line, col, definition.description, definition.hint)


@register(GoalKind.MODE)
def _compile_mode(definition: GoalDefinition) -> Goal:
    value = definition.target
    if not isinstance(value, str):
        raise MalformedTargetError(
            f"mode target must be a string, got {type(value).__name__}"
        )
    if value in MODE_NAMES:
        mode = MODE_NAMES[value]
    elif value.startswith(OPERATOR_PREFIX):
        mode = EditorMode.operator_pending(value[len(OPERATOR_PREFIX):])
    else:
        raise UnknownModeError(value)
    return ModeGoal(mode, definition.description, definition.hint)


@register(GoalKind.TEXT)
def _compile_text(definition: GoalDefinition) -> Goal:
    target = _require_mapping(definition)
    return TextGoal(
        _coerce_index(target.get("line")),
        _coerce_text(target.get("expected")),
        definition.description,
        definition.hint,
    )


@register(GoalKind.REGISTER)
def _compile_register(definition: GoalDefinition) -> Goal:
    target = _require_mapping(definition)
    name = target.get("register")
    # YAML reads `register: 0` as an int
    if isinstance(name, int) and not isinstance(name, bool):
        name = str(name)
    return RegisterGoal(
        _coerce_text(name),
        _coerce_text(target.get("expected")),
        definition.description,
        definition.hint,
    )


@register(GoalKind.BUFFER_CHANGE)
def _compile_buffer_change(definition: GoalDefinition) -> Goal:
    return BufferChangedGoal(definition.description, definition.hint)


def compile_goal(definition: GoalDefinition | Mapping[str, Any]) -> Goal:
    """
    Compile one declarative goal.

    Args:
        definition: GoalDefinition, or a raw mapping in the same shape

    Returns:
        The typed goal

    Raises:
        UnknownGoalKindError: kind is not one of GoalKind
        UnknownModeError: mode target names no mode
        MalformedTargetError: target has the wrong shape for its kind
    """
    if not isinstance(definition, GoalDefinition):
        try:
            definition = GoalDefinition.model_validate(definition)
        except ValidationError as exc:
            raise ConfigError(f"Invalid goal definition: {exc}") from exc
    try:
        kind = GoalKind(definition.kind)
    except ValueError:
        raise UnknownGoalKindError(definition.kind) from None
    return COMPILERS[kind](definition)


def compile_goals(definitions: list[GoalDefinition]) -> tuple[Goal, ...]:
    """Compile every goal; the first failure aborts the whole list."""
    return tuple(compile_goal(definition) for definition in definitions)
