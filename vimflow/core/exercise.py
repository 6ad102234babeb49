"""
Exercise schema and compilation.

An exercise arrives from the content loader as a plain mapping. It is
validated and compiled in one pass; an exercise never starts with a
partially compiled goal list.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .goals import ConfigError, Goal, GoalDefinition, RegisterGoal, TextGoal, compile_goals


class FlowPolicy(str, Enum):
    """How the goals of one exercise must be satisfied."""

    SEQUENTIAL = "sequential"  # In declared order
    ANY_ORDER = "any_order"  # Each at some point, in any order
    PARALLEL = "parallel"  # All at once, in a single sample


class MalformedExerciseError(ConfigError):
    """Raised when exercise content does not match the exercise schema."""


class ExerciseDefinition(BaseModel):
    """Exercise as written in chapter content."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str = ""
    sample_lines: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("sample_lines", "sample_code"),
    )
    goals: list[GoalDefinition] = Field(min_length=1)
    flow_policy: FlowPolicy = Field(
        default=FlowPolicy.SEQUENTIAL,
        validation_alias=AliasChoices("flow_policy", "flow_type"),
    )


@dataclass(frozen=True)
class Exercise:
    """Compiled exercise; immutable once loaded."""

    title: str
    description: str
    sample_lines: tuple[str, ...]
    goals: tuple[Goal, ...]
    flow_policy: FlowPolicy = FlowPolicy.SEQUENTIAL

    @property
    def goal_count(self) -> int:
        return len(self.goals)

    @property
    def reads_editor_contents(self) -> bool:
        """True when a goal inspects buffer lines or registers, not just cursor and mode."""
        return any(isinstance(goal, (TextGoal, RegisterGoal)) for goal in self.goals)

    @property
    def sample_text(self) -> str:
        """Initial buffer content as written to the practice file."""
        return "\n".join(self.sample_lines)


def compile_exercise(raw: ExerciseDefinition | Mapping[str, Any]) -> Exercise:
    """
    Validate and compile an exercise.

    Args:
        raw: ExerciseDefinition or a mapping in the exercise schema

    Returns:
        Compiled Exercise

    Raises:
        MalformedExerciseError: schema violation (missing title, no goals,
            unknown flow policy, ...)
        ConfigError: any goal failed to compile
    """
    if isinstance(raw, ExerciseDefinition):
        definition = raw
    else:
        try:
            definition = ExerciseDefinition.model_validate(raw)
        except ValidationError as exc:
            title = raw.get("title", "<untitled>") if isinstance(raw, Mapping) else "<untitled>"
            raise MalformedExerciseError(f"Exercise '{title}' is invalid: {exc}") from exc

    return Exercise(
        title=definition.title,
        description=definition.description,
        sample_lines=tuple(definition.sample_lines),
        goals=compile_goals(definition.goals),
        flow_policy=definition.flow_policy,
    )
