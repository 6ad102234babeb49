"""
Unit tests for the goal compiler and exercise compilation.
"""

import pytest

from vimflow.core.exercise import (
    Exercise,
    FlowPolicy,
    MalformedExerciseError,
    compile_exercise,
)
from vimflow.core.goals import (
    COMPILERS,
    BufferChangedGoal,
    ConfigError,
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
from vimflow.core.state import INSERT, VISUAL_BLOCK, EditorMode


class TestCompilerRegistry:
    """Test the compiler registry."""

    def test_every_kind_has_a_compiler(self):
        assert set(COMPILERS) == set(GoalKind)


class TestPositionGoals:

    def test_position(self):
        goal = compile_goal({"kind": "position", "target": [2, 5]})
        assert goal == PositionGoal(2, 5)

    def test_type_alias_for_kind(self):
        goal = compile_goal({"type": "position", "target": [0, 3]})
        assert goal == PositionGoal(0, 3)

    def test_missing_entries_default_to_zero(self):
        assert compile_goal({"kind": "position", "target": []}) == PositionGoal(0, 0)
        assert compile_goal({"kind": "position", "target": [4]}) == PositionGoal(4, 0)

    def test_non_integer_entries_default_to_zero(self):
        goal = compile_goal({"kind": "position", "target": ["x", -2]})
        assert goal == PositionGoal(0, 0)

    def test_non_array_target_rejected(self):
        with pytest.raises(MalformedTargetError):
            compile_goal({"kind": "position", "target": {"line": 1}})

    def test_description_and_hint_kept(self):
        goal = compile_goal(
            {"kind": "position", "target": [0, 1], "description": "go", "hint": "l"}
        )
        assert goal.description == "go"
        assert goal.hint == "l"


class TestModeGoals:

    @pytest.mark.parametrize(
        "name,mode",
        [("insert", INSERT), ("visual_block", VISUAL_BLOCK)],
    )
    def test_named_modes(self, name, mode):
        assert compile_goal({"kind": "mode", "target": name}) == ModeGoal(mode)

    def test_operator_mode(self):
        goal = compile_goal({"kind": "mode", "target": "operator_d"})
        assert goal == ModeGoal(EditorMode.operator_pending("d"))

    def test_unknown_mode(self):
        with pytest.raises(UnknownModeError) as excinfo:
            compile_goal({"kind": "mode", "target": "replace"})
        assert excinfo.value.value == "replace"

    def test_non_string_mode_rejected(self):
        with pytest.raises(MalformedTargetError):
            compile_goal({"kind": "mode", "target": 3})


class TestTextAndRegisterGoals:

    def test_text(self):
        goal = compile_goal(
            {"kind": "text", "target": {"line": 1, "expected": "hello"}}
        )
        assert goal == TextGoal(1, "hello")

    def test_text_defaults(self):
        assert compile_goal({"kind": "text", "target": {}}) == TextGoal(0, "")

    def test_text_requires_mapping(self):
        with pytest.raises(MalformedTargetError):
            compile_goal({"kind": "text", "target": "hello"})

    def test_register(self):
        goal = compile_goal(
            {"kind": "register", "target": {"register": "a", "expected": "word"}}
        )
        assert goal == RegisterGoal("a", "word")

    def test_numeric_register_name(self):
        goal = compile_goal(
            {"kind": "register", "target": {"register": 0, "expected": "x"}}
        )
        assert goal == RegisterGoal("0", "x")

    def test_buffer_change_ignores_target(self):
        goal = compile_goal({"kind": "buffer_change", "target": {"anything": 1}})
        assert isinstance(goal, BufferChangedGoal)


class TestCompileErrors:

    def test_unknown_kind(self):
        with pytest.raises(UnknownGoalKindError) as excinfo:
            compile_goal({"kind": "teleport", "target": None})
        assert excinfo.value.kind == "teleport"

    def test_missing_kind(self):
        with pytest.raises(ConfigError):
            compile_goal({"target": [0, 0]})

    def test_accepts_goal_definition(self):
        definition = GoalDefinition(kind="mode", target="insert")
        assert compile_goal(definition) == ModeGoal(INSERT)

    def test_errors_share_base_class(self):
        for cls in (UnknownGoalKindError, UnknownModeError, MalformedTargetError):
            assert issubclass(cls, ConfigError)


class TestCompileExercise:

    @pytest.fixture
    def raw(self):
        return {
            "title": "Visual tour",
            "description": "visit modes",
            "sample_code": ["alpha", "beta"],
            "goals": [
                {"type": "mode", "target": "visual"},
                {"type": "mode", "target": "visual_line"},
            ],
            "flow_type": "any_order",
        }

    def test_compiles_all_goals(self, raw):
        exercise = compile_exercise(raw)
        assert isinstance(exercise, Exercise)
        assert exercise.goal_count == 2
        assert exercise.flow_policy is FlowPolicy.ANY_ORDER
        assert exercise.sample_text == "alpha\nbeta"

    def test_mode_goals_do_not_read_editor_contents(self, raw):
        assert not compile_exercise(raw).reads_editor_contents

    @pytest.mark.parametrize(
        "goal",
        [
            {"type": "text", "target": {"line": 0, "expected": "alpha"}},
            {"type": "register", "target": {"register": "a", "expected": "x"}},
        ],
    )
    def test_text_and_register_goals_read_editor_contents(self, raw, goal):
        raw["goals"].append(goal)
        assert compile_exercise(raw).reads_editor_contents

    def test_flow_policy_defaults_to_sequential(self, raw):
        del raw["flow_type"]
        assert compile_exercise(raw).flow_policy is FlowPolicy.SEQUENTIAL

    def test_empty_goal_list_rejected(self, raw):
        raw["goals"] = []
        with pytest.raises(MalformedExerciseError):
            compile_exercise(raw)

    def test_unknown_flow_policy_rejected(self, raw):
        raw["flow_type"] = "random"
        with pytest.raises(MalformedExerciseError) as excinfo:
            compile_exercise(raw)
        assert "Visual tour" in str(excinfo.value)

    def test_one_bad_goal_fails_the_exercise(self, raw):
        raw["goals"].append({"type": "mode", "target": "select"})
        with pytest.raises(UnknownModeError):
            compile_exercise(raw)
