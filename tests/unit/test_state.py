"""
Unit tests for the editor state model.

Covers the Vim mode-code mapping and snapshot immutability.
"""

import pytest

from vimflow.core.state import (
    COMMAND,
    INSERT,
    NORMAL,
    VISUAL,
    VISUAL_BLOCK,
    VISUAL_LINE,
    EditorMode,
    EditorState,
    ModeKind,
)


class TestEditorMode:
    """Test mode construction and equality."""

    def test_operator_pending_compares_operator(self):
        assert EditorMode.operator_pending("d") == EditorMode.operator_pending("d")
        assert EditorMode.operator_pending("d") != EditorMode.operator_pending("y")

    def test_operator_pending_defaults_to_empty_operator(self):
        mode = EditorMode(ModeKind.OPERATOR_PENDING)
        assert mode.operator == ""

    def test_plain_mode_rejects_operator(self):
        with pytest.raises(ValueError):
            EditorMode(ModeKind.NORMAL, "d")

    def test_str(self):
        assert str(INSERT) == "insert"
        assert str(EditorMode.operator_pending("c")) == "operator_pending(c)"


class TestFromVimCodes:
    """Test mapping of mode() / mode(1) results."""

    @pytest.mark.parametrize(
        "mode,expected",
        [
            ("n", NORMAL),
            ("i", INSERT),
            ("v", VISUAL),
            ("V", VISUAL_LINE),
            ("\x16", VISUAL_BLOCK),
            ("c", COMMAND),
        ],
    )
    def test_basic_codes(self, mode, expected):
        assert EditorMode.from_vim_codes(mode, mode) == expected

    def test_operator_pending_from_detailed_mode(self):
        mode = EditorMode.from_vim_codes("n", "no", "d")
        assert mode == EditorMode.operator_pending("d")

    def test_forced_motion_is_operator_pending(self):
        """mode(1) reports 'nov' for d + v forced motion."""
        mode = EditorMode.from_vim_codes("n", "nov", "y")
        assert mode == EditorMode.operator_pending("y")

    def test_operator_pending_without_known_operator(self):
        mode = EditorMode.from_vim_codes("n", "no")
        assert mode == EditorMode.operator_pending("")

    def test_insert_normal_is_normal(self):
        """Ctrl-O from insert reports 'niI', which is not operator-pending."""
        assert EditorMode.from_vim_codes("n", "niI") == NORMAL

    def test_unknown_code_falls_back_to_normal(self):
        assert EditorMode.from_vim_codes("R", "R") == NORMAL
        assert EditorMode.from_vim_codes("", "") == NORMAL


class TestEditorState:
    """Test snapshot construction."""

    def test_default(self):
        state = EditorState.default()
        assert state.mode == NORMAL
        assert (state.cursor_line, state.cursor_col) == (0, 0)
        assert state.buffer_lines == ()
        assert dict(state.registers) == {}

    def test_negative_cursor_rejected(self):
        with pytest.raises(ValueError):
            EditorState(cursor_line=-1)
        with pytest.raises(ValueError):
            EditorState(cursor_col=-1)

    def test_buffer_lines_become_tuple(self):
        state = EditorState(buffer_lines=["a", "b"])
        assert state.buffer_lines == ("a", "b")

    def test_registers_are_read_only(self):
        source = {'"': "Alice"}
        state = EditorState(registers=source)
        source['"'] = "Bob"
        assert state.registers['"'] == "Alice"
        with pytest.raises(TypeError):
            state.registers["a"] = "x"

    def test_frozen(self):
        state = EditorState.default()
        with pytest.raises(AttributeError):
            state.cursor_line = 3

    def test_line_lookup(self):
        state = EditorState(buffer_lines=("first", "second"))
        assert state.line(1) == "second"
        assert state.line(2) is None
        assert state.line(-1) is None

    def test_structural_equality(self):
        a = EditorState(mode=INSERT, cursor_line=1, registers={"a": "x"})
        b = EditorState(mode=INSERT, cursor_line=1, registers={"a": "x"})
        assert a == b
