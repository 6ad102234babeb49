"""
Editor state model.

Value types describing one sampled snapshot of the editor. Snapshots are
produced fresh on every sample and never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class ModeKind(str, Enum):
    """Editor modes the tutorial can observe."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual_line"
    VISUAL_BLOCK = "visual_block"
    COMMAND = "command"
    OPERATOR_PENDING = "operator_pending"


# Ctrl-V, as reported by mode() for blockwise visual
CTRL_V = "\x16"


@dataclass(frozen=True)
class EditorMode:
    """
    Editor mode, including the pending operator for operator-pending mode.

    Equality is structural: OperatorPending("d") != OperatorPending("y").
    """

    kind: ModeKind
    operator: str | None = None

    def __post_init__(self) -> None:
        if self.kind is ModeKind.OPERATOR_PENDING:
            if self.operator is None:
                object.__setattr__(self, "operator", "")
        elif self.operator is not None:
            raise ValueError(f"Mode {self.kind.value} does not carry an operator")

    @classmethod
    def operator_pending(cls, operator: str) -> EditorMode:
        return cls(ModeKind.OPERATOR_PENDING, operator)

    @classmethod
    def from_vim_codes(
        cls,
        mode: str,
        mode_detailed: str = "",
        operator: str | None = None,
    ) -> EditorMode:
        """
        Map Vim's mode() / mode(1) codes to an EditorMode.

        Args:
            mode: Result of mode(), e.g. "n", "i", "v", "V", "c"
            mode_detailed: Result of mode(1), e.g. "no", "nov", "niI"
            operator: Value of v:operator, if known

        Returns:
            The matching mode; unknown codes fall back to Normal.
        """
        if mode == "n" and mode_detailed.startswith("no"):
            return cls.operator_pending(operator or "")
        if mode == "n":
            return NORMAL
        if mode == "i":
            return INSERT
        if mode == "v":
            return VISUAL
        if mode == "V":
            return VISUAL_LINE
        if CTRL_V in mode:
            return VISUAL_BLOCK
        if mode == "c":
            return COMMAND
        return NORMAL

    def __str__(self) -> str:
        if self.kind is ModeKind.OPERATOR_PENDING:
            return f"operator_pending({self.operator})"
        return self.kind.value


NORMAL = EditorMode(ModeKind.NORMAL)
INSERT = EditorMode(ModeKind.INSERT)
VISUAL = EditorMode(ModeKind.VISUAL)
VISUAL_LINE = EditorMode(ModeKind.VISUAL_LINE)
VISUAL_BLOCK = EditorMode(ModeKind.VISUAL_BLOCK)
COMMAND = EditorMode(ModeKind.COMMAND)


@dataclass(frozen=True)
class EditorState:
    """One immutable snapshot of the editor."""

    mode: EditorMode = NORMAL
    cursor_line: int = 0  # 0-based
    cursor_col: int = 0  # 0-based
    pending_operator: str | None = None
    buffer_lines: tuple[str, ...] = ()
    registers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.cursor_line < 0 or self.cursor_col < 0:
            raise ValueError(
                f"Cursor must be non-negative, got ({self.cursor_line}, {self.cursor_col})"
            )
        object.__setattr__(self, "buffer_lines", tuple(self.buffer_lines))
        object.__setattr__(self, "registers", MappingProxyType(dict(self.registers)))

    @classmethod
    def default(cls) -> EditorState:
        """Cursor at origin, Normal mode, empty buffer."""
        return cls()

    def line(self, index: int) -> str | None:
        """Return buffer line `index`, or None when out of range."""
        if 0 <= index < len(self.buffer_lines):
            return self.buffer_lines[index]
        return None
