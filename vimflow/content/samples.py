"""
Built-in sample chapter.

Written in the same declarative shape chapter files use (goal `type`,
`sample_code`, `flow_type`), so it exercises the full compile path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vimflow.core.exercise import Exercise, compile_exercise


@dataclass(frozen=True)
class Chapter:
    """Numbered group of exercises."""

    number: int
    title: str
    description: str
    exercises: tuple[Exercise, ...]

    def exercise(self, number: int) -> Exercise:
        """Exercise by 1-based number."""
        if not 1 <= number <= len(self.exercises):
            raise IndexError(
                f"Exercise {number} out of range (1-{len(self.exercises)})"
            )
        return self.exercises[number - 1]


SAMPLE_CHAPTER: dict[str, Any] = {
    "chapter": {
        "number": 1,
        "title": "Basic movement and mode switching",
        "description": "Practice cursor movement and mode switches back to back.",
    },
    "continuous_exercises": [
        {
            "title": "hjkl movement",
            "description": "Move the cursor efficiently with h, j, k and l.",
            "sample_code": [
                "let x = 10;",
                "let y = 20;",
                "let z = 30;",
            ],
            "goals": [
                {
                    "type": "position",
                    "target": [0, 3],
                    "description": "Move three characters right (lll)",
                    "hint": "Press l three times",
                },
                {
                    "type": "position",
                    "target": [1, 3],
                    "description": "Move to the same column on the next line (j)",
                    "hint": "j moves down",
                },
                {
                    "type": "position",
                    "target": [1, 0],
                    "description": "Go back to the start of the line (hhh)",
                    "hint": "h moves left",
                },
                {
                    "type": "position",
                    "target": [0, 0],
                    "description": "Return to the first line (k)",
                    "hint": "k moves up",
                },
            ],
            "flow_type": "sequential",
        },
        {
            "title": "Mode switching and text input",
            "description": "Switch between Insert and Normal mode while editing text.",
            "sample_code": [
                "function greet(name) {",
                "  console.log('Hello, ');",
                "}",
            ],
            "goals": [
                {
                    "type": "position",
                    "target": [1, 23],
                    "description": "Move onto the closing parenthesis on line 2",
                    "hint": "j to go down, then f) to jump to the parenthesis",
                },
                {
                    "type": "mode",
                    "target": "insert",
                    "description": "Enter Insert mode (i)",
                    "hint": "i inserts before the cursor",
                },
                {
                    "type": "text",
                    "target": {"line": 1, "expected": "  console.log('Hello, ' + name);"},
                    "description": "Type \" + name\" before the parenthesis",
                    "hint": "Type as usual",
                },
                {
                    "type": "mode",
                    "target": "normal",
                    "description": "Press Esc to return to Normal mode",
                    "hint": "Esc switches back",
                },
            ],
            "flow_type": "sequential",
        },
        {
            "title": "Delete and yank",
            "description": "Combine delete and yank to edit efficiently.",
            "sample_code": [
                "const old_name = 'Alice';",
                "const new_name = 'Bob';",
            ],
            "goals": [
                {
                    "type": "position",
                    "target": [0, 18],
                    "description": "Move onto 'Alice' on line 1",
                },
                {
                    "type": "mode",
                    "target": "operator_d",
                    "description": "Start a delete (d)",
                    "hint": "d enters operator-pending mode",
                },
                {
                    "type": "register",
                    "target": {"register": "\"", "expected": "Alice"},
                    "description": "Delete the word (diw)",
                    "hint": "iw selects the inner word",
                },
                {
                    "type": "position",
                    "target": [1, 18],
                    "description": "Move onto 'Bob' on line 2",
                },
                {
                    "type": "text",
                    "target": {"line": 1, "expected": "const new_name = 'Alice';"},
                    "description": "Replace 'Bob' with 'Alice' (viwp)",
                    "hint": "viw selects the word; p pastes the deleted text over it",
                },
            ],
            "flow_type": "sequential",
        },
        {
            "title": "Visual mode tour",
            "description": "Visit every visual mode, in any order you like.",
            "sample_code": [
                "alpha beta gamma",
                "delta epsilon zeta",
            ],
            "goals": [
                {
                    "type": "mode",
                    "target": "visual",
                    "description": "Characterwise visual mode (v)",
                },
                {
                    "type": "mode",
                    "target": "visual_line",
                    "description": "Linewise visual mode (V)",
                },
                {
                    "type": "mode",
                    "target": "visual_block",
                    "description": "Blockwise visual mode (Ctrl-V)",
                },
            ],
            "flow_type": "any_order",
        },
        {
            "title": "Insert at the right spot",
            "description": "Be in Insert mode on the second word of line 1, both at once.",
            "sample_code": [
                "hello world",
            ],
            "goals": [
                {
                    "type": "position",
                    "target": [0, 6],
                    "description": "Cursor on 'world'",
                    "hint": "w jumps to the next word",
                },
                {
                    "type": "mode",
                    "target": "insert",
                    "description": "Insert mode",
                    "hint": "i inserts before the cursor",
                },
            ],
            "flow_type": "parallel",
        },
    ],
}


def load_sample_chapter() -> Chapter:
    """Compile the built-in chapter."""
    info = SAMPLE_CHAPTER["chapter"]
    return Chapter(
        number=int(info["number"]),
        title=info["title"],
        description=info["description"],
        exercises=tuple(
            compile_exercise(raw) for raw in SAMPLE_CHAPTER["continuous_exercises"]
        ),
    )
