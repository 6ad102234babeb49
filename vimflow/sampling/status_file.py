"""
Status-file sampler.

The status script (see status_script.py) makes the editor rewrite a single
record on every cursor move, mode change and 100 ms timer tick:

    LINE:3,COL:5,MODE:n,DETAILED:no,OPERATOR:d

LINE and COL are 1-based; they are converted to 0-based here. OPERATOR is
optional. Only the cursor and mode are carried, so buffer lines and registers
stay empty in snapshots from this sampler.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from vimflow.core.sampler import SamplerError
from vimflow.core.state import EditorMode, EditorState

RECORD_PREFIX = "LINE:"


def _parse_one_based(value: str) -> int:
    """Parse a 1-based coordinate into a 0-based one (unparsable -> 0)."""
    try:
        number = int(value.strip())
    except ValueError:
        number = 1
    return max(number - 1, 0)


def parse_status_record(content: str) -> EditorState:
    """
    Parse the first status record found in `content`.

    Raises:
        SamplerError: no line starts with "LINE:"
    """
    fields: dict[str, str] = {}
    for line in content.splitlines():
        if line.startswith(RECORD_PREFIX):
            for part in line.split(","):
                key, sep, value = part.partition(":")
                if sep:
                    fields[key.strip()] = value
            break
    else:
        raise SamplerError("No status record in content")

    operator = fields.get("OPERATOR") or None
    mode = EditorMode.from_vim_codes(
        fields.get("MODE", "n"),
        fields.get("DETAILED", "n"),
        operator,
    )
    return EditorState(
        mode=mode,
        cursor_line=_parse_one_based(fields.get("LINE", "1")),
        cursor_col=_parse_one_based(fields.get("COL", "1")),
        pending_operator=operator,
    )


class StatusFileSampler:
    """Read snapshots from the status file written by the editor."""

    def __init__(self, path: Path | str, log=None):
        self.path = Path(path)
        self.log = log or logger.bind(component="sampler", source=str(self.path))

    def sample(self) -> EditorState:
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SamplerError(f"Cannot read status file {self.path}: {exc}") from exc

        state = parse_status_record(content)
        self.log.trace(
            "Sampled line={} col={} mode={}",
            state.cursor_line,
            state.cursor_col,
            state.mode,
        )
        return state

    def clear(self) -> None:
        """Remove a stale status file left over from an earlier run."""
        self.path.unlink(missing_ok=True)
