"""
Progress-file sink.

Writes the 1-based position of the goal now in play, or "completed", to a
file the instruction pane can watch.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from vimflow.core.flow import EventKind, ProgressEvent


class ProgressFileSink:
    """Publish the display token of every progress event to a file."""

    def __init__(self, path: Path | str, log=None):
        self.path = Path(path)
        self.log = log or logger.bind(component="display", target=str(self.path))

    def publish(self, event: ProgressEvent) -> None:
        if event.kind is EventKind.STARTED:
            # A fresh run starts from an empty progress file
            self.clear()
            return
        token = event.display_token()
        if token is None:
            return
        self.path.write_text(token + "\n", encoding="utf-8")
        self.log.debug("Progress token written: {}", token)

    def read(self) -> str | None:
        """Current token, or None when nothing has been published."""
        try:
            return self.path.read_text(encoding="utf-8").strip() or None
        except FileNotFoundError:
            return None

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
