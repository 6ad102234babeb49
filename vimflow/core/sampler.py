"""
Sampler protocol and errors.

Samplers live in vimflow.sampling; the monitor only depends on this protocol.
"""

from typing import Protocol

from .state import EditorState


class SamplerError(Exception):
    """Raised when no snapshot could be read from the editor."""


class StateSampler(Protocol):
    """Protocol for editor state samplers."""

    def sample(self) -> EditorState:
        """Return the latest snapshot. Raises SamplerError on failure."""
        ...
