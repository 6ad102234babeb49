"""
Display sinks for exercise progress.

- ProgressFileSink: writes the progress token ("2", "3", ..., "completed")
- ConsoleSink: rich panels with the current goal and completion summary
"""

from .console import ConsoleSink
from .progress_file import ProgressFileSink

__all__ = ["ConsoleSink", "ProgressFileSink"]
