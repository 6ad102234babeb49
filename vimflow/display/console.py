"""
Rich console sink: prints the goal in play and the completion banner.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from vimflow.core.flow import EventKind, ProgressEvent

STYLES = {
    EventKind.STARTED: "cyan",
    EventKind.GOAL_ADVANCED: "cyan",
    EventKind.GOAL_SATISFIED: "green",
    EventKind.EXERCISE_COMPLETED: "bold green",
}


class ConsoleSink:
    """Render progress events as rich panels."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def publish(self, event: ProgressEvent) -> None:
        if event.is_completion:
            self._render_completion(event)
        elif event.kind is EventKind.GOAL_SATISFIED:
            self.console.print(
                f"[green]✓[/green] {event.description} "
                f"[dim]({event.completed_count}/{event.total})[/dim]"
            )
        else:
            self._render_goal(event)

    def _render_goal(self, event: ProgressEvent) -> None:
        body = Text(event.description or "(no description)")
        if event.hint:
            body.append(f"\n\n💡 {event.hint}", style="yellow")

        if event.next_goal_index is not None:
            position = event.next_goal_index + 1
        else:
            position = event.completed_count + 1
        self.console.print(
            Panel(
                body,
                title=f"[bold]{event.exercise_title}[/bold]",
                subtitle=f"Goal {position}/{event.total}",
                border_style=STYLES[event.kind],
                box=box.ROUNDED,
                padding=(1, 2),
            )
        )

    def _render_completion(self, event: ProgressEvent) -> None:
        self.console.print(
            Panel(
                f"✅ All {event.total} goals reached!",
                title=f"[bold]{event.exercise_title}[/bold]",
                border_style=STYLES[event.kind],
                box=box.HEAVY,
                padding=(1, 2),
            )
        )
