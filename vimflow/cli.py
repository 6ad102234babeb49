"""
vimflow CLI - continuous Vim practice against a live editor.

Usage:
    vimflow list                      # Built-in exercises
    vimflow watch 1                   # Track exercise 1 via the status file
    vimflow watch 3 --socket /tmp/nv  # Track via Neovim remote-expr
    vimflow status-script -o s.vim    # Vim script that writes the status file

Start the editor yourself, e.g.:
    nvim -S s.vim practice.txt
    nvim --listen /tmp/nv practice.txt
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from vimflow.config import get_settings
from vimflow.content import Chapter, load_sample_chapter
from vimflow.core.exercise import Exercise
from vimflow.core.goals import ConfigError
from vimflow.core.monitor import ExerciseMonitor, ExerciseResult, Outcome
from vimflow.core.sampler import StateSampler
from vimflow.display import ConsoleSink, ProgressFileSink
from vimflow.log_setup import configure_logging
from vimflow.sampling import NvimRpcSampler, StatusFileSampler, render_status_script

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="vimflow",
    help="Continuous Vim practice: goals advance as you edit.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

FLOW_LABELS = {
    "sequential": "[cyan]sequential[/cyan]",
    "any_order": "[magenta]any order[/magenta]",
    "parallel": "[yellow]parallel[/yellow]",
}


@app.callback()
def main_callback(
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="Console log level")
    ] = None,
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Write a DEBUG log here")
    ] = None,
) -> None:
    """Continuous Vim practice: goals advance as you edit."""
    settings = get_settings()
    configure_logging(log_level or settings.log_level, log_file or settings.log_file)


def _load_chapter() -> Chapter:
    try:
        return load_sample_chapter()
    except ConfigError as exc:
        console.print(f"[red]Exercise content is invalid:[/red] {exc}")
        raise typer.Exit(1)


# =============================================================================
# Commands
# =============================================================================


@app.command("list")
def list_exercises() -> None:
    """List the built-in exercises."""
    chapter = _load_chapter()

    table = Table(title=f"Chapter {chapter.number}: {chapter.title}")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Exercise")
    table.add_column("Flow")
    table.add_column("Goals", justify="right")

    for number, exercise in enumerate(chapter.exercises, start=1):
        table.add_row(
            str(number),
            exercise.title,
            FLOW_LABELS.get(exercise.flow_policy.value, exercise.flow_policy.value),
            str(exercise.goal_count),
        )

    console.print(table)
    console.print(f"[dim]{chapter.description}[/dim]")


@app.command()
def watch(
    number: Annotated[int, typer.Argument(help="Exercise number (see `vimflow list`)")],
    socket: Annotated[
        str | None, typer.Option("--socket", "-s", help="Neovim --listen socket")
    ] = None,
    status_file: Annotated[
        Path | None, typer.Option("--status-file", help="Status file written by the editor")
    ] = None,
    progress_file: Annotated[
        Path | None, typer.Option("--progress-file", help="Progress token file")
    ] = None,
    interval: Annotated[
        float | None, typer.Option("--interval", "-i", help="Seconds between samples")
    ] = None,
) -> None:
    """
    Track one exercise against a running editor until it is complete.

    Ctrl-C stops tracking; the exercise is left incomplete.
    """
    settings = get_settings()
    chapter = _load_chapter()
    try:
        exercise = chapter.exercise(number)
    except IndexError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    socket = socket or settings.nvim_socket
    # The status file only carries cursor and mode
    if not socket and exercise.reads_editor_contents:
        console.print(
            f"[red]'{exercise.title}' checks buffer text or registers, "
            "which the status file does not carry.[/red]\n"
            "Start Neovim with [bold]nvim --listen <socket>[/bold] and pass "
            "[bold]--socket <socket>[/bold] (or set VIMFLOW_NVIM_SOCKET)."
        )
        raise typer.Exit(1)

    _show_exercise(exercise)

    sampler = _build_sampler(
        socket,
        status_file or settings.status_file,
        settings.nvim_binary,
    )
    monitor = ExerciseMonitor(
        exercise=exercise,
        sampler=sampler,
        sinks=[ConsoleSink(console), ProgressFileSink(progress_file or settings.progress_file)],
        interval_seconds=interval or settings.poll_interval_seconds,
    )

    monitor.start()
    try:
        while monitor.is_running:
            monitor.wait(timeout=0.5)
    except KeyboardInterrupt:
        logger.debug("Interrupted; cancelling monitor")
        monitor.stop()
        monitor.wait()

    _show_result(monitor.result or ExerciseResult.incomplete())


@app.command("status-script")
def status_script(
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the script here")
    ] = None,
    status_file: Annotated[
        Path | None, typer.Option("--status-file", help="Status file the script writes")
    ] = None,
) -> None:
    """Print the Vim script that publishes editor state to the status file."""
    settings = get_settings()
    script = render_status_script(status_file or settings.status_file)
    if output is None:
        typer.echo(script)
        return
    output.write_text(script, encoding="utf-8")
    console.print(f"[green]✓[/green] Status script written to {output}")
    console.print(f"[dim]Start your editor with: nvim -S {output} <file>[/dim]")


# =============================================================================
# Helpers
# =============================================================================


def _build_sampler(socket: str | None, status_file: Path, nvim_binary: str) -> StateSampler:
    if socket:
        return NvimRpcSampler(socket, nvim_binary=nvim_binary)
    sampler = StatusFileSampler(status_file)
    sampler.clear()
    return sampler


def _show_exercise(exercise: Exercise) -> None:
    lines = [exercise.description, "", "[bold]Sample:[/bold]"]
    lines += [f"[dim]{i:2}:[/dim] {line}" for i, line in enumerate(exercise.sample_lines, start=1)]
    lines += ["", "[bold]Goals:[/bold]"]
    lines += [f"  {i}. {goal.description}" for i, goal in enumerate(exercise.goals, start=1)]

    console.print(
        Panel(
            "\n".join(lines),
            title=f"[bold cyan]{exercise.title}[/bold cyan]",
            subtitle=FLOW_LABELS.get(exercise.flow_policy.value, ""),
            border_style="cyan",
            padding=(1, 2),
        )
    )


def _show_result(result: ExerciseResult) -> None:
    if result.outcome is Outcome.COMPLETED:
        console.print("[bold green]🎉 Exercise complete![/bold green]")
    elif result.outcome is Outcome.INCOMPLETE:
        console.print("[yellow]⏸ Exercise left incomplete.[/yellow]")
    else:
        console.print(f"[red]Exercise failed:[/red] {result.reason}")
        raise typer.Exit(1)


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
