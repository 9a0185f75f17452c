"""Rich components for the CLI.

Kept apart from the commands so tables and panels can be reused by every
pipeline command.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from athame.core.domain.models import PhaseResult, PipelineReport, TaskOutcome
from athame.core.domain.phase import Phase


def print_banner(console: Console) -> None:
    title = Text("athame", style="bold cyan")
    subtitle = Text("Containerized CI/CD pipelines", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _status(ok: bool) -> Text:
    return Text("ok", style="green") if ok else Text("failed", style="bold red")


def build_tasks_table(outcomes: Iterable[TaskOutcome], *, title: str = "Tasks") -> Table:
    """One row per task: name, status, duration."""

    table = Table(title=title)
    table.add_column("Task", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Duration", justify="right", style="dim")
    for outcome in outcomes:
        table.add_row(outcome.name, _status(outcome.ok), f"{outcome.duration_seconds:.1f}s")
    return table


def build_report_table(report: PipelineReport) -> Table:
    table = Table(title=f"{report.pipeline} phases")
    table.add_column("Phase", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Tasks", justify="right")
    table.add_column("Duration", justify="right", style="dim")
    table.add_column("Error", style="red")
    for phase in report.phases:
        table.add_row(
            phase.phase,
            _status(phase.ok),
            str(len(phase.tasks)),
            f"{phase.duration_seconds:.1f}s",
            phase.error or "",
        )
    return table


def print_report(console: Console, report: PipelineReport) -> None:
    console.print(build_report_table(report))
    for phase in report.phases:
        if phase.tasks:
            console.print(build_tasks_table(phase.tasks, title=f"{phase.phase} tasks"))
    if report.address:
        console.print(f"[bold]Image:[/bold] {report.address}")
    for deployment in report.deployments:
        console.print(f"[bold]{deployment.target}:[/bold] {deployment.url or '-'}")


def phase_started_printer(console: Console):
    def _print(phase: Phase) -> None:
        console.print(f"[cyan]>[/cyan] {phase.label()}...")

    return _print


def phase_finished_printer(console: Console):
    def _print(result: PhaseResult) -> None:
        mark = "[green]done[/green]" if result.ok else "[red]failed[/red]"
        console.print(f"  {result.phase}: {mark} ({result.duration_seconds:.1f}s)")

    return _print
