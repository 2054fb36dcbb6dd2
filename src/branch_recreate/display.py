"""
Rich terminal display utilities for branch-recreate.
"""

from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from branch_recreate.models import MergeOutcome, RecreateResult, ReplayPlan

_OUTCOME_LABELS = {
    MergeOutcome.CLEAN: "[green]merged[/green]",
    MergeOutcome.RESOLVED_BY_CACHE: "[cyan]resolved from rerere[/cyan]",
    MergeOutcome.UNRESOLVED_CONFLICT: "[red]conflict[/red]",
}


def outcome_label(outcome: MergeOutcome) -> str:
    return _OUTCOME_LABELS[outcome]


def render_plan(plan: ReplayPlan, target: str) -> Table:
    """Render the replay plan as a Rich Table."""
    table = Table(
        title=f"[bold]Branches to merge into {target}[/bold]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Branch", style="white")

    for index, branch in enumerate(plan, start=1):
        table.add_row(str(index), branch)

    if plan.is_empty:
        table.add_row("—", "[dim](no merge commits found)[/dim]")

    if plan.excluded:
        table.caption = f"Excluded: {', '.join(plan.excluded)}"

    return table


def print_recovery(out: Console, branch: str, command: str, error: Optional[str] = None) -> None:
    """
    Print how to get back to the original state after the replay stopped.

    Without error the stop was a merge conflict with no recorded resolution;
    otherwise error is the git failure that interrupted the merge.
    """
    if error is None:
        title = "[bold red]Unresolved Conflict[/bold red]"
        body = (
            f"There is a merge conflict with branch [bold]{branch}[/bold] that has no rerere.\n"
            "Record a resolution by resolving the conflict.\n"
        )
    else:
        title = "[bold red]Merge Failed[/bold red]"
        body = f"Merging branch [bold]{branch}[/bold] failed:\n{escape(error)}\n"
    out.print(
        Panel(
            body + "Then run the following command to return your repository to its original state:",
            title=title,
            border_style="red",
        )
    )
    # Never wrapped, so it can be copied as one line.
    out.print(command, style="bold yellow", markup=False, highlight=False, soft_wrap=True)
    out.print(
        "[dim]If you do not want to resolve the conflict, it is safe to just run the above command "
        "to restore your repository to the state it was in before executing this command.[/dim]"
    )


def render_result(result: RecreateResult, target: str) -> Panel:
    """Render a summary panel for a completed run."""
    replay = result.replay
    merged = len(replay.merged) if replay else 0
    cached = sum(1 for o in replay.outcomes if o is MergeOutcome.RESOLVED_BY_CACHE) if replay else 0
    lines = [
        f"[bold cyan]Branch:[/bold cyan]   {target}",
        f"[bold cyan]Merged:[/bold cyan]   {merged} branch(es)",
    ]
    if cached:
        lines.append(f"[bold cyan]Rerere:[/bold cyan]   {cached} conflict(s) resolved from cache")
    if result.plan.excluded:
        lines.append(f"[bold yellow]Excluded:[/bold yellow] {', '.join(result.plan.excluded)}")
    lines.append("[bold green]Pushed[/bold green]" if result.pushed else "[dim]Not pushed[/dim]")
    return Panel("\n".join(lines), title="[bold]Branch Recreated[/bold]", border_style="green")
