"""
Click CLI entry point for branch-recreate.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from branch_recreate import __version__
from branch_recreate.backend import GitBackend
from branch_recreate.config import (
    DEFAULT_BACKUP_PREFIX,
    DEFAULT_BASE,
    DEFAULT_REMOTE,
    PREFIX_ENVVAR,
    REPO_ENVVAR,
    RecreateConfig,
)
from branch_recreate.display import render_plan, render_result
from branch_recreate.errors import RecreateError
from branch_recreate.models import RecreateStatus
from branch_recreate.recreate import BranchRecreator

console = Console()

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_backend(repo: Optional[Path]) -> GitBackend:
    return GitBackend(repo_path=repo)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _confirm(message: str) -> bool:
    return click.confirm(message, default=False)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(__version__, prog_name="branch-recreate")
@click.option("-v", "--verbose", is_flag=True, help="Log every git command that is run.")
def main(verbose: bool) -> None:
    """branch-recreate — Rebuild a branch by replaying its merges onto a fresh base.

    Branches that collect feature branches over time can be recreated from the
    latest upstream base, reusing conflict resolutions recorded by git rerere.
    """
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# recreate
# ---------------------------------------------------------------------------


@main.command("recreate")
@click.argument("source")
@click.option(
    "-a",
    "--ancestor",
    "base",
    default=DEFAULT_BASE,
    show_default=True,
    help="The name of the ancestor from which the source branch is based.",
)
@click.option(
    "-b",
    "--branch",
    default=None,
    help=(
        "Leave the source branch alone and create a new branch called NAME instead. "
        "If a merge stops, the printed recovery command checks out the backup, deletes NAME "
        "and renames the backup to the source name."
    ),
)
@click.option(
    "-r",
    "--remote",
    default=DEFAULT_REMOTE,
    show_default=True,
    help="The remote to read the ancestor from and to push to.",
)
@click.option("-x", "--exclude", multiple=True, help="A branch to leave out of the replay (repeatable).")
@click.option(
    "-C",
    "--repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    envvar=REPO_ENVVAR,
    help="Path to the repository (default: current directory).",
)
@click.option(
    "--prefix",
    "backup_prefix",
    default=DEFAULT_BACKUP_PREFIX,
    show_default=True,
    envvar=PREFIX_ENVVAR,
    help="Prefix of the backup branch kept while recreating.",
)
@click.option("--dry-run", is_flag=True, help="Show the branches that would be merged and stop.")
@click.option(
    "--format",
    "fmt",
    default="table",
    type=click.Choice(["table", "json"]),
    show_default=True,
    help="Output format for --dry-run.",
)
def cmd_recreate(
    source: str,
    base: str,
    branch: Optional[str],
    remote: str,
    exclude: Tuple[str, ...],
    repo: Optional[Path],
    backup_prefix: str,
    dry_run: bool,
    fmt: str,
) -> None:
    """Recreate SOURCE in place, or as a new branch, by re-merging its merge commits.

    SOURCE is the existing branch to rebuild from the remote version of the ancestor.
    """
    config = RecreateConfig(
        source=source,
        base=base,
        remote=remote,
        branch=branch,
        exclude=exclude,
        backup_prefix=backup_prefix,
    )
    recreator = BranchRecreator(_get_backend(repo), config, confirm=_confirm, console=console)

    try:
        if dry_run:
            plan = recreator.preview()
            if fmt == "json":
                click.echo(json.dumps(plan.to_dict(), indent=2))
            else:
                console.print(render_plan(plan, config.target))
            return

        result = recreator.run()
    except RecreateError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1)

    if result.status is not RecreateStatus.COMPLETED:
        raise SystemExit(1)

    console.print(render_result(result, config.target))


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@main.command("version")
def cmd_version() -> None:
    """Show the branch-recreate version."""
    console.print(
        Panel(
            f"[bold cyan]branch-recreate[/bold cyan] v[bold]{__version__}[/bold]",
            border_style="blue",
        )
    )
