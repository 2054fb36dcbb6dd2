"""
Branch recreation orchestrator.

Rebuilds a branch from a fresh base by replaying, in order, the merges that
were folded into it. The run must be the only writer to the repository.
"""

from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console

from branch_recreate.backup import BackupManager
from branch_recreate.config import RecreateConfig
from branch_recreate.display import render_plan
from branch_recreate.errors import SourceNotFoundError, TargetExistsError
from branch_recreate.finalizer import finalize
from branch_recreate.graph import discover_merges
from branch_recreate.models import RecreateResult, RecreateStatus, ReplayPlan
from branch_recreate.plan import build_plan
from branch_recreate.replay import ReplayExecutor


class BranchRecreator:
    """Drives one recreate run against a backend."""

    def __init__(
        self,
        backend,
        config: RecreateConfig,
        confirm: Callable[[str], bool],
        console: Optional[Console] = None,
    ) -> None:
        self.backend = backend
        self.config = config
        self.confirm = confirm
        self._console = console or Console()

    def check_preconditions(self) -> None:
        """Raise if the source is missing or a distinct target already exists."""
        cfg = self.config
        if not self.backend.branch_exists(cfg.source):
            raise SourceNotFoundError(cfg.source)
        if not cfg.in_place and self.backend.branch_exists(cfg.target):
            raise TargetExistsError(cfg.target)

    def _remotes(self) -> tuple:
        """Return the chosen remote followed by every other configured remote."""
        return tuple(dict.fromkeys([self.config.remote] + list(self.backend.list_remotes())))

    def preview(self) -> ReplayPlan:
        """Return the replay plan without changing the repository."""
        self.check_preconditions()
        cfg = self.config
        records = discover_merges(self.backend, cfg.base, cfg.source)
        return build_plan(records, cfg.exclude, remotes=self._remotes())

    def run(self) -> RecreateResult:
        """
        Recreate the branch.

        Raises a PreconditionError for any failed safety check. A conflict
        with no recorded resolution returns a CONFLICT result and leaves the
        backup branch in place for manual recovery.
        """
        cfg = self.config
        self.check_preconditions()

        self._console.print(f"[bold]1.[/bold] Processing branch '{cfg.source}' for merge-commits...")
        records = discover_merges(self.backend, cfg.base, cfg.source)
        plan = build_plan(records, cfg.exclude, remotes=self._remotes())

        self._console.print(render_plan(plan, cfg.target))
        if not self.confirm(f"Proceed with {cfg.source} branch recreation?"):
            self._console.print("[yellow]Aborting.[/yellow]")
            return RecreateResult(status=RecreateStatus.ABORTED, plan=plan)

        backup = BackupManager(self.backend, cfg.source, prefix=cfg.backup_prefix)
        self._console.print(f"[bold]2.[/bold] Creating backup of {cfg.source}, {backup.backup_name}...")
        backup.back_up()

        self._console.print(f"[bold]3.[/bold] Creating new '{cfg.target}' branch based on '{cfg.remote_base}'...")
        backup.checkout_base(cfg.target, cfg.remote, cfg.base)

        self._console.print("[bold]4.[/bold] Merging in feature branches...")
        executor = ReplayExecutor(self.backend, console=self._console)
        replay = executor.replay(plan, cfg.target, cfg.source, backup.backup_name)
        if not replay.succeeded:
            return RecreateResult(status=RecreateStatus.CONFLICT, plan=plan, replay=replay)

        self._console.print(f"[bold]5.[/bold] Cleaning up temporary branches ({backup.backup_name}).")
        pushed = finalize(backup, self.backend, cfg.target, cfg.remote, self.confirm)

        return RecreateResult(status=RecreateStatus.COMPLETED, plan=plan, replay=replay, pushed=pushed)
