"""
Replay executor for branch-recreate.

Merges each planned branch into the freshly created target branch, committing
resolutions recorded by rerere and stopping at the first conflict it cannot
resolve.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console

from branch_recreate.display import outcome_label, print_recovery
from branch_recreate.errors import GitError
from branch_recreate.models import MergeOutcome, ReplayPlan, ReplayResult


class ReplayExecutor:
    """Replays a plan onto the checked-out target branch."""

    def __init__(self, backend, console: Optional[Console] = None) -> None:
        self.backend = backend
        self._console = console or Console()

    def merge_one(self, branch: str) -> MergeOutcome:
        """Merge a single branch and classify the result."""
        if self.backend.merge(branch, no_ff=True, no_edit=True):
            return MergeOutcome.CLEAN

        if self.backend.resolution_cache_status():
            return MergeOutcome.UNRESOLVED_CONFLICT

        # rerere has already staged the recorded resolution.
        self.backend.commit(all=True, no_edit=True)
        return MergeOutcome.RESOLVED_BY_CACHE

    def replay(self, plan: ReplayPlan, target: str, source: str, backup: str) -> ReplayResult:
        """
        Merge every branch in plan, in order, into target.

        Stops at the first unresolved conflict; the returned result then names
        the branch and the command that restores the original state. A GitError
        from any other merge failure is re-raised after the same recovery
        instructions are printed.
        """
        result = ReplayResult()

        for branch in plan:
            self._console.print(f" - Attempting to merge '[bold]{branch}[/bold]'.")
            try:
                outcome = self.merge_one(branch)
            except GitError as exc:
                print_recovery(
                    self._console, branch, self.backend.recovery_command(target, source, backup), error=str(exc)
                )
                raise
            result.outcomes.append(outcome)

            if outcome is MergeOutcome.UNRESOLVED_CONFLICT:
                result.conflict_branch = branch
                result.recovery_command = self.backend.recovery_command(target, source, backup)
                print_recovery(self._console, branch, result.recovery_command)
                break

            result.merged.append(branch)
            self._console.print(f"   {outcome_label(outcome)}")

        return result
