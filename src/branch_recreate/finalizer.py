"""
Finalization of a successful recreate run.
"""

from __future__ import annotations

from typing import Callable

from branch_recreate.backup import BackupManager


def finalize(
    backup: BackupManager,
    backend,
    target: str,
    remote: str,
    confirm_push: Callable[[str], bool],
) -> bool:
    """
    Dispose of the backup branch and optionally force-push target to remote.

    Returns True if the branch was pushed.
    """
    backup.consume(target)

    if not confirm_push(
        f"Branch {target} has been (re)created, would you like to force-push it to {remote}?"
    ):
        return False

    backend.push(remote, target, force=True)
    return True
