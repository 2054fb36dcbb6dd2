"""
Exception hierarchy for branch-recreate.
"""

from __future__ import annotations

from typing import List, Optional


class RecreateError(Exception):
    """Base class for every error raised by branch-recreate."""


class GitError(RecreateError):
    """A git command exited with an unexpected status."""

    def __init__(self, args: List[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"git {' '.join(self.argv)} failed with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class PreconditionError(RecreateError):
    """A safety check failed before any destructive step was taken."""


class SourceNotFoundError(PreconditionError):
    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Cannot recreate branch {source} as it doesn't exist.")


class TargetExistsError(PreconditionError):
    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"Cannot create branch {target} as it already exists.")


class BackupExistsError(PreconditionError):
    def __init__(self, backup: str) -> None:
        self.backup = backup
        super().__init__(
            f"Cannot create branch {backup} as one already exists. " f"To continue, {backup} must be removed."
        )


class BaseNotFoundError(PreconditionError):
    """The base branch is missing on the remote. The source branch has been restored."""

    def __init__(self, base: str, remote: str, restored: Optional[str] = None) -> None:
        self.base = base
        self.remote = remote
        self.restored = restored
        message = (
            f"Cannot find {remote}/{base}. Branch {base} must exist in the remote repository ({remote})."
        )
        if restored:
            message += f" Branch {restored} has been restored."
        super().__init__(message)


class InvalidTransitionError(RecreateError):
    """The backup state machine was driven out of order."""

    def __init__(self, action: str, state: object) -> None:
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} while backup is in state {state}.")
