"""
Run configuration for branch-recreate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_BASE = "master"
DEFAULT_REMOTE = "origin"
DEFAULT_BACKUP_PREFIX = "BRANCH-PER-FEATURE-PREFIX"

PREFIX_ENVVAR = "BRANCH_RECREATE_PREFIX"
REPO_ENVVAR = "BRANCH_RECREATE_REPO"


def backup_name_for(source: str, prefix: str = DEFAULT_BACKUP_PREFIX) -> str:
    """Return the name the source branch is moved to while it is rebuilt."""
    return f"{prefix}-{source}"


@dataclass
class RecreateConfig:
    """Options for a single recreate run."""

    source: str
    base: str = DEFAULT_BASE
    remote: str = DEFAULT_REMOTE
    branch: Optional[str] = None
    exclude: Tuple[str, ...] = ()
    backup_prefix: str = DEFAULT_BACKUP_PREFIX

    def __post_init__(self) -> None:
        if not self.source:
            raise ValueError("A source branch name is required.")
        if not self.backup_prefix:
            raise ValueError("The backup prefix must not be empty.")
        self.exclude = tuple(self.exclude)

    @property
    def target(self) -> str:
        """Return the branch being created: the new name if given, else the source."""
        return self.branch or self.source

    @property
    def in_place(self) -> bool:
        """Return True if the source branch is being replaced under its own name."""
        return self.target == self.source

    @property
    def backup_name(self) -> str:
        return backup_name_for(self.source, self.backup_prefix)

    @property
    def remote_base(self) -> str:
        return f"{self.remote}/{self.base}"
