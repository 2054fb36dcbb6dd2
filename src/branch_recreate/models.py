"""
Data model for branch-recreate.

Commits and merge records are read-only views over the backend's commit graph;
plans and results are transient and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


@dataclass(frozen=True)
class Commit:
    """An immutable node in the commit graph."""

    id: str
    parents: tuple = ()

    @property
    def is_merge(self) -> bool:
        """Return True if the commit has two or more parents."""
        return len(self.parents) >= 2

    @property
    def mainline(self) -> Optional[str]:
        """Return the first parent, i.e. the branch the merge was made on."""
        return self.parents[0] if self.parents else None

    @property
    def merged_parents(self) -> tuple:
        """Return every parent other than the mainline."""
        return tuple(self.parents[1:])

    def __repr__(self) -> str:
        return f"Commit({self.id[:8]}, parents={len(self.parents)})"


@dataclass
class MergeRecord:
    """A merge commit together with the branch names it folded in."""

    commit: Commit
    branches: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "commit": self.commit.id,
            "parents": list(self.commit.parents),
            "branches": list(self.branches),
        }


@dataclass
class ReplayPlan:
    """Ordered branch names to merge into the recreated branch."""

    branches: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)

    def __iter__(self) -> Iterator[str]:
        return iter(self.branches)

    def __len__(self) -> int:
        return len(self.branches)

    @property
    def is_empty(self) -> bool:
        return not self.branches

    def to_dict(self) -> dict:
        return {"branches": list(self.branches), "excluded": list(self.excluded)}


class MergeOutcome(Enum):
    """What happened when a single planned branch was merged."""

    CLEAN = "clean"
    RESOLVED_BY_CACHE = "resolved-by-cache"
    UNRESOLVED_CONFLICT = "unresolved-conflict"


@dataclass
class ReplayResult:
    """Outcome of replaying a plan onto the target branch."""

    merged: List[str] = field(default_factory=list)
    outcomes: List[MergeOutcome] = field(default_factory=list)
    conflict_branch: Optional[str] = None
    recovery_command: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """Return True if every planned branch was merged."""
        return self.conflict_branch is None


class RecreateStatus(Enum):
    ABORTED = "aborted"
    CONFLICT = "conflict"
    COMPLETED = "completed"


@dataclass
class RecreateResult:
    """Final outcome of a recreate run."""

    status: RecreateStatus
    plan: ReplayPlan
    replay: Optional[ReplayResult] = None
    pushed: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is RecreateStatus.COMPLETED
