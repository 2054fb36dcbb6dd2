"""
branch-recreate: Rebuild a long-lived branch from a fresh base.

Replays, in order, the merges that were folded into a branch since it left its
base, reusing conflict resolutions recorded by git rerere.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from branch_recreate.backend import GitBackend
from branch_recreate.backup import BackupManager, BackupState
from branch_recreate.config import RecreateConfig
from branch_recreate.errors import GitError, PreconditionError, RecreateError
from branch_recreate.graph import discover_merges
from branch_recreate.models import (
    Commit,
    MergeOutcome,
    MergeRecord,
    RecreateResult,
    RecreateStatus,
    ReplayPlan,
    ReplayResult,
)
from branch_recreate.plan import build_plan, strip_remote
from branch_recreate.recreate import BranchRecreator
from branch_recreate.replay import ReplayExecutor

__all__ = [
    "__version__",
    "BackupManager",
    "BackupState",
    "BranchRecreator",
    "Commit",
    "GitBackend",
    "GitError",
    "MergeOutcome",
    "MergeRecord",
    "PreconditionError",
    "RecreateConfig",
    "RecreateError",
    "RecreateResult",
    "RecreateStatus",
    "ReplayExecutor",
    "ReplayPlan",
    "ReplayResult",
    "build_plan",
    "discover_merges",
    "strip_remote",
]
