"""
Replay plan construction for branch-recreate.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from branch_recreate.config import DEFAULT_REMOTE
from branch_recreate.models import MergeRecord, ReplayPlan

_REMOTES_PREFIX = re.compile(r"^remotes/[^/]+/(.+)$")
_REV_SUFFIX = re.compile(r"[~^][0-9~^]*$")


def strip_remote(name: str, remotes: Optional[Sequence[str]] = None) -> str:
    """
    Return the bare branch name behind a resolved ref name.

    ``remotes/<remote>/`` is always removed; ``<remote>/`` only for the given
    remote names (default: the default remote), since a local branch may itself
    contain a slash. A trailing ancestry suffix such as ``~2`` or ``^2`` is
    dropped as well.
    """
    if remotes is None:
        remotes = (DEFAULT_REMOTE,)
    match = _REMOTES_PREFIX.match(name)
    if match:
        name = match.group(1)
    else:
        for remote in remotes:
            if name.startswith(f"{remote}/"):
                name = name[len(remote) + 1 :]
                break
    return _REV_SUFFIX.sub("", name)


def build_plan(
    records: Iterable[MergeRecord],
    exclude: Iterable[str] = (),
    remotes: Optional[Sequence[str]] = None,
) -> ReplayPlan:
    """
    Turn merge records into the ordered list of branches to replay.

    Discovery order is preserved. A branch merged twice appears twice.
    Exclusions match regardless of which of remotes qualifies the name.
    """
    excluded_names = set(exclude)
    branches: List[str] = []
    excluded: List[str] = []

    for record in records:
        for name in record.branches:
            if strip_remote(name, remotes) in excluded_names:
                excluded.append(name)
            else:
                branches.append(name)

    return ReplayPlan(branches=branches, excluded=excluded)
