"""
Commit graph reader for branch-recreate.

Walks the merge commits between a base and a source branch and resolves the
branches each merge folded in.
"""

from __future__ import annotations

import logging
from typing import List

from branch_recreate.models import Commit, MergeRecord

logger = logging.getLogger(__name__)


def is_self_reference(name: str, base: str, source: str) -> bool:
    """
    Return True if a resolved parent name points back at base or source.

    A name containing the source branch name is treated as the source itself
    (e.g. ``feature-integration~2``). This is a naming heuristic and can drop a
    differently named branch whose name happens to contain the source name.
    """
    return name == base or source in name


def discover_merges(backend, base: str, source: str) -> List[MergeRecord]:
    """
    Return the merge commits on the base...source path, oldest first.

    Each record lists the names of the non-mainline parents, minus any that
    resolve to base or to the source branch itself. Both refs must already be
    known to exist.
    """
    records: List[MergeRecord] = []
    seen = set()

    for commit_id, parents in backend.list_merge_commits(f"{base}...{source}"):
        if commit_id in seen:
            continue
        seen.add(commit_id)

        commit = Commit(id=commit_id, parents=tuple(parents))
        branches = []
        for parent in commit.merged_parents:
            name = backend.resolve_name(parent)
            if is_self_reference(name, base, source):
                logger.debug("skipping %s (%s) in merge %s", name, parent, commit_id)
                continue
            branches.append(name)
        records.append(MergeRecord(commit=commit, branches=branches))

    return records
