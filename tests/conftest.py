"""
Shared pytest fixtures for branch-recreate tests.
"""

from __future__ import annotations

from io import StringIO
from typing import Dict, List, Optional, Tuple

import pytest
from rich.console import Console

from branch_recreate.backend import GitBackend
from branch_recreate.errors import GitError


class FakeBackend:
    """In-memory commit graph exposing the backend interface."""

    def __init__(self) -> None:
        self.commits: Dict[str, Tuple[str, ...]] = {}
        self.order: List[str] = []
        self.branches: Dict[str, str] = {}
        self.remote_branches: Dict[str, Dict[str, str]] = {}
        self.names: Dict[str, str] = {}
        self.head: Optional[str] = None
        # branch -> outstanding conflicts reported after merging it; an empty
        # list means rerere resolved everything.
        self.conflicts: Dict[str, List[str]] = {}
        self.calls: List[tuple] = []
        self.pushed: List[tuple] = []
        self._pending: Optional[str] = None
        self._merge_count = 0

    # -- graph construction ------------------------------------------------

    def add_commit(self, commit_id: str, *parents: str, name: Optional[str] = None) -> str:
        self.commits[commit_id] = tuple(parents)
        self.order.append(commit_id)
        if name is not None:
            self.names[commit_id] = name
        return commit_id

    def resolve_ref(self, ref: str) -> str:
        if ref in self.branches:
            return self.branches[ref]
        if "/" in ref:
            remote, _, name = ref.partition("/")
            if name in self.remote_branches.get(remote, {}):
                return self.remote_branches[remote][name]
        if ref in self.commits:
            return ref
        raise GitError(["rev-parse", ref], 128, f"unknown revision {ref}")

    def ancestors(self, commit_id: str) -> set:
        seen = set()
        stack = [commit_id]
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(self.commits[current])
        return seen

    def parents_of_branch(self, branch: str) -> Tuple[str, ...]:
        return self.commits[self.branches[branch]]

    # -- backend interface -------------------------------------------------

    def branch_exists(self, name: str, remote: Optional[str] = None) -> bool:
        if remote:
            return name in self.remote_branches.get(remote, {})
        return name in self.branches

    def rename_branch(self, old: str, new: str) -> None:
        self.calls.append(("rename", old, new))
        if new in self.branches:
            raise GitError(["branch", "-m", old, new], 128, f"branch {new} already exists")
        self.branches[new] = self.branches.pop(old)
        if self.head == old:
            self.head = new

    def delete_branch(self, name: str, force: bool = False) -> None:
        self.calls.append(("delete", name))
        if self.head == name:
            raise GitError(["branch", "-D", name], 1, "cannot delete the checked out branch")
        del self.branches[name]

    def create_branch(self, name: str, from_ref: str, checkout: bool = True) -> None:
        self.calls.append(("create", name, from_ref))
        if name in self.branches:
            raise GitError(["checkout", "-b", name], 128, f"branch {name} already exists")
        self.branches[name] = self.resolve_ref(from_ref)
        if checkout:
            self.head = name

    def list_merge_commits(self, range_expr: str) -> List[Tuple[str, List[str]]]:
        base, source = range_expr.split("...")
        left = self.ancestors(self.resolve_ref(base))
        right = self.ancestors(self.resolve_ref(source))
        selected = left ^ right
        return [
            (cid, list(self.commits[cid]))
            for cid in self.order
            if cid in selected and len(self.commits[cid]) >= 2
        ]

    def resolve_name(self, commit_id: str) -> str:
        return self.names.get(commit_id, commit_id)

    def merge(self, branch: str, no_ff: bool = True, no_edit: bool = True) -> bool:
        self.calls.append(("merge", branch))
        if branch in self.conflicts:
            self._pending = branch
            return False
        self._record_merge(branch)
        return True

    def commit(self, all: bool = True, no_edit: bool = True) -> None:
        self.calls.append(("commit",))
        self._record_merge(self._pending)
        self._pending = None

    def resolution_cache_status(self) -> List[str]:
        if self._pending is None:
            return []
        return list(self.conflicts[self._pending])

    def list_remotes(self) -> List[str]:
        return list(self.remote_branches)

    def push(self, remote: str, branch: str, force: bool = True) -> None:
        self.pushed.append((remote, branch, force))

    def recovery_command(self, target: str, source: str, backup: str) -> str:
        return GitBackend().recovery_command(target, source, backup)

    def _record_merge(self, branch: str) -> None:
        self._merge_count += 1
        commit_id = f"replayed-{self._merge_count}"
        self.add_commit(commit_id, self.branches[self.head], self.resolve_ref(branch))
        self.branches[self.head] = commit_id


class Answers:
    """Scripted replies for confirmation prompts."""

    def __init__(self, *replies: bool) -> None:
        self.replies = list(replies)
        self.prompts: List[str] = []

    def __call__(self, message: str) -> bool:
        self.prompts.append(message)
        return self.replies.pop(0) if self.replies else False


@pytest.fixture
def backend() -> FakeBackend:
    """
    Return a graph where feature-integration merged featA then featB onto master.

    m0 is master, a1 is featA, b1 is featB; M1 merges a1 onto m0 and M2
    merges b1 onto M1. origin/master also points at m0.
    """
    fake = FakeBackend()
    fake.add_commit("m0", name="master")
    fake.add_commit("a1", "m0", name="featA")
    fake.add_commit("b1", "m0", name="featB")
    fake.add_commit("M1", "m0", "a1", name="feature-integration~1")
    fake.add_commit("M2", "M1", "b1", name="feature-integration")
    fake.branches.update(
        {"master": "m0", "featA": "a1", "featB": "b1", "feature-integration": "M2"}
    )
    fake.remote_branches["origin"] = {"master": "m0"}
    fake.head = "feature-integration"
    return fake


@pytest.fixture
def console_buffer() -> Tuple[Console, StringIO]:
    """Return (console, buffer) capturing everything printed."""
    buf = StringIO()
    con = Console(file=buf, width=120, highlight=False, markup=True)
    return con, buf
