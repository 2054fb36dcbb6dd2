"""
Git backend for branch-recreate.

All version-control access goes through a backend object. GitBackend shells out
to the git executable; tests substitute an in-memory commit graph exposing the
same methods.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from branch_recreate.errors import GitError

logger = logging.getLogger(__name__)

_UNDEFINED_NAME = "undefined"


class GitBackend:
    """Runs git commands against a single working repository."""

    def __init__(self, repo_path: Optional[Path] = None, git: str = "git") -> None:
        self.repo_path = Path(repo_path) if repo_path is not None else None
        self.git = git

    # ------------------------------------------------------------------
    # Branch namespace
    # ------------------------------------------------------------------

    def branch_exists(self, name: str, remote: Optional[str] = None) -> bool:
        """Return True if the local branch (or remote-tracking branch) exists."""
        ref = f"refs/remotes/{remote}/{name}" if remote else f"refs/heads/{name}"
        result = self._run(["show-ref", "--verify", "--quiet", ref], check=False)
        return result.returncode == 0

    def rename_branch(self, old: str, new: str) -> None:
        self._run(["branch", "-m", old, new])

    def delete_branch(self, name: str, force: bool = False) -> None:
        self._run(["branch", "-D" if force else "-d", name])

    def create_branch(self, name: str, from_ref: str, checkout: bool = True) -> None:
        if checkout:
            self._run(["checkout", "--quiet", "-b", name, from_ref])
        else:
            self._run(["branch", name, from_ref])

    # ------------------------------------------------------------------
    # Commit graph
    # ------------------------------------------------------------------

    def list_merge_commits(self, range_expr: str) -> List[Tuple[str, List[str]]]:
        """Return (commit, parents) for every merge in range_expr, oldest first."""
        output = self._run(["rev-list", "--parents", "--merges", "--reverse", range_expr]).stdout
        merges = []
        for line in output.splitlines():
            ids = line.split()
            if not ids:
                continue
            merges.append((ids[0], ids[1:]))
        return merges

    def resolve_name(self, commit_id: str) -> str:
        """Return a symbolic name for commit_id, or the id itself if git has none."""
        name = self._run(["name-rev", "--name-only", commit_id]).stdout.strip()
        if not name or name == _UNDEFINED_NAME:
            return commit_id
        return name

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def merge(self, branch: str, no_ff: bool = True, no_edit: bool = True) -> bool:
        """
        Merge branch into the current branch.

        Returns True for a clean merge and False when git stopped on a conflict.
        Any other failure raises GitError.
        """
        args = ["merge", "--quiet"]
        if no_ff:
            args.append("--no-ff")
        if no_edit:
            args.append("--no-edit")
        args.append(branch)

        result = self._run(args, check=False)
        if result.returncode == 0:
            return True
        if self._merge_in_progress():
            logger.debug("merge of %s stopped on a conflict", branch)
            return False
        raise GitError(args, result.returncode, result.stderr)

    def commit(self, all: bool = True, no_edit: bool = True) -> None:
        args = ["commit", "--quiet"]
        if all:
            args.append("-a")
        if no_edit:
            args.append("--no-edit")
        self._run(args)

    def resolution_cache_status(self) -> List[str]:
        """
        Return the conflicts the rerere cache could not resolve.

        Without rerere enabled nothing can have been auto-resolved, so every
        unmerged path counts as outstanding.
        """
        if self._rerere_enabled():
            output = self._run(["rerere", "status"]).stdout
        else:
            output = self._run(["diff", "--name-only", "--diff-filter=U"]).stdout
        return [line for line in output.splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # Remotes
    # ------------------------------------------------------------------

    def list_remotes(self) -> List[str]:
        """Return the names of the configured remotes."""
        return [line.strip() for line in self._run(["remote"]).stdout.splitlines() if line.strip()]

    def push(self, remote: str, branch: str, force: bool = True) -> None:
        args = ["push"]
        if force:
            args.append("--force")
        args += [remote, branch]
        self._run(args)

    def recovery_command(self, target: str, source: str, backup: str) -> str:
        """Return the shell command that puts the repository back as it was."""
        if target == source:
            return f"git reset --hard {shlex.quote(backup)} && git branch -D {shlex.quote(backup)}"
        return (
            f"git checkout --force {shlex.quote(backup)} && git branch -D {shlex.quote(target)}"
            f" && git branch -m {shlex.quote(backup)} {shlex.quote(source)}"
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _merge_in_progress(self) -> bool:
        result = self._run(["rev-parse", "-q", "--verify", "MERGE_HEAD"], check=False)
        return result.returncode == 0

    def _rerere_enabled(self) -> bool:
        value = self._run(["config", "--bool", "rerere.enabled"], check=False).stdout.strip()
        if value:
            return value == "true"
        # git turns rerere on implicitly once an rr-cache directory exists.
        rr_cache = self._run(["rev-parse", "--git-path", "rr-cache"]).stdout.strip()
        base = self.repo_path if self.repo_path is not None else Path.cwd()
        return (base / rr_cache).is_dir()

    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        logger.debug("git %s", " ".join(args))
        result = subprocess.run(
            [self.git] + args,
            cwd=str(self.repo_path) if self.repo_path is not None else None,
            capture_output=True,
            text=True,
        )
        if check and result.returncode != 0:
            raise GitError(args, result.returncode, result.stderr)
        return result
