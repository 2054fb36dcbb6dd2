"""
Backup and restore of the source branch while it is being recreated.

The source branch moves through ORIGINAL -> BACKED_UP -> (RESTORED | CONSUMED).
The backup is only ever deleted once the replay has fully succeeded.
"""

from __future__ import annotations

import logging
from enum import Enum

from branch_recreate.config import DEFAULT_BACKUP_PREFIX, backup_name_for
from branch_recreate.errors import BackupExistsError, BaseNotFoundError, GitError, InvalidTransitionError

logger = logging.getLogger(__name__)


class BackupState(Enum):
    ORIGINAL = "original"
    BACKED_UP = "backed-up"
    RESTORED = "restored"
    CONSUMED = "consumed"


class BackupManager:
    """Owns the backup branch for one source branch."""

    def __init__(self, backend, source: str, prefix: str = DEFAULT_BACKUP_PREFIX) -> None:
        self.backend = backend
        self.source = source
        self.prefix = prefix
        self.state = BackupState.ORIGINAL
        self.target_created = False

    @property
    def backup_name(self) -> str:
        return backup_name_for(self.source, self.prefix)

    def back_up(self) -> str:
        """Rename the source branch to its backup name and return that name."""
        self._require(BackupState.ORIGINAL, "back up")
        if self.backend.branch_exists(self.backup_name):
            raise BackupExistsError(self.backup_name)

        self.backend.rename_branch(self.source, self.backup_name)
        self.state = BackupState.BACKED_UP
        logger.debug("moved %s to %s", self.source, self.backup_name)
        return self.backup_name

    def checkout_base(self, target: str, remote: str, base: str) -> None:
        """
        Create and check out target from remote/base.

        If remote/base does not exist the source branch is restored and
        BaseNotFoundError is raised. If git refuses to create the branch the
        source is restored before the GitError propagates.
        """
        self._require(BackupState.BACKED_UP, "create the target branch")
        if self.target_created:
            raise InvalidTransitionError("create the target branch twice", self.state)

        if not self.backend.branch_exists(base, remote):
            self.restore()
            raise BaseNotFoundError(base, remote, restored=self.source)

        try:
            self.backend.create_branch(target, f"{remote}/{base}", checkout=True)
        except GitError:
            self.restore()
            raise
        self.target_created = True

    def restore(self) -> None:
        """Rename the backup back to the source name."""
        self._require(BackupState.BACKED_UP, "restore")
        if self.target_created:
            # The target is checked out over the original history and must be
            # unwound by hand with the recovery command.
            raise InvalidTransitionError("restore after the target branch was created", self.state)

        self.backend.rename_branch(self.backup_name, self.source)
        self.state = BackupState.RESTORED
        logger.debug("restored %s from %s", self.source, self.backup_name)

    def consume(self, target: str) -> None:
        """
        Dispose of the backup after a successful replay.

        Replacing in place deletes the backup; a differently named target leaves
        the old history under the original source name.
        """
        self._require(BackupState.BACKED_UP, "consume the backup")
        if not self.target_created:
            raise InvalidTransitionError("consume the backup before the target branch exists", self.state)

        if target == self.source:
            self.backend.delete_branch(self.backup_name, force=True)
        else:
            self.backend.rename_branch(self.backup_name, self.source)
        self.state = BackupState.CONSUMED

    def _require(self, expected: BackupState, action: str) -> None:
        if self.state is not expected:
            raise InvalidTransitionError(action, self.state)
