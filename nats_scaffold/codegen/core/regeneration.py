"""
Regeneration decisions for generated files.

Generated-only artifacts (service wiring, clients, project files) are owned
by the tool and replaced freely under --force. Handler stubs hold
hand-written code, so a forced run copies the previous file to a ``.bak``
sibling before replacing it. Only one generation of backup is kept.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, List, Optional

from ...logging_config import get_logger
from .errors import AlreadyExistsError
from .output import OutputTree
from .schema import ArtifactKind, GeneratedArtifact

logger = get_logger(__name__)


class Action(Enum):
    """What to do with one target path."""

    CREATE = "create"
    OVERWRITE = "overwrite"
    BACKUP_THEN_OVERWRITE = "backup"
    REJECT = "reject"


def decide(exists: bool, force: bool, human_edited: bool) -> Action:
    """Pick the action for a path from its existence, the force flag, and ownership."""
    if not exists:
        return Action.CREATE
    if not force:
        return Action.REJECT
    if human_edited:
        return Action.BACKUP_THEN_OVERWRITE
    return Action.OVERWRITE


def backup_path(path: str) -> str:
    """Sibling backup path: ``calc_handlers.ts`` -> ``calc_handlers.bak``."""
    return str(PurePosixPath(path).with_suffix(".bak"))


@dataclass(frozen=True)
class PlannedWrite:
    """An artifact together with the action chosen for its path."""

    artifact: GeneratedArtifact
    action: Action

    @property
    def backup_path(self) -> Optional[str]:
        if self.action is Action.BACKUP_THEN_OVERWRITE:
            return backup_path(self.artifact.path)
        return None


class RegenerationManager:
    """Applies the regeneration rules against one output tree."""

    def __init__(self, tree: OutputTree, force: bool = False):
        self.tree = tree
        self.force = force

    def prepare(self, path: str, kind: ArtifactKind) -> Action:
        """Decide the action for a single relative path."""
        action = decide(self.tree.exists(path), self.force, kind.human_edited)
        logger.debug("%s -> %s", path, action.value)
        return action

    def plan(self, artifacts: Iterable[GeneratedArtifact]) -> List[PlannedWrite]:
        """
        Decide an action for every artifact before anything is written.

        Raises:
            AlreadyExistsError: If any path would be clobbered without force.
                Lists every such path.
        """
        planned = [
            PlannedWrite(artifact, self.prepare(artifact.path, artifact.kind))
            for artifact in artifacts
        ]
        rejected = [p.artifact.path for p in planned if p.action is Action.REJECT]
        if rejected:
            raise AlreadyExistsError(
                [str(self.tree.path(path)) for path in rejected]
            )
        return planned

    def backup(self, planned: PlannedWrite) -> Optional[str]:
        """Copy the current file aside if the plan calls for it."""
        target = planned.backup_path
        if target is None:
            return None

        self.tree.copy(planned.artifact.path, target)
        logger.warning(
            "%s was backed up to %s - subsequent runs will destroy the backup!",
            self.tree.path(planned.artifact.path),
            self.tree.path(target),
        )
        return target
