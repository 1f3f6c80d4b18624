from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from .base import PatchForgeError

if TYPE_CHECKING:
    from ..models.edits import EditInstruction


class CollaboratorError(PatchForgeError):
    """
    The text-generation collaborator failed during a correction round.

    Carries the state at the moment of failure so callers can still report
    partial progress: `pending` holds the edits that were unresolved when the
    round was aborted and `modified_paths` the documents already written.
    """

    def __init__(
        self,
        message: str,
        *,
        pending: Optional[List["EditInstruction"]] = None,
        modified_paths: Optional[List[str]] = None,
        rounds: int = 0,
    ) -> None:
        super().__init__(message)
        self.pending = list(pending or [])
        self.modified_paths = list(modified_paths or [])
        self.rounds = rounds
