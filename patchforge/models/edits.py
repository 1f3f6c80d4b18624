from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class EditInstruction:
    """One (old, new) replacement proposed by the collaborator."""

    old: str
    new: str
    applied: bool = False

    def to_dict(self) -> Dict[str, str]:
        return {"old": self.old, "new": self.new}


@dataclass
class Document:
    """Snapshot of a project document: a store-relative path and its text."""

    path: str
    content: str


@dataclass
class ApplyResult:
    """Outcome of one application pass over a set of documents."""

    # path -> content after the pass (unchanged documents included)
    documents: Dict[str, str] = field(default_factory=dict)
    modified_paths: List[str] = field(default_factory=list)
    pending: List[EditInstruction] = field(default_factory=list)


@dataclass
class PatchOutcome:
    """Caller-facing result of an edit request."""

    modified_paths: List[str] = field(default_factory=list)
    pending_edits: List[EditInstruction] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.pending_edits

    def to_dict(self) -> Dict[str, object]:
        return {
            "modifiedPaths": list(self.modified_paths),
            "pendingEdits": [e.to_dict() for e in self.pending_edits],
        }
