from .edits import ApplyResult, Document, EditInstruction, PatchOutcome
from .match import MatchResult, MatchStrategy

__all__ = [
    "ApplyResult",
    "Document",
    "EditInstruction",
    "PatchOutcome",
    "MatchResult",
    "MatchStrategy",
]
