from .apply import apply_edit, apply_edits, apply_edits_to_store, capture_indent, patch_text, reindent
from .core import apply_reply, edit_project
from .errors import (
    CollaboratorError,
    PatchFailedError,
    PatchForgeError,
    PathViolation,
    StoreError,
)
from .extract import parse_edit_instructions
from .match import MatchSettings, find_match, split_paragraphs
from .models import ApplyResult, Document, EditInstruction, MatchResult, MatchStrategy, PatchOutcome
from .prompts import ConversationHistory, build_correction_prompt, build_patch_edit_prompt, gather_project_info
from .retry import MAX_RETRY_ROUNDS, RetryOutcome, retry_pending_edits
from .store import ProjectStore
from .utils.text import cleanup_llm_output

__all__ = [
    "edit_project",
    "apply_reply",
    "parse_edit_instructions",
    "split_paragraphs",
    "find_match",
    "MatchSettings",
    "apply_edit",
    "apply_edits",
    "apply_edits_to_store",
    "patch_text",
    "capture_indent",
    "reindent",
    "retry_pending_edits",
    "RetryOutcome",
    "MAX_RETRY_ROUNDS",
    "ProjectStore",
    "ConversationHistory",
    "gather_project_info",
    "build_patch_edit_prompt",
    "build_correction_prompt",
    "cleanup_llm_output",
    "EditInstruction",
    "Document",
    "ApplyResult",
    "PatchOutcome",
    "MatchResult",
    "MatchStrategy",
    "PatchForgeError",
    "PatchFailedError",
    "CollaboratorError",
    "StoreError",
    "PathViolation",
]
