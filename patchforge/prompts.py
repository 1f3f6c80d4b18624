# patchforge/prompts.py
"""
Instruction text sent to the collaborator.

Nothing here keeps module-level state: conversation history is a value the
caller owns and passes in for the duration of one request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple

from .models.edits import Document, EditInstruction

__all__ = [
    "ConversationHistory",
    "HistoryEntry",
    "ProjectInfo",
    "gather_project_info",
    "format_edit_pairs",
    "build_patch_edit_prompt",
    "build_correction_prompt",
]

HISTORY_TEXT_LIMIT = 12000

CORRECTION_REQUEST = (
    "The following edits could not be applied. "
    "Provide corrected code blocks so they can be applied."
)


@dataclass
class HistoryEntry:
    user_prompt: str
    full_prompt: str
    reply: str


@dataclass
class ConversationHistory:
    """Prompts and replies exchanged with the collaborator during one session."""

    entries: List[HistoryEntry] = field(default_factory=list)

    def add(self, user_prompt: str, full_prompt: str, reply: str) -> None:
        self.entries.append(HistoryEntry(user_prompt, full_prompt, reply))

    def to_text(self, limit: int = HISTORY_TEXT_LIMIT) -> str:
        """
        Render as a "Previous requests" preamble, dropping the oldest entries
        until the text fits within `limit` characters. The newest entry is
        always kept.
        """
        entries = list(self.entries)
        if not entries:
            return ""
        text = _render_history(entries)
        while len(text) > limit and len(entries) > 1:
            entries.pop(0)
            text = _render_history(entries)
        return text


def _render_history(entries: List[HistoryEntry]) -> str:
    lines = [
        f"{i}. Prompt: {e.full_prompt}\n   Response: {e.reply}"
        for i, e in enumerate(entries, 1)
    ]
    return "Previous requests:\n" + "\n".join(lines) + "\n\n"


class ProjectInfo(NamedTuple):
    layout: str
    code_text: str
    documents: List[Document]


def gather_project_info(documents: Iterable[Document]) -> ProjectInfo:
    """Directory listing and concatenated file contents for the prompt."""
    docs = list(documents)
    layout = "\n".join(f"- {d.path}" for d in docs)
    code_text = "\n\n".join(f"File: {d.path}\n{d.content}" for d in docs)
    return ProjectInfo(layout, code_text, docs)


def format_edit_pairs(edits: Iterable[EditInstruction]) -> str:
    """Render edits in the same OLD:/NEW: fenced shape the parser reads."""
    return "\n\n".join(
        f"OLD:\n```\n{e.old}\n```\nNEW:\n```\n{e.new}\n```" for e in edits
    )


def build_patch_edit_prompt(
    request: str,
    info: ProjectInfo,
    history: ConversationHistory | None = None,
) -> str:
    history_text = history.to_text() if history else ""
    return (
        f"{history_text}Here is the current project directory:\n{info.layout}\n\n"
        f"Current code:\n{info.code_text}\n\n"
        f'Please modify the code according to: "{request}". '
        "Respond only with pairs of code blocks in the following format:\n\n"
        "OLD:\n```<language>\n(old code)\n```\n\n"
        "NEW:\n```<language>\n(new code)\n```\n\n"
        "---"
    )


def build_correction_prompt(
    pending: Iterable[EditInstruction],
    info: ProjectInfo,
    history: ConversationHistory | None = None,
) -> str:
    request = f"{CORRECTION_REQUEST}\n\n{format_edit_pairs(pending)}"
    return build_patch_edit_prompt(request, info, history)
