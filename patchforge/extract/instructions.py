# patchforge/extract/instructions.py
from __future__ import annotations

import re
import textwrap
from typing import Iterator, List, Optional, Tuple

from ..models.edits import EditInstruction
from ..utils.text import cleanup_llm_output

__all__ = ["parse_edit_instructions", "iter_fenced_blocks"]

# An opener starts its line, or follows an OLD:/NEW: label on the same line
# ("OLD: ```html"): 3+ backticks or tildes plus an optional info string.
_OPENER_RE = re.compile(
    r"(?mi)^(?:[ \t]*|[^\n]*?(?<!\w)(?:OLD|NEW)[ \t]*:[*_ \t]*)"
    r"(?P<fence>(?P<ch>`|~)(?P=ch){2,})(?P<info>[^\n\r]*)$"
)

# The label must be the last thing before the fence; tolerate markdown emphasis
# around it ("**OLD:**", "### NEW:").
_LABEL_RE = re.compile(r"(?i)(?<![\w])(?P<label>OLD|NEW)[ \t]*:[*_ \t]*\s*\Z")


def iter_fenced_blocks(text: str) -> Iterator[Tuple[int, int, str]]:
    """
    Yield (opener_start, closer_end, body) for every top-level fenced block.

    A block is closed by a line holding only a fence of the same character
    that is at least as long as the opener. An unclosed opener ends the scan.
    """
    cursor = 0
    while cursor < len(text):
        m = _OPENER_RE.search(text, cursor)
        if not m:
            return
        fence_char = m.group("ch")
        fence_len = len(m.group("fence"))
        closer_re = re.compile(
            rf"(?m)^[ \t]*{re.escape(fence_char)}{{{fence_len},}}[ \t]*$"
        )

        body_start = m.end()
        if text.startswith("\n", body_start):
            body_start += 1

        closer = closer_re.search(text, body_start)
        if not closer:
            return
        yield m.start("fence"), closer.end(), text[body_start:closer.start()]
        cursor = closer.end()


def _clean_old(body: str) -> str:
    # Verbatim apart from the outer edges: exact containment depends on it.
    return body.strip()


def _clean_new(body: str) -> str:
    # Dedent first so the first line keeps its place relative to the rest;
    # the applier re-indents replacements anyway.
    return textwrap.dedent(body).strip()


def parse_edit_instructions(reply: str) -> List[EditInstruction]:
    """
    Extract ordered (old, new) pairs from a collaborator reply.

    The expected shape is any number of repetitions of:

        OLD:
        ```lang
        old text
        ```

        NEW:
        ```lang
        new text
        ```

    The fence may also open on the label line itself (`OLD: ```lang`).
    Only fenced blocks immediately preceded by an `OLD:` or `NEW:` label take
    part. The old text is kept verbatim inside its trimmed edges; the new
    text has its common indentation removed. An `OLD:` block is paired with the next `NEW:` block; an `OLD:`
    followed by another `OLD:` is dropped, as is a `NEW:` with no pending
    `OLD:`. Malformed replies simply yield fewer (or no) instructions.
    """
    text = cleanup_llm_output(reply).replace("\r\n", "\n")
    edits: List[EditInstruction] = []
    pending_old: Optional[str] = None
    prev_end = 0

    for start, end, body in iter_fenced_blocks(text):
        label_match = _LABEL_RE.search(text, prev_end, start)
        prev_end = end
        if not label_match:
            continue

        label = label_match.group("label").upper()
        if label == "OLD":
            pending_old = _clean_old(body)
        elif pending_old is not None:
            # An empty OLD would match anywhere.
            if pending_old:
                edits.append(EditInstruction(old=pending_old, new=_clean_new(body)))
            pending_old = None

    return edits
