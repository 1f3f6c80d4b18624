# patchforge/match/segment.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

__all__ = ["Segmentation", "split_paragraphs"]

# A newline, any whitespace-only lines, and the newline that ends the gap.
# The capture group keeps separators so the document can be rebuilt exactly.
_BLANK_LINE_RE = re.compile(r"(\n\s*\n)")

# Final newline(s) of the document, with any whitespace-only lines among them.
_TAIL_RE = re.compile(r"\n\s*\Z")


@dataclass
class Segmentation:
    """
    Blank-line delimited blocks of a document plus the separators between them.

    ``separators[i]`` sits between ``blocks[i]`` and ``blocks[i + 1]``; ``tail``
    holds the document's trailing newline(s), which belong to no block. So
    ``join()`` reproduces the original text byte for byte.
    """

    blocks: List[str] = field(default_factory=list)
    separators: List[str] = field(default_factory=list)
    tail: str = ""

    def __len__(self) -> int:
        return len(self.blocks)

    def join(self) -> str:
        out: List[str] = []
        for i, block in enumerate(self.blocks):
            if i:
                out.append(self.separators[i - 1])
            out.append(block)
        out.append(self.tail)
        return "".join(out)

    def span_text(self, start: int, length: int) -> str:
        """Raw text of blocks [start, start + length) including inner separators."""
        sub = Segmentation(
            self.blocks[start:start + length],
            self.separators[start:start + length - 1],
        )
        return sub.join()

    def replace_span(self, start: int, length: int, replacement: str) -> str:
        """
        Return the document text with blocks [start, start + length) replaced.

        Separators outside the span and the trailing newline are preserved;
        the separators inside it go away with the blocks. An empty replacement
        removes the span together with one adjoining separator so no extra
        blank gap is left behind.
        """
        if start < 0 or length < 1 or start + length > len(self.blocks):
            raise IndexError(f"span ({start}, {length}) outside {len(self.blocks)} blocks")

        end = start + length
        if replacement:
            blocks = self.blocks[:start] + [replacement] + self.blocks[end:]
            separators = self.separators[:start] + self.separators[end - 1:]
        else:
            blocks = self.blocks[:start] + self.blocks[end:]
            if end < len(self.blocks):
                separators = self.separators[:start] + self.separators[end:]
            else:
                separators = self.separators[:max(start - 1, 0)]
        return Segmentation(blocks, separators, self.tail).join()


def split_paragraphs(content: str) -> Segmentation:
    """
    Split `content` on blank lines, keeping every block's text verbatim.

    Trailing newlines are set aside as the tail, so the last block ends at
    its last non-blank line.
    """
    m = _TAIL_RE.search(content)
    tail = m.group(0) if m else ""
    body = content[:m.start()] if m else content
    parts = _BLANK_LINE_RE.split(body)
    return Segmentation(blocks=parts[0::2], separators=parts[1::2], tail=tail)
