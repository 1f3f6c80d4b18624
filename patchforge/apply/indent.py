# patchforge/apply/indent.py
from __future__ import annotations

import re
import textwrap
from typing import Optional

__all__ = ["capture_indent", "reindent"]

_LEADING_WS_RE = re.compile(r"^[\t ]*")


def _leading_ws(s: str) -> str:
    """Return the exact leading whitespace (tabs/spaces)."""
    m = _LEADING_WS_RE.match(s)
    return m.group(0) if m else ""


def _first_nonblank(text: str) -> Optional[str]:
    for line in text.splitlines():
        if line.strip():
            return line
    return None


def _find_line_indent(haystack: str, needle: str) -> Optional[str]:
    for line in haystack.splitlines():
        if needle in line:
            return _leading_ws(line)
    return None


def capture_indent(content: str, old: str, span_text: str = "") -> str:
    """
    Indentation in effect where `old` starts.

    The first non-blank line of `old` is looked up inside the matched span
    first and then anywhere in `content`; the leading whitespace of the line
    that contains it is returned. When `old` was paraphrased and cannot be
    found, the indentation of the span's own first line is used instead.
    """
    first = _first_nonblank(old)
    if first is not None:
        needle = first.strip()
        for haystack in (span_text, content):
            found = _find_line_indent(haystack, needle) if haystack else None
            if found is not None:
                return found
    opening = _first_nonblank(span_text)
    return _leading_ws(opening) if opening is not None else ""


def reindent(new: str, indent: str) -> str:
    """
    Replace the common leading indentation of `new` with `indent`.

    Relative indentation between lines is kept; blank lines stay empty.
    """
    dedented = textwrap.dedent(new)
    if not indent:
        return dedented
    return "\n".join(indent + line if line.strip() else line for line in dedented.split("\n"))
