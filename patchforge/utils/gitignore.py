# patchforge/utils/gitignore.py
import os
from typing import Iterable, List

import pathspec

_DEFAULT_PATTERNS = (".git/",)


def get_gitignore(path: str, extra: Iterable[str] = ()) -> pathspec.PathSpec:
    """
    Compile the ignore rules for a project rooted at `path`.

    Combines the nearest .gitignore found by walking upward from `path` with
    `.git/` and any `extra` gitwildmatch patterns (e.g. a staging directory
    such as "uploads/"). Always returns a valid spec, falling back to the
    defaults plus `extra` if the .gitignore cannot be compiled.
    """
    defaults: List[str] = list(_DEFAULT_PATTERNS) + list(extra)
    lines: List[str] = list(defaults)

    base = os.path.abspath(path or ".")
    if os.path.isfile(base):
        base = os.path.dirname(base)

    cur = base
    while True:
        gi = os.path.join(cur, ".gitignore")
        try:
            if os.path.exists(gi):
                with open(gi, "r", encoding="utf-8", errors="ignore") as f:
                    lines.extend(f.read().splitlines())
                break
        except OSError:
            # Unreadable .gitignore: keep walking upward
            pass
        parent = os.path.dirname(cur)
        if parent == cur:
            break
        cur = parent

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except Exception:
        return pathspec.PathSpec.from_lines("gitwildmatch", defaults)
