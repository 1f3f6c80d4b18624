# patchforge/utils/__init__.py
from .gitignore import get_gitignore
from .text import (
    cleanup_llm_output,
    compare_two_strings,
    normalize_whitespace,
    strip_numerals,
    tokenize,
)

__all__ = [
    "get_gitignore",
    "cleanup_llm_output",
    "compare_two_strings",
    "normalize_whitespace",
    "strip_numerals",
    "tokenize",
]
