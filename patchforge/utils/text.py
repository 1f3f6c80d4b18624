# patchforge/utils/text.py
import re
from collections import Counter
from typing import List

_WS_RE = re.compile(r"\s+")
_NUMERALS_RE = re.compile(r"[\d%]+|\(\d+\)")
_WORD_SPLIT_RE = re.compile(r"\W+")

STOP_WORDS = frozenset(
    "the a an and or of in to with for on at by as is are was were be been if this that".split()
)


def cleanup_llm_output(content: str) -> str:
    """
    Removes common LLM artifacts like <think> blocks.
    Returns the cleaned content string.
    """
    if not content:
        return ""
    return re.sub(r"<think>.*?</think>", "", content, flags=re.DOTALL)


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace to one space and trim the ends."""
    return _WS_RE.sub(" ", text).strip()


def strip_numerals(text: str) -> str:
    """Normalize whitespace, then drop digits, percent signs and '(12)'-style numbers."""
    return _NUMERALS_RE.sub("", normalize_whitespace(text))


def tokenize(text: str) -> List[str]:
    """Lower-cased word tokens with stop words removed."""
    words = _WORD_SPLIT_RE.split(normalize_whitespace(text))
    return [w.lower() for w in words if w and w.lower() not in STOP_WORDS]


def compare_two_strings(first: str, second: str) -> float:
    """
    Dice coefficient over character bigrams, ignoring whitespace.

    Returns 1.0 for identical strings and 0.0 when either side is too short
    to form a bigram.
    """
    first = _WS_RE.sub("", first)
    second = _WS_RE.sub("", second)
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    bigrams = Counter(first[i:i + 2] for i in range(len(first) - 1))
    intersection = 0
    for i in range(len(second) - 1):
        bigram = second[i:i + 2]
        if bigrams[bigram] > 0:
            bigrams[bigram] -= 1
            intersection += 1
    return (2.0 * intersection) / (len(first) + len(second) - 2)
