# patchforge/match/strategies.py
"""
Matching strategies, ordered from most to least precise.

Each strategy is a pure function ``(target, blocks, settings) -> MatchResult |
None`` over the paragraph blocks of one document. ``STRATEGIES`` fixes the
order in which the matcher tries them; the first accepted result wins.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..models.match import MatchResult, MatchStrategy
from ..utils.text import compare_two_strings, normalize_whitespace, strip_numerals, tokenize

__all__ = ["MatchSettings", "Strategy", "STRATEGIES"]


@dataclass(frozen=True)
class MatchSettings:
    """Acceptance thresholds and window bounds for the fuzzy strategies."""

    similarity_threshold: float = 0.75
    jaccard_threshold: float = 0.55
    heading_threshold: float = 0.8
    window_min: int = 2
    window_max: int = 5
    jaccard_window_max: int = 12
    prefix_probe: int = 40
    prefix_min_common: int = 30
    prefix_coverage: float = 0.9
    heading_words: int = 6


Strategy = Callable[[str, List[str], MatchSettings], Optional[MatchResult]]

_BLANK_LINE_RE = re.compile(r"\n\s*\n")
_WORD_RE = re.compile(r"\w")
_MARKER_RE = re.compile(r"^\s*[(\[]?[a-z0-9]{1,3}[)\]]\s*", re.IGNORECASE)
_CAPS_BLOCK_RE = re.compile(r"[A-Z][A-Z\s]+")
_COLON_END_RE = re.compile(r":\s*$")
_HEADING_LINE_RE = re.compile(r"[A-Z0-9].+\s*")


def _windows(count: int, lo: int, hi: int):
    """Yield (start, size) pairs, smallest size first, earliest start first."""
    for size in range(lo, min(hi, count) + 1):
        for start in range(0, count - size + 1):
            yield start, size


def _best_scored(scores: List[float]) -> Tuple[int, float]:
    best_idx, best_score = -1, 0.0
    for i, score in enumerate(scores):
        if score > best_score:
            best_idx, best_score = i, score
    return best_idx, best_score


def _is_section_break(block: str) -> bool:
    """All-caps paragraph or one ending with a colon."""
    return bool(_CAPS_BLOCK_RE.fullmatch(block) or _COLON_END_RE.search(block))


def _is_heading(block: str) -> bool:
    """Single-line paragraph starting with a capital or digit and written in caps."""
    return bool(_HEADING_LINE_RE.fullmatch(block)) and block == block.upper()


def _extend_until(blocks: List[str], start: int, stop: Callable[[str], bool]) -> int:
    span = 1
    while start + span < len(blocks) and not stop(blocks[start + span]):
        span += 1
    return span


# ---------- containment ----------

def exact_containment(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    for i, block in enumerate(blocks):
        if target in block:
            return MatchResult(i, 1, MatchStrategy.EXACT, 1.0)
    return None


def exact_multi_containment(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    parts = [normalize_whitespace(p) for p in _BLANK_LINE_RE.split(target)]
    parts = [p for p in parts if p]
    if len(parts) < 2:
        return None
    norm_blocks = [normalize_whitespace(b) for b in blocks]
    for i in range(0, len(blocks) - len(parts) + 1):
        if all(part in norm_blocks[i + j] for j, part in enumerate(parts)):
            return MatchResult(i, len(parts), MatchStrategy.EXACT_MULTI, 1.0)
    return None


def normalized_containment(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    target_norm = normalize_whitespace(target)
    if not target_norm:
        return None
    for i, block in enumerate(blocks):
        if target_norm in normalize_whitespace(block):
            return MatchResult(i, 1, MatchStrategy.NORMALIZED, 1.0)
    return None


def first_sentence_containment(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    head = target.split(".", 1)[0]
    # "." alone would match nearly any paragraph.
    if not _WORD_RE.search(head):
        return None
    sentence = normalize_whitespace(head + ".").lower()
    for i, block in enumerate(blocks):
        if sentence in normalize_whitespace(block).lower():
            return MatchResult(i, 1, MatchStrategy.FIRST_SENTENCE, 0.9)
    return None


def window_containment(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    target_norm = normalize_whitespace(target)
    if not target_norm:
        return None
    for start, size in _windows(len(blocks), settings.window_min, settings.window_max):
        window = blocks[start:start + size]
        spaced = normalize_whitespace(" ".join(window))
        glued = normalize_whitespace("".join(window))
        if target_norm in spaced or target_norm in glued:
            return MatchResult(start, size, MatchStrategy.WINDOW, 0.9)
    return None


# ---------- similarity ----------

def similarity_ranking(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    target_norm = normalize_whitespace(target)
    scores = [compare_two_strings(normalize_whitespace(b), target_norm) for b in blocks]
    idx, score = _best_scored(scores)
    if idx >= 0 and score >= settings.similarity_threshold:
        return MatchResult(idx, 1, MatchStrategy.SIMILARITY, score)
    return None


def numeral_stripped_similarity(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    target_bare = strip_numerals(target)
    scores = [compare_two_strings(strip_numerals(b), target_bare) for b in blocks]
    idx, score = _best_scored(scores)
    if idx >= 0 and score >= settings.similarity_threshold:
        return MatchResult(idx, 1, MatchStrategy.NUMERAL_STRIPPED, score)
    return None


def token_overlap(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    target_set = set(tokenize(target))
    if not target_set:
        return None
    for start, size in _windows(len(blocks), settings.window_min, settings.jaccard_window_max):
        window_set = set(tokenize(" ".join(blocks[start:start + size])))
        union = target_set | window_set
        jaccard = len(target_set & window_set) / len(union)
        if jaccard >= settings.jaccard_threshold:
            return MatchResult(start, size, MatchStrategy.TOKEN_OVERLAP, jaccard)
    return None


# ---------- structural expansion ----------

def shared_prefix_expansion(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    probe = target.lstrip()[:settings.prefix_probe]
    if len(probe) < settings.prefix_min_common:
        return None
    for i, block in enumerate(blocks):
        opening = block.lstrip()
        common = 0
        limit = min(len(probe), len(opening))
        while common < limit and probe[common] == opening[common]:
            common += 1
        if common < settings.prefix_min_common:
            continue

        span, covered = 1, len(block)
        while i + span < len(blocks) and covered < len(target) * settings.prefix_coverage:
            covered += len(blocks[i + span])
            span += 1
        return MatchResult(i, span, MatchStrategy.SHARED_PREFIX, common / len(probe))
    return None


def marker_stripped_containment(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    target_norm = normalize_whitespace(target)
    for i, block in enumerate(blocks):
        cleaned = normalize_whitespace(_MARKER_RE.sub("", block, count=1))
        if cleaned and cleaned in target_norm:
            span = _extend_until(blocks, i, _is_section_break)
            return MatchResult(i, span, MatchStrategy.MARKER_STRIPPED, 0.6)
    return None


def heading_expansion(target: str, blocks: List[str], settings: MatchSettings) -> Optional[MatchResult]:
    head_words = " ".join(normalize_whitespace(target).split(" ")[:settings.heading_words]).lower()
    for i, block in enumerate(blocks):
        if not _is_heading(block):
            continue
        score = compare_two_strings(normalize_whitespace(block).lower(), head_words)
        if score >= settings.heading_threshold:
            span = _extend_until(blocks, i, _is_heading)
            return MatchResult(i, span, MatchStrategy.HEADING, score)
    return None


STRATEGIES: Tuple[Strategy, ...] = (
    exact_containment,
    exact_multi_containment,
    normalized_containment,
    first_sentence_containment,
    window_containment,
    similarity_ranking,
    numeral_stripped_similarity,
    token_overlap,
    shared_prefix_expansion,
    marker_stripped_containment,
    heading_expansion,
)
