from dataclasses import dataclass
from enum import Enum


class MatchStrategy(str, Enum):
    """Matching strategies, listed from most to least precise."""

    EXACT = "exact"
    EXACT_MULTI = "exact_multi"
    NORMALIZED = "normalized"
    FIRST_SENTENCE = "first_sentence"
    WINDOW = "window"
    SIMILARITY = "similarity"
    NUMERAL_STRIPPED = "numeral_stripped"
    TOKEN_OVERLAP = "token_overlap"
    SHARED_PREFIX = "shared_prefix"
    MARKER_STRIPPED = "marker_stripped"
    HEADING = "heading"


@dataclass
class MatchResult:
    """A contiguous span of paragraph blocks accepted by one strategy."""

    span_start: int
    span_length: int
    strategy: MatchStrategy
    score: float = 1.0

    @property
    def span_end(self) -> int:
        return self.span_start + self.span_length
