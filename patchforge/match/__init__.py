from .matcher import find_match
from .segment import Segmentation, split_paragraphs
from .strategies import STRATEGIES, MatchSettings

__all__ = [
    "find_match",
    "split_paragraphs",
    "Segmentation",
    "MatchSettings",
    "STRATEGIES",
]
