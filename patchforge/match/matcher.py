# patchforge/match/matcher.py
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from .._logging import resolve_logger
from ..models.match import MatchResult
from .segment import Segmentation, split_paragraphs
from .strategies import STRATEGIES, MatchSettings, Strategy

__all__ = ["find_match"]


def find_match(
    target: str,
    document: Union[str, Segmentation, List[str]],
    settings: Optional[MatchSettings] = None,
    *,
    strategies: Sequence[Strategy] = STRATEGIES,
    logger=None,
    log: bool = False,
) -> Optional[MatchResult]:
    """
    Locate the paragraph span of `document` that best corresponds to `target`.

    Strategies are tried in order against the whole document and the first
    one that accepts a span wins, so an exact hit is always preferred over an
    approximate one even if the approximate one scores higher elsewhere.
    Returns None when every strategy declines; that is an ordinary outcome,
    not an error.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    settings = settings or MatchSettings()

    if isinstance(document, str):
        blocks = split_paragraphs(document).blocks
    elif isinstance(document, Segmentation):
        blocks = document.blocks
    else:
        blocks = list(document)

    if not target or not target.strip() or not blocks:
        log.debug("find_match: empty target or document")
        return None

    for strategy in strategies:
        result = strategy(target, blocks, settings)
        if result is not None:
            log.debug(
                f"find_match: {result.strategy.value} accepted blocks "
                f"[{result.span_start}, {result.span_end}) score={result.score:.3f}"
            )
            return result
        log.debug(f"find_match: {strategy.__name__} declined")

    log.debug(f"find_match: no match among {len(blocks)} blocks")
    return None
