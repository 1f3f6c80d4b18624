# patchforge/apply/patch.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from .._logging import resolve_logger
from ..errors.patch import PatchFailedError
from ..match.matcher import find_match
from ..match.segment import split_paragraphs
from ..match.strategies import MatchSettings
from ..models.edits import ApplyResult, Document, EditInstruction
from ..models.match import MatchResult
from .indent import capture_indent, reindent

if TYPE_CHECKING:
    from ..store import ProjectStore

__all__ = ["apply_edit", "apply_edits", "apply_edits_to_store", "patch_text"]


def apply_edit(
    content: str,
    old: str,
    new: str,
    settings: Optional[MatchSettings] = None,
    *,
    logger=None,
    log: bool = False,
) -> Tuple[Optional[str], Optional[MatchResult]]:
    """
    Replace the paragraph span best matching `old` with a re-indented `new`.

    Returns (new_content, match). When no strategy accepts a span the content
    is left alone and (None, None) is returned.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)

    # Segment fresh on every call: earlier edits move block boundaries.
    segmentation = split_paragraphs(content)
    match = find_match(old, segmentation, settings, logger=log)
    if match is None:
        return None, None

    span_text = segmentation.span_text(match.span_start, match.span_length)
    indent = capture_indent(content, old, span_text)
    replacement = reindent(new, indent)
    log.debug(
        f"apply_edit: replacing blocks [{match.span_start}, {match.span_end}) "
        f"via {match.strategy.value} with indent={indent!r}"
    )
    return segmentation.replace_span(match.span_start, match.span_length, replacement), match


def _apply_to_document(
    path: str,
    content: str,
    edits: List[EditInstruction],
    settings: Optional[MatchSettings],
    log,
) -> Tuple[str, bool]:
    changed = False
    for i, edit in enumerate(edits, 1):
        if edit.applied:
            continue
        updated, match = apply_edit(content, edit.old, edit.new, settings, logger=log)
        if updated is None:
            continue
        log.debug(f"[{path}] edit #{i} applied ({match.strategy.value}, score={match.score:.2f})")
        content = updated
        edit.applied = True
        changed = True
    return content, changed


def apply_edits(
    edits: List[EditInstruction],
    documents: Iterable[Document],
    settings: Optional[MatchSettings] = None,
    *,
    logger=None,
    log: bool = False,
) -> ApplyResult:
    """
    Apply `edits` in order to each document, in memory.

    Within a document the edits run sequentially against the mutating text so
    later edits see the effect of earlier ones. An edit is applied to at most
    one document: the first document where it matches claims it. Edits that
    never match are returned in `pending`; a failed edit never stops the
    others.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    result = ApplyResult()

    for doc in documents:
        content, changed = _apply_to_document(doc.path, doc.content, edits, settings, log)
        result.documents[doc.path] = content
        if changed:
            result.modified_paths.append(doc.path)

    result.pending = [e for e in edits if not e.applied]
    log.debug(
        f"apply_edits: {len(edits) - len(result.pending)}/{len(edits)} applied, "
        f"modified={result.modified_paths}"
    )
    return result


def apply_edits_to_store(
    edits: List[EditInstruction],
    store: "ProjectStore",
    settings: Optional[MatchSettings] = None,
    *,
    logger=None,
    log: bool = False,
) -> ApplyResult:
    """
    Same as `apply_edits`, reading documents from `store` and writing back
    each modified document once every edit has been tried against it.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    result = ApplyResult()

    for doc in store.documents():
        if all(e.applied for e in edits):
            break
        content, changed = _apply_to_document(doc.path, doc.content, edits, settings, log)
        result.documents[doc.path] = content
        if changed:
            store.write(doc.path, content)
            result.modified_paths.append(doc.path)

    result.pending = [e for e in edits if not e.applied]
    log.debug(
        f"apply_edits_to_store: {len(edits) - len(result.pending)}/{len(edits)} applied, "
        f"modified={result.modified_paths}"
    )
    return result


def patch_text(
    content: str,
    patches: List[Dict[str, str]],
    settings: Optional[MatchSettings] = None,
    *,
    logger=None,
    log: bool = False,
) -> str:
    """
    Apply a list of {"old": ..., "new": ...} dicts to a single string.

    Strict counterpart of `apply_edits` for callers that need all-or-nothing
    behaviour on one text.

    Raises:
        PatchFailedError: if an entry has no 'old' text or cannot be located.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    text = content
    for i, spec in enumerate(patches, 1):
        old = spec.get("old")
        if not old:
            raise PatchFailedError(f"patch #{i} is missing 'old'")
        updated, _ = apply_edit(text, old, spec.get("new", ""), settings, logger=log)
        if updated is None:
            raise PatchFailedError(f"patch #{i}: old block not found")
        text = updated
    return text
