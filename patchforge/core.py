# patchforge/core.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ._logging import resolve_logger
from .apply.patch import apply_edits_to_store
from .errors.collaborator import CollaboratorError
from .extract.instructions import parse_edit_instructions
from .match.strategies import MatchSettings
from .models.edits import PatchOutcome
from .prompts import ConversationHistory, build_patch_edit_prompt, gather_project_info
from .retry import MAX_RETRY_ROUNDS, Collaborator, call_collaborator, merge_paths, retry_pending_edits

if TYPE_CHECKING:
    from .store import ProjectStore

__all__ = ["apply_reply", "edit_project"]


async def apply_reply(
    reply: str,
    store: "ProjectStore",
    generate: Collaborator,
    *,
    max_rounds: int = MAX_RETRY_ROUNDS,
    settings: Optional[MatchSettings] = None,
    history: Optional[ConversationHistory] = None,
    logger=None,
    log: bool = False,
) -> PatchOutcome:
    """
    Apply the OLD/NEW pairs of a collaborator reply to `store`, then run the
    correction rounds for whatever could not be located.

    Unresolved edits come back in `PatchOutcome.pending_edits`; that is a
    partial success, not an error.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    edits = parse_edit_instructions(reply)
    log.debug(f"apply_reply: parsed {len(edits)} edit(s)")

    first = apply_edits_to_store(edits, store, settings, logger=log)
    outcome = PatchOutcome(modified_paths=list(first.modified_paths), pending_edits=first.pending)
    if not outcome.pending_edits:
        return outcome

    try:
        retried = await retry_pending_edits(
            outcome.pending_edits,
            store,
            generate,
            max_rounds=max_rounds,
            settings=settings,
            history=history,
            logger=log,
        )
    except CollaboratorError as e:
        e.modified_paths = merge_paths(list(outcome.modified_paths), e.modified_paths)
        raise
    merge_paths(outcome.modified_paths, retried.modified_paths)
    outcome.pending_edits = retried.pending
    return outcome


async def edit_project(
    request: str,
    store: "ProjectStore",
    generate: Collaborator,
    *,
    max_rounds: int = MAX_RETRY_ROUNDS,
    settings: Optional[MatchSettings] = None,
    history: Optional[ConversationHistory] = None,
    logger=None,
    log: bool = False,
) -> PatchOutcome:
    """
    Ask the collaborator to change the project according to `request` and
    apply its answer.

    Raises:
        CollaboratorError: if a collaborator call fails. Nothing is written
            when the first call fails; later failures keep what was applied.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    info = gather_project_info(store.documents())
    prompt = build_patch_edit_prompt(request, info, history)
    try:
        reply = await call_collaborator(generate, prompt)
    except Exception as e:
        raise CollaboratorError(f"Collaborator failed: {e}") from e
    if history is not None:
        history.add(request, prompt, reply)

    return await apply_reply(
        reply,
        store,
        generate,
        max_rounds=max_rounds,
        settings=settings,
        history=history,
        logger=log,
    )
