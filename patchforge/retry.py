# patchforge/retry.py
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Iterable, List, Optional, Union

from ._logging import resolve_logger
from .apply.patch import apply_edits_to_store
from .errors.collaborator import CollaboratorError
from .extract.instructions import parse_edit_instructions
from .match.strategies import MatchSettings
from .models.edits import EditInstruction
from .prompts import ConversationHistory, build_correction_prompt, gather_project_info
from .utils.text import normalize_whitespace

if TYPE_CHECKING:
    from .store import ProjectStore

__all__ = [
    "Collaborator",
    "RetryOutcome",
    "MAX_RETRY_ROUNDS",
    "call_collaborator",
    "retry_pending_edits",
    "unaddressed_edits",
]

# Fixed cap on correction rounds; there is no backoff between rounds.
MAX_RETRY_ROUNDS = 3

Collaborator = Callable[[str], Union[str, Awaitable[str]]]


@dataclass
class RetryOutcome:
    """Edits still unresolved after the correction rounds, and what changed."""

    pending: List[EditInstruction] = field(default_factory=list)
    modified_paths: List[str] = field(default_factory=list)
    rounds: int = 0


async def call_collaborator(generate: Collaborator, prompt: str) -> str:
    """Invoke `generate`, awaiting the reply when it is awaitable."""
    reply = generate(prompt)
    if inspect.isawaitable(reply):
        reply = await reply
    return reply or ""


def unaddressed_edits(
    pending: Iterable[EditInstruction], corrected: Iterable[EditInstruction]
) -> List[EditInstruction]:
    """
    Pending edits that no corrected pair restates.

    A correction counts as restating an edit when it repeats either its old
    or its new text (whitespace-insensitive).
    """
    corrected = list(corrected)
    olds = {normalize_whitespace(e.old) for e in corrected}
    news = {normalize_whitespace(e.new) for e in corrected}
    return [
        e
        for e in pending
        if normalize_whitespace(e.old) not in olds and normalize_whitespace(e.new) not in news
    ]


def merge_paths(into: List[str], more: Iterable[str]) -> List[str]:
    for path in more:
        if path not in into:
            into.append(path)
    return into


async def retry_pending_edits(
    pending: List[EditInstruction],
    store: "ProjectStore",
    generate: Collaborator,
    *,
    max_rounds: int = MAX_RETRY_ROUNDS,
    settings: Optional[MatchSettings] = None,
    history: Optional[ConversationHistory] = None,
    logger=None,
    log: bool = False,
) -> RetryOutcome:
    """
    Ask the collaborator to correct edits that could not be located.

    Each round sends the unresolved edits together with the current project
    state, parses the reply and applies it to `store`. Rounds run strictly one
    after another and stop as soon as nothing is left unresolved or
    `max_rounds` is reached. A reply without any OLD/NEW pair uses up the
    round but keeps the previous edits pending, and edits a reply leaves out
    (see `unaddressed_edits`) stay pending alongside its own failures.

    Raises:
        CollaboratorError: when `generate` fails. The round is abandoned; edits
            already written stay written and the error carries what is still
            pending.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    remaining = [e for e in pending if not e.applied]
    outcome = RetryOutcome()

    while remaining and outcome.rounds < max_rounds:
        outcome.rounds += 1
        log.debug(f"retry round {outcome.rounds}/{max_rounds}: {len(remaining)} edit(s) pending")

        info = gather_project_info(store.documents())
        prompt = build_correction_prompt(remaining, info, history)
        try:
            reply = await call_collaborator(generate, prompt)
        except Exception as e:
            raise CollaboratorError(
                f"Collaborator failed during correction round {outcome.rounds}: {e}",
                pending=remaining,
                modified_paths=outcome.modified_paths,
                rounds=outcome.rounds,
            ) from e
        if history is not None:
            history.add("retry edits", prompt, reply)

        corrected = parse_edit_instructions(reply)
        if not corrected:
            log.debug(f"retry round {outcome.rounds}: reply held no edit pairs")
            continue

        carried = unaddressed_edits(remaining, corrected)
        if carried:
            log.debug(f"retry round {outcome.rounds}: reply skipped {len(carried)} edit(s)")
        result = apply_edits_to_store(corrected, store, settings, logger=log)
        merge_paths(outcome.modified_paths, result.modified_paths)
        remaining = carried + result.pending

    outcome.pending = remaining
    if remaining:
        log.debug(f"giving up after {outcome.rounds} round(s): {len(remaining)} edit(s) pending")
    return outcome
