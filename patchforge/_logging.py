"""
Opt-in logging for patchforge.

Every public entry point (``find_match``, ``apply_edit``, ``apply_edits``,
``apply_edits_to_store``, ``patch_text``, ``retry_pending_edits``,
``apply_reply``, ``edit_project``) takes ``logger=None, log: bool = False``
and resolves them once at the top:

    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)

The resolved object is handed down as ``logger=log`` to nested calls, so
one switch traces the whole pipeline: which strategy accepted each match,
the indentation used for a replacement and every correction round. With
neither a logger nor ``log=True`` the calls go to a NoopLogger and nothing
is emitted. Library code never prints.

ProjectStore is the exception: skipped unreadable documents are reported
through its module logger at WARNING, since dropping a file from the
snapshot should never be silent.
"""
from __future__ import annotations

import logging


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Return `logger` if given, else a named logger set to `level` when
    `enabled`, else a NoopLogger.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "patchforge")
        lg.setLevel(level)
        # Records reach the root handlers (and pytest's caplog).
        lg.propagate = True
        return lg
    return NoopLogger()
