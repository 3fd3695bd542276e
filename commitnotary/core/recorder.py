"""Outcome recording: fold the ledger event stream, append one entry.

State machine for one invocation::

    Built -> Submitted -> (status events)* -> BestBlock | Errored

``fold_events`` reduces the client's event stream to a single
``AnchorOutcome``, stopping at the first terminal event.  ``OutcomeRecorder``
turns that outcome into at most one appended ``LogEntry`` and persists it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from commitnotary.core.log_store import LogStore
from commitnotary.models.events import AnchorOutcome, OutcomeKind, TxEvent, TxEventKind
from commitnotary.models.log import LogEntry, TransactionPayload

logger = logging.getLogger(__name__)


class SubmissionFailed(RuntimeError):
    """The anchoring attempt ended in error.  Raised after the log write."""

    def __init__(self, entry: LogEntry) -> None:
        self.entry = entry
        super().__init__(entry.status)


def fold_events(events: Iterable[TxEvent]) -> AnchorOutcome:
    """Reduce an event stream to its single terminal outcome.

    Non-terminal status events are logged and skipped.  A ``complete`` event
    (or an exhausted iterator) before any terminal event yields an
    ``INDETERMINATE`` outcome.
    """
    for event in events:
        if event.kind == TxEventKind.BEST_BLOCK:
            logger.info("Transaction status: %s", event.type)
            return AnchorOutcome(
                kind=OutcomeKind.BEST_BLOCK,
                status=event.type,
                block=event.tx_hash,
                block_hash=event.block_hash,
            )
        if event.kind == TxEventKind.ERROR:
            return AnchorOutcome.from_error(event.error or event.type)
        if event.kind == TxEventKind.COMPLETE:
            break
        logger.info("Transaction status: %s", event.type)

    logger.warning("Event stream completed without reaching a best block.")
    return AnchorOutcome(kind=OutcomeKind.INDETERMINATE, status="complete")


class OutcomeRecorder:
    """Appends the outcome of this invocation's attempt to the log.

    Parameters
    ----------
    store:
        Where the log is persisted after the append.
    log:
        The in-memory log read at process start.  Appended to in place.
    """

    def __init__(self, store: LogStore, log: list[LogEntry]) -> None:
        self._store = store
        self._log = log
        self._recorded = False

    @property
    def log(self) -> list[LogEntry]:
        return self._log

    def record(
        self, payload: TransactionPayload, outcome: AnchorOutcome
    ) -> LogEntry | None:
        """Append and persist the entry for *outcome*.

        Returns the appended entry, or ``None`` for an indeterminate outcome
        (nothing is appended).  Raises ``RuntimeError`` if an outcome was
        already recorded by this recorder.
        """
        if self._recorded:
            raise RuntimeError("an outcome has already been recorded for this invocation")
        self._recorded = True

        if outcome.kind == OutcomeKind.INDETERMINATE:
            return None

        if outcome.kind == OutcomeKind.BEST_BLOCK:
            entry = LogEntry(
                payload=payload, status=outcome.status, block=outcome.block, failed=False
            )
        else:
            entry = LogEntry(payload=payload, status=outcome.status, block="", failed=True)

        self._log.append(entry)
        self._store.write(self._log)
        return entry
