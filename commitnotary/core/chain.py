"""Offline verification of the anchor chain recorded in the log.

Every successful entry must point (payload position 5) at the ``block`` of
the successful entry before it; the first successful entry points at
nothing.  Failed entries are skipped: they never became a chain head.
"""

from __future__ import annotations

from collections.abc import Sequence

from commitnotary.models.log import LogEntry


class ChainIntegrityError(RuntimeError):
    """Raised when the recorded anchor chain is broken."""


def verify_chain(log: Sequence[LogEntry]) -> bool:
    """Walk the log and check every successful link.

    Returns ``True`` if the chain is valid, raises ``ChainIntegrityError``
    otherwise.
    """
    head = ""
    for index, entry in enumerate(log):
        if entry.failed:
            continue

        if not entry.block:
            raise ChainIntegrityError(
                f"Entry {index} is marked successful but carries no block reference."
            )

        previous = entry.payload.previous_block or ""
        if previous != head:
            raise ChainIntegrityError(
                f"Chain broken at entry {index}: "
                f"expected previous block {head!r}, got {previous!r}"
            )
        head = entry.block

    return True
