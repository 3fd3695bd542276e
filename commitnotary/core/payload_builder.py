"""Build the chained ``TransactionPayload`` for the next anchoring attempt."""

from __future__ import annotations

import time
from collections.abc import Sequence

from commitnotary.models.log import LogEntry, TransactionPayload


def now_millis() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def previous_block_reference(log: Sequence[LogEntry]) -> str:
    """Return the ``block`` of the last successful entry, or ``""``."""
    for entry in reversed(log):
        if not entry.failed:
            return entry.block
    return ""


def build_payload(
    repo_name: str,
    ref: str,
    now_ms: int,
    pending_commit_ids: Sequence[str],
    log: Sequence[LogEntry],
) -> TransactionPayload:
    """Assemble the payload, chaining it to the current head of the log.

    *now_ms* is captured once per invocation by the caller.
    """
    if not repo_name:
        raise ValueError("repository name is required")
    if not ref:
        raise ValueError("ref is required")

    return TransactionPayload(
        repo_name=repo_name,
        ref=ref,
        timestamp_ms=now_ms,
        commit_ids=list(pending_commit_ids),
        previous_block=previous_block_reference(log),
    )
