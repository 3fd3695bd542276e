"""Pending-commit reconciliation.

Failed attempts form a contiguous trailing run in the log.  Every commit in
that run is retried, ahead of the newly pushed commits, so that anchored
order follows commit history.  The most recent successful entry is a
watermark: nothing at or before it is resubmitted.
"""

from __future__ import annotations

from collections.abc import Sequence

from commitnotary.models.log import LogEntry


def compute_pending_commit_ids(
    log: Sequence[LogEntry], new_commit_ids: Sequence[str]
) -> list[str]:
    """Return the ordered commit ids the next attempt must anchor.

    Parameters
    ----------
    log:
        Past attempts, oldest first.
    new_commit_ids:
        Commits from the current push event, oldest first.

    Returns
    -------
    list[str]
        Commit ids of the trailing failed run (oldest attempt first, each
        attempt's ids in their original order) followed by *new_commit_ids*.
    """
    pending = list(new_commit_ids)
    for entry in reversed(log):
        if not entry.failed:
            break
        pending[:0] = entry.payload.commit_ids
    return pending
