"""commitnotary data models — all Pydantic v2, log and event models frozen."""

from commitnotary.models.events import (
    AnchorOutcome,
    OutcomeKind,
    TxEvent,
    TxEventKind,
)
from commitnotary.models.log import LogEntry, TransactionPayload
from commitnotary.models.push_event import Commit, PushEvent, Repository, load_push_event

__all__ = [
    # log
    "LogEntry",
    "TransactionPayload",
    # events
    "AnchorOutcome",
    "OutcomeKind",
    "TxEvent",
    "TxEventKind",
    # push event
    "Commit",
    "PushEvent",
    "Repository",
    "load_push_event",
]
