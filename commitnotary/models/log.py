"""Audit log models — one ``LogEntry`` per anchoring attempt.

The log is append-only: entries are frozen and outcomes are recorded by
appending new entries, never by mutating old ones.

On disk the ``TransactionPayload`` is an ordered five-element array, which
is also exactly what gets embedded in the remark::

    [repo_name, ref, timestamp_ms, [commit ids, oldest first], previous_block]
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

PAYLOAD_FIELDS = ("repo_name", "ref", "timestamp_ms", "commit_ids", "previous_block")


class TransactionPayload(BaseModel):
    """The unit of anchoring. Field positions are fixed and significant."""

    model_config = ConfigDict(frozen=True)

    repo_name: str
    ref: str
    timestamp_ms: int
    commit_ids: list[str] = []
    previous_block: str | None = ""

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != len(PAYLOAD_FIELDS):
                raise ValueError(
                    f"payload must have {len(PAYLOAD_FIELDS)} positions, got {len(data)}"
                )
            return dict(zip(PAYLOAD_FIELDS, data))
        return data

    @model_serializer
    def _as_sequence(self) -> list[Any]:
        return [
            self.repo_name,
            self.ref,
            self.timestamp_ms,
            list(self.commit_ids),
            self.previous_block,
        ]


class LogEntry(BaseModel):
    """A single anchoring attempt.

    ``block`` is empty when the attempt never reached a best block.
    ``status`` holds the event type on success and the error text on failure.
    """

    model_config = ConfigDict(frozen=True)

    payload: TransactionPayload
    status: str
    block: str = ""
    failed: bool
