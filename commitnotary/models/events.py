"""Ledger submission events and the single outcome folded from them."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class TxEventKind(str, Enum):
    """What a status event from the ledger client means for the attempt."""

    STATUS = "status"  # non-terminal: ready, broadcast, ...
    BEST_BLOCK = "best_block"  # terminal success
    ERROR = "error"  # terminal failure
    COMPLETE = "complete"  # stream closed, no further events


TERMINAL_KINDS: frozenset[TxEventKind] = frozenset(
    {TxEventKind.BEST_BLOCK, TxEventKind.ERROR}
)


class TxEvent(BaseModel):
    """One observation from ``LedgerClient.submit_and_watch``."""

    model_config = ConfigDict(frozen=True)

    kind: TxEventKind
    type: str
    tx_hash: str = ""
    block_hash: str = ""
    error: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS


class OutcomeKind(str, Enum):
    BEST_BLOCK = "best_block"
    ERROR = "error"
    INDETERMINATE = "indeterminate"  # stream completed without a terminal event


class AnchorOutcome(BaseModel):
    """The settled result of one invocation's anchoring attempt."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    status: str = ""
    block: str = ""
    block_hash: str = ""
    error: str = ""

    @property
    def failed(self) -> bool:
        return self.kind == OutcomeKind.ERROR

    @classmethod
    def from_error(cls, error: BaseException | str) -> AnchorOutcome:
        """Build an error outcome from an exception or message."""
        if isinstance(error, BaseException):
            name = type(error).__name__
            text = f"{name}: {error}" if str(error) else name
        else:
            text = error
        return cls(kind=OutcomeKind.ERROR, status=text, error=text)
