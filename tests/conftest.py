"""Shared test fixtures for commitnotary."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

import pytest

from commitnotary.config import NotaryConfig
from commitnotary.core.log_store import LogStore
from commitnotary.models.events import TxEvent, TxEventKind
from commitnotary.models.log import LogEntry, TransactionPayload

REPO = "commitnotary"
REF = "refs/heads/main"
NOW_MS = 1_700_000_000_000


class FakeLedgerClient:
    """Replays a fixed event sequence and records what was submitted."""

    def __init__(self, events: Iterable[TxEvent]) -> None:
        self.events = list(events)
        self.submitted: list[bytes] = []
        self.closed = False

    def submit_and_watch(self, remark: bytes) -> Iterator[TxEvent]:
        self.submitted.append(remark)
        yield from self.events

    def close(self) -> None:
        self.closed = True


class EventFactory:
    """Builders for the event kinds a ledger client can report."""

    @staticmethod
    def status(type_: str) -> TxEvent:
        return TxEvent(kind=TxEventKind.STATUS, type=type_)

    @staticmethod
    def best_block(tx_hash: str, block_hash: str = "0xb10c") -> TxEvent:
        return TxEvent(
            kind=TxEventKind.BEST_BLOCK, type="inBlock", tx_hash=tx_hash, block_hash=block_hash
        )

    @staticmethod
    def error(message: str) -> TxEvent:
        return TxEvent(kind=TxEventKind.ERROR, type="invalid", error=message)

    @staticmethod
    def complete() -> TxEvent:
        return TxEvent(kind=TxEventKind.COMPLETE, type="complete")


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def log_path(tmp_dir: Path) -> Path:
    return tmp_dir / "notary-log.json"


@pytest.fixture
def store(log_path: Path) -> LogStore:
    """Provide a LogStore backed by a (not yet existing) temp file."""
    return LogStore(log_path)


@pytest.fixture
def make_payload() -> Callable[..., TransactionPayload]:
    """Factory fixture: build a TransactionPayload with sensible defaults."""

    def _factory(commit_ids: list[str] | None = None, **overrides: Any) -> TransactionPayload:
        defaults: dict[str, Any] = {
            "repo_name": REPO,
            "ref": REF,
            "timestamp_ms": NOW_MS,
            "commit_ids": commit_ids or [],
            "previous_block": "",
        }
        defaults.update(overrides)
        return TransactionPayload(**defaults)

    return _factory


@pytest.fixture
def make_entry(make_payload: Callable[..., TransactionPayload]) -> Callable[..., LogEntry]:
    """Factory fixture: a failed entry if no block is given, else a success."""

    def _factory(
        commit_ids: list[str], block: str = "", previous_block: str = ""
    ) -> LogEntry:
        failed = not block
        return LogEntry(
            payload=make_payload(commit_ids, previous_block=previous_block),
            status="Error: rejected" if failed else "inBlock",
            block=block,
            failed=failed,
        )

    return _factory


@pytest.fixture
def write_event(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write a push event document and return its path."""

    def _factory(commit_ids: list[str], repo_name: str = REPO) -> Path:
        path = tmp_dir / "event.json"
        document = {
            "ref": REF,
            "repository": {"name": repo_name, "full_name": f"octo/{repo_name}"},
            "commits": [{"id": cid, "message": f"commit {cid}"} for cid in commit_ids],
            "pusher": {"name": "octo"},
        }
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _factory


@pytest.fixture
def make_config(log_path: Path, tmp_dir: Path) -> Callable[..., NotaryConfig]:
    """Factory fixture: a NotaryConfig that ignores the ambient environment file."""

    def _factory(**overrides: Any) -> NotaryConfig:
        defaults: dict[str, Any] = {
            "log_filename": log_path,
            "commit_key_secret": "//Alice",
            "github_event_path": tmp_dir / "event.json",
            "github_ref": REF,
        }
        defaults.update(overrides)
        return NotaryConfig(_env_file=None, **defaults)

    return _factory


@pytest.fixture
def tx() -> type[EventFactory]:
    """Event builders: ``tx.status``, ``tx.best_block``, ``tx.error``, ``tx.complete``."""
    return EventFactory


@pytest.fixture
def make_client() -> Callable[..., FakeLedgerClient]:
    """Factory fixture: a FakeLedgerClient replaying the given events."""

    def _factory(*events: TxEvent) -> FakeLedgerClient:
        return FakeLedgerClient(events)

    return _factory
