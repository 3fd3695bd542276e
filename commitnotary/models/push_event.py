"""The subset of a GitHub ``push`` webhook payload that gets anchored."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class Repository(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class Commit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str


class PushEvent(BaseModel):
    """Repository name plus commits in delivery order (oldest first)."""

    model_config = ConfigDict(extra="ignore")

    repository: Repository
    commits: list[Commit] = []

    @property
    def commit_ids(self) -> list[str]:
        return [commit.id for commit in self.commits]


def load_push_event(path: Path) -> PushEvent:
    """Read and validate the event document at *path*.

    Errors propagate: without an event there is nothing to anchor.
    """
    return PushEvent.model_validate(json.loads(Path(path).read_text(encoding="utf-8")))
