"""JSON-file Log Store: whole-document read-modify-write.

Design:
- ``read()`` never fails.  A missing, unreadable or non-array document means
  "start a new log"; a broken log must never block a new anchoring attempt.
  Entries that fail validation are skipped one by one with a warning, so the
  valid history around them survives.
- ``write()`` rewrites the full sequence (2-space indent, stable field order)
  through a sibling temp file and ``os.replace``.  A failed write is logged
  and reported through the return value, never raised: the outcome it was
  recording has already been decided.
- Single writer.  No file locking; one invocation runs at a time.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from commitnotary.models.log import LogEntry

logger = logging.getLogger(__name__)

_LOG_ADAPTER = TypeAdapter(list[LogEntry])
_ENTRY_ADAPTER = TypeAdapter(LogEntry)


class LogUnreadable(RuntimeError):
    """The persisted log is missing or malformed.  Absorbed by ``read()``."""


class LogWriteFailed(RuntimeError):
    """Persisting the log failed.  Absorbed by ``write()``."""


class LogStore:
    """Persists the ordered ``LogEntry`` sequence as one JSON document.

    Parameters
    ----------
    path:
        Location of the JSON log file.  Parent directories are created on
        first write.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read(self) -> list[LogEntry]:
        """Load the log, substituting an empty one for any failure."""
        try:
            log = self._load()
        except LogUnreadable as exc:
            logger.debug("Log unreadable: %s", exc)
            log = []

        if log:
            logger.info("Found previous log. Appending.")
        else:
            logger.warning("Previous log not found or invalid. Starting a new one.")
        return log

    def _load(self) -> list[LogEntry]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise LogUnreadable(f"cannot read {self._path}: {exc}") from exc

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise LogUnreadable(f"invalid JSON in {self._path}: {exc}") from exc

        if not isinstance(document, list):
            raise LogUnreadable(
                f"{self._path} holds a {type(document).__name__}, expected an array"
            )

        log: list[LogEntry] = []
        for index, item in enumerate(document):
            try:
                log.append(_ENTRY_ADAPTER.validate_python(item))
            except ValidationError as exc:
                logger.warning(
                    "Skipping invalid log entry %d in %s; it will not be kept on the "
                    "next write: %s",
                    index,
                    self._path,
                    exc,
                )
        return log

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def write(self, log: list[LogEntry]) -> bool:
        """Overwrite the persisted log with *log*.

        Returns ``True`` on success, ``False`` if the write failed (the
        error is logged).
        """
        try:
            self._dump(log)
        except LogWriteFailed as exc:
            logger.error("%s", exc)
            return False
        logger.info("New log written.")
        return True

    def _dump(self, log: list[LogEntry]) -> None:
        document = _LOG_ADAPTER.dump_python(log, mode="json")
        text = json.dumps(document, indent=2, ensure_ascii=False)
        tmp_path = self._path.with_name(f".{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise LogWriteFailed(f"cannot write {self._path}: {exc}") from exc
