"""Remark encoding and digest helpers.

The remark body is the compact JSON array form of the payload, identical to
what ``JSON.stringify`` would produce, so anchored remarks can be decoded
and compared against log entries byte for byte.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from commitnotary.models.log import TransactionPayload


def compact_json_bytes(obj: Any) -> bytes:
    """Compact JSON bytes: no whitespace, key order preserved, raw UTF-8."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def remark_bytes(payload: TransactionPayload) -> bytes:
    """Encode *payload* as the bytes embedded in the remark transaction."""
    return compact_json_bytes(payload.model_dump(mode="json"))


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def payload_digest(payload: TransactionPayload) -> str:
    """Short, stable identifier for a payload in logs and tables."""
    return sha256_hex(remark_bytes(payload))[:16]
