"""Process configuration — env-driven, validated once at process entry.

The four CI-provided inputs are plain environment variables (as GitHub
Actions sets them); tuning knobs use the ``NOTARY_`` prefix.  Everything can
also be supplied from a ``.env`` file in the working directory.

Example::

    export LOG_FILENAME=notary-log.json
    export COMMIT_KEY_SECRET="<mnemonic>//notary"
    export GITHUB_EVENT_PATH=/github/workflow/event.json
    export GITHUB_REF=refs/heads/main
    export NOTARY_SUBMIT_TIMEOUT=120
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RPC_URL = "wss://kusama-asset-hub-rpc.polkadot.io"
DEFAULT_EXPLORER_URL = "https://assethub-kusama.subscan.io/extrinsic/"


class ConfigurationMissing(RuntimeError):
    """Raised when a required environment input is absent at startup."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Required variable(s) not populated: {', '.join(missing)}")


class NotaryConfig(BaseSettings):
    """Settings for one anchoring invocation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required, provided by the CI environment
    log_filename: Path
    commit_key_secret: SecretStr  # secret URI: phrase[//hard][/soft][///password]
    github_event_path: Path
    github_ref: str

    # Ledger endpoint
    rpc_url: str = Field(
        DEFAULT_RPC_URL, validation_alias=AliasChoices("NOTARY_RPC_URL", "rpc_url")
    )
    explorer_url: str = Field(
        DEFAULT_EXPLORER_URL,
        validation_alias=AliasChoices("NOTARY_EXPLORER_URL", "explorer_url"),
    )

    # None waits indefinitely for a terminal event
    submit_timeout: float | None = Field(
        None,
        validation_alias=AliasChoices("NOTARY_SUBMIT_TIMEOUT", "submit_timeout"),
    )

    log_level: str = Field(
        "INFO", validation_alias=AliasChoices("NOTARY_LOG_LEVEL", "log_level")
    )

    def explorer_link(self, tx_hash: str) -> str:
        return f"{self.explorer_url}{tx_hash}"


def load_config(**overrides: Any) -> NotaryConfig:
    """Build and validate the configuration.

    Missing required inputs surface as ``ConfigurationMissing`` naming the
    environment variables; any other validation problem propagates as-is.
    """
    try:
        return NotaryConfig(**overrides)
    except ValidationError as exc:
        missing = [
            str(err["loc"][0]).upper()
            for err in exc.errors()
            if err["type"] == "missing" and err["loc"]
        ]
        if missing:
            raise ConfigurationMissing(missing) from exc
        raise
