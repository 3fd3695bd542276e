"""Anchoring pipeline: one push event per invocation, end to end.

Log Store -> Reconciler -> Payload Builder -> Ledger Client ->
Outcome Recorder -> Log Store.

The pipeline takes an explicit ``NotaryConfig`` and a client factory, so
the whole flow can be driven with a fake ledger in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from commitnotary.bridge.crypto_bridge import derive_keypair, key_fingerprint
from commitnotary.bridge.ledger_client import LedgerClient, SubstrateLedgerClient
from commitnotary.config import NotaryConfig
from commitnotary.core.hasher import payload_digest, remark_bytes
from commitnotary.core.log_store import LogStore
from commitnotary.core.payload_builder import build_payload, now_millis
from commitnotary.core.reconciler import compute_pending_commit_ids
from commitnotary.core.recorder import OutcomeRecorder, SubmissionFailed, fold_events
from commitnotary.models.events import AnchorOutcome, OutcomeKind
from commitnotary.models.log import LogEntry, TransactionPayload
from commitnotary.models.push_event import load_push_event

logger = logging.getLogger(__name__)

ClientFactory = Callable[[NotaryConfig], LedgerClient]


def substrate_client_factory(config: NotaryConfig) -> LedgerClient:
    """Default factory: derive the signer and open a Substrate client."""
    keypair = derive_keypair(config.commit_key_secret.get_secret_value())
    logger.info(
        "Signing as %s (key %s)",
        keypair.ss58_address,
        key_fingerprint(keypair.public_key.hex()),
    )
    return SubstrateLedgerClient(config.rpc_url, keypair, timeout=config.submit_timeout)


class AnchorPipeline:
    """Runs a single anchoring attempt.

    Parameters
    ----------
    config:
        Validated process configuration.
    client_factory:
        Builds the ledger client.  Defaults to ``substrate_client_factory``.
    clock:
        Millisecond wall clock, read once per invocation.
    """

    def __init__(
        self,
        config: NotaryConfig,
        *,
        client_factory: ClientFactory = substrate_client_factory,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self.config = config
        self.store = LogStore(config.log_filename)
        self._client_factory = client_factory
        self._clock = clock

    def prepare(self) -> tuple[list[LogEntry], TransactionPayload]:
        """Read the log and push event, and build the chained payload."""
        log = self.store.read()
        event = load_push_event(self.config.github_event_path)
        pending = compute_pending_commit_ids(log, event.commit_ids)
        payload = build_payload(
            event.repository.name,
            self.config.github_ref,
            self._clock(),
            pending,
            log,
        )
        logger.debug(
            "Payload %s: %d commit(s), previous block %r",
            payload_digest(payload),
            len(payload.commit_ids),
            payload.previous_block,
        )
        return log, payload

    def preview(self) -> TransactionPayload:
        """Build the payload the next run would anchor, without submitting."""
        _, payload = self.prepare()
        return payload

    def run(self) -> AnchorOutcome:
        """Anchor the pending commits and record the outcome.

        Raises ``SubmissionFailed`` after the failed entry has been written.
        """
        log, payload = self.prepare()
        recorder = OutcomeRecorder(self.store, log)

        client, outcome = self._submit(payload)
        try:
            entry = recorder.record(payload, outcome)
        finally:
            if client is not None:
                _close(client)

        if outcome.kind == OutcomeKind.BEST_BLOCK:
            logger.info("Transaction is now in a best block: %s", outcome.block)
        elif entry is not None and entry.failed:
            logger.error("%s", entry.status)
            raise SubmissionFailed(entry)
        return outcome

    def _submit(
        self, payload: TransactionPayload
    ) -> tuple[LedgerClient | None, AnchorOutcome]:
        """Open a client and fold its events into an outcome.

        Any exception raised while deriving keys, connecting, encoding or
        signing ends the attempt as an error outcome.  The client is returned
        still open and is closed once the outcome has been recorded.
        """
        client: LedgerClient | None = None
        try:
            client = self._client_factory(self.config)
            logger.info("Submitting...")
            outcome = fold_events(client.submit_and_watch(remark_bytes(payload)))
        except Exception as exc:  # noqa: BLE001
            outcome = AnchorOutcome.from_error(exc)
        return client, outcome


def _close(client: LedgerClient) -> None:
    try:
        client.close()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Closing the ledger client failed: %s", exc)
