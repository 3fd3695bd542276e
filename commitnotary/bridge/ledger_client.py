"""Ledger client — submits the remark and reports its status events.

Bridge boundary
---------------
``LedgerClient`` is the protocol the pipeline depends on.  The production
backend, ``SubstrateLedgerClient``, uses ``substrateinterface`` to compose a
``System.remark`` call, sign it, and watch it through the
``author_submitAndWatchExtrinsic`` subscription.

Subscription statuses map onto ``TxEvent`` kinds:

- ``future``, ``ready``, ``broadcast``, ``retracted``, ``finalityTimeout``
  are non-terminal ``STATUS`` events.
- ``inBlock`` (or ``finalized`` if seen first) is the terminal
  ``BEST_BLOCK`` event.
- ``invalid``, ``dropped``, ``usurped`` and any exception raised while
  connecting, encoding, signing or submitting are the terminal ``ERROR``
  event.

The stream always ends with a ``COMPLETE`` event.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

from substrateinterface import Keypair, SubstrateInterface

from commitnotary.models.events import TxEvent, TxEventKind

logger = logging.getLogger(__name__)

_SUCCESS_STATUSES = frozenset({"inBlock", "finalized"})
_ERROR_STATUSES = frozenset({"invalid", "dropped", "usurped"})


@runtime_checkable
class LedgerClient(Protocol):
    """Protocol for anchoring backends."""

    def submit_and_watch(self, remark: bytes) -> Iterator[TxEvent]:
        """Sign and submit *remark*, yielding status events until completion."""
        ...

    def close(self) -> None:
        """Tear down the connection."""
        ...


def status_event(status: Any, tx_hash: str) -> TxEvent:
    """Translate one ``TransactionStatus`` value into a ``TxEvent``."""
    if isinstance(status, dict):
        name, detail = next(iter(status.items()), ("unknown", None))
    else:
        name, detail = str(status), None

    if name in _SUCCESS_STATUSES:
        return TxEvent(
            kind=TxEventKind.BEST_BLOCK,
            type=name,
            tx_hash=tx_hash,
            block_hash=str(detail or ""),
        )
    if name in _ERROR_STATUSES:
        return TxEvent(
            kind=TxEventKind.ERROR,
            type=name,
            tx_hash=tx_hash,
            error=f"Transaction {name}" + (f": {detail}" if detail else ""),
        )
    return TxEvent(kind=TxEventKind.STATUS, type=name, tx_hash=tx_hash)


class SubstrateLedgerClient:
    """Anchors remarks on a Substrate chain.

    Parameters
    ----------
    url:
        Websocket RPC endpoint of a ledger node.
    keypair:
        Signing keypair, see ``crypto_bridge.derive_keypair``.
    timeout:
        Socket timeout in seconds for the connection.  ``None`` waits
        indefinitely for the next status.
    substrate:
        Pre-built ``SubstrateInterface``; opened lazily from *url* if omitted.
    """

    def __init__(
        self,
        url: str,
        keypair: Keypair,
        *,
        timeout: float | None = None,
        substrate: SubstrateInterface | None = None,
    ) -> None:
        self._url = url
        self._keypair = keypair
        self._timeout = timeout
        self._substrate = substrate

    def _connect(self) -> SubstrateInterface:
        if self._substrate is None:
            ws_options = {"timeout": self._timeout} if self._timeout else None
            logger.debug("Connecting to %s", self._url)
            self._substrate = SubstrateInterface(url=self._url, ws_options=ws_options)
        return self._substrate

    def submit_and_watch(self, remark: bytes) -> Iterator[TxEvent]:
        events: list[TxEvent] = []
        try:
            substrate = self._connect()
            call = substrate.compose_call(
                call_module="System",
                call_function="remark",
                call_params={"remark": remark},
            )
            extrinsic = substrate.create_signed_extrinsic(call=call, keypair=self._keypair)
            tx_hash = "0x" + extrinsic.extrinsic_hash.hex()
            logger.info("Submitting %s as %s", tx_hash, self._keypair.ss58_address)

            def _on_status(message: dict[str, Any], update_nr: int, subscription_id: str):
                event = status_event(message["params"]["result"], tx_hash)
                logger.debug("Subscription %s update %d: %s", subscription_id, update_nr, event.type)
                events.append(event)
                # A non-None return ends the subscription.
                return event if event.is_terminal else None

            substrate.rpc_request(
                "author_submitAndWatchExtrinsic",
                [str(extrinsic.data)],
                result_handler=_on_status,
            )
        except Exception as exc:  # noqa: BLE001
            name = type(exc).__name__
            events.append(
                TxEvent(
                    kind=TxEventKind.ERROR,
                    type=name,
                    error=f"{name}: {exc}" if str(exc) else name,
                )
            )

        yield from events
        yield TxEvent(kind=TxEventKind.COMPLETE, type="complete")

    def close(self) -> None:
        if self._substrate is not None:
            self._substrate.close()
            self._substrate = None
