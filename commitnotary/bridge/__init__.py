"""Bridge layer between commitnotary and the external ledger.

Modules
-------
crypto_bridge
    Derives the sr25519 signing keypair from a secret URI and exposes
    sign / verify helpers, via ``substrateinterface.Keypair``.
ledger_client
    ``LedgerClient`` protocol plus the ``substrateinterface``-backed client
    that submits the remark and reports status events.
"""
