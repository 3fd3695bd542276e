"""Crypto bridge — sr25519 key derivation via substrate-interface.

Bridge boundary
---------------
Secret URIs follow the Substrate convention::

    <phrase or 0x seed>[//hard][/soft]...[///password]

Without a password the URI is handed to ``Keypair.create_from_uri``
unchanged.  With a password the BIP39 mini-secret is derived with the
password as salt (``bip39_to_mini_secret``) and the path junctions are
applied with the sr25519 bindings, matching Polkadot-JS key extraction.
"""

from __future__ import annotations

import hashlib
import logging

import sr25519
from bip39 import bip39_to_mini_secret
from substrateinterface import Keypair, KeypairType
from substrateinterface.key import extract_derive_path

logger = logging.getLogger(__name__)

_PASSWORD_SEPARATOR = "///"
SS58_FORMAT = 42  # generic Substrate address prefix


def split_suri(suri: str) -> tuple[str, str, str]:
    """Split a secret URI into ``(phrase, path, password)``."""
    body, _, password = suri.partition(_PASSWORD_SEPARATOR)
    slash = body.find("/")
    if slash == -1:
        return body, "", password
    return body[:slash], body[slash:], password


def derive_keypair(suri: str) -> Keypair:
    """Derive the sr25519 signing keypair for *suri*.

    Raises ``ValueError`` for malformed phrases or paths.
    """
    phrase, path, password = split_suri(suri)
    if not password:
        return Keypair.create_from_uri(
            suri, ss58_format=SS58_FORMAT, crypto_type=KeypairType.SR25519
        )

    if not phrase or phrase.startswith("0x"):
        raise ValueError("a password requires a mnemonic phrase")

    mini_secret = bytes(bip39_to_mini_secret(phrase, password, "en"))
    public_key, private_key = sr25519.pair_from_seed(mini_secret)
    for junction in extract_derive_path(path):
        derive = sr25519.hard_derive_keypair if junction.is_hard else sr25519.derive_keypair
        _, public_key, private_key = derive(
            (junction.chain_code, public_key, private_key), b""
        )

    logger.debug("Derived password-protected keypair (path %r).", path)
    return Keypair(
        public_key=public_key,
        private_key=private_key,
        crypto_type=KeypairType.SR25519,
        ss58_format=SS58_FORMAT,
    )


def key_fingerprint(public_key: str) -> str:
    """First 16 hex characters of SHA-256 over the public key string.

    Identifies which signer anchored an entry without printing the key.
    """
    if not public_key:
        return ""
    return hashlib.sha256(public_key.encode("utf-8")).hexdigest()[:16]
