"""Hashing utilities for raffle commitments.

Both commitments must be bit-identical to what the contract recomputes at
draw time, so the encodings below follow Solidity exactly:

    participantsHash = keccak256(abi.encodePacked(address[] participants))
    secretCommitment = keccak256(bytes(secret))
"""

from __future__ import annotations

import secrets
from typing import Any, Sequence

from web3 import Web3

from onchain_raffle.protocol.errors import InputError

SECRET_BYTES = 16


def keccak256(data: str | bytes) -> str:
    """Compute Keccak-256 of data; str input is UTF-8 encoded.

    Returns:
        0x-prefixed hex digest (66 chars).
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return "0x" + bytes(Web3.keccak(data)).hex()


def encode_participants(addresses: Sequence[str]) -> bytes:
    """Packed encoding of an address[]: each element left-padded to 32 bytes.

    Order is preserved; addresses are never sorted.
    """
    out = bytearray()
    for address in addresses:
        raw = bytes.fromhex(Web3.to_checksum_address(address)[2:])
        out += raw.rjust(32, b"\x00")
    return bytes(out)


def hash_participants(participants: Any) -> str:
    """Commitment over the ordered participant list.

    Raises:
        InputError: If there are no participants.
    """
    addresses = list(getattr(participants, "addresses", participants))
    if not addresses:
        msg = "Cannot commit to an empty participant list"
        raise InputError(msg)
    return keccak256(encode_participants(addresses))


def hash_secret(secret: str | None) -> str:
    """Commitment over the organizer's secret.

    Raises:
        InputError: If the secret is empty or unset.
    """
    if not secret:
        msg = "Secret is required"
        raise InputError(msg)
    return keccak256(secret)


def generate_secret() -> str:
    """Fresh random secret: 16 random bytes as 32 lowercase hex chars."""
    return secrets.token_hex(SECRET_BYTES)
