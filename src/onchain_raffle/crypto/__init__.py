"""Commitment hashing for raffles: keccak256 over Solidity encodings."""

from onchain_raffle.crypto.hashing import (
    encode_participants,
    generate_secret,
    hash_participants,
    hash_secret,
    keccak256,
)

__all__ = [
    "encode_participants",
    "generate_secret",
    "hash_participants",
    "hash_secret",
    "keccak256",
]
