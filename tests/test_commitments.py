"""Tests for commitment hashing and the commit-reveal check."""

import pytest
from web3 import Web3

from conftest import ADDR_A, ADDR_B, ADDR_C
from onchain_raffle.crypto.hashing import (
    encode_participants,
    generate_secret,
    hash_participants,
    hash_secret,
    keccak256,
)
from onchain_raffle.models.commit_reveal import RaffleCommitments, verify_reveal
from onchain_raffle.models.participants import ParticipantSet
from onchain_raffle.protocol.errors import InputError


class TestKeccak:
    def test_known_vectors(self):
        assert keccak256("") == "0xc5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        assert keccak256("abc") == "0x4e03657aea45a94fc7d47ba826c8d667c0d1e6e33a64a036ec44f58fa12d6c45"

    def test_str_and_bytes_agree(self):
        assert keccak256("raffle") == keccak256(b"raffle")


class TestHashParticipants:
    def test_packed_encoding_pads_each_address(self):
        encoded = encode_participants([ADDR_A, ADDR_B])
        assert len(encoded) == 64
        assert encoded[:12] == b"\x00" * 12
        assert encoded[12:32] == bytes.fromhex(ADDR_A[2:])
        assert encoded[44:64] == bytes.fromhex(ADDR_B[2:])

    def test_matches_solidity_keccak(self):
        expected = Web3.solidity_keccak(["address[]"], [[ADDR_A, ADDR_B, ADDR_C]])
        assert hash_participants([ADDR_A, ADDR_B, ADDR_C]) == "0x" + bytes(expected).hex()

    def test_deterministic(self):
        pset = ParticipantSet(addresses=[ADDR_A, ADDR_B, ADDR_C])
        assert hash_participants(pset) == hash_participants(pset)
        assert hash_participants(pset) == hash_participants([ADDR_A, ADDR_B, ADDR_C])

    def test_order_sensitive(self):
        assert hash_participants([ADDR_A, ADDR_B]) != hash_participants([ADDR_B, ADDR_A])

    def test_case_insensitive_input(self):
        assert hash_participants([ADDR_A.lower()]) == hash_participants([ADDR_A])

    def test_empty_rejected(self):
        with pytest.raises(InputError):
            hash_participants(ParticipantSet())
        with pytest.raises(InputError):
            hash_participants([])

    def test_fixed_width(self):
        assert len(hash_participants([ADDR_A])) == 66


class TestHashSecret:
    def test_utf8_keccak(self):
        assert hash_secret("abc") == keccak256(b"abc")
        assert hash_secret("sorteio-é") == keccak256("sorteio-é".encode("utf-8"))

    def test_deterministic_and_distinct(self):
        assert hash_secret("s1") == hash_secret("s1")
        assert hash_secret("s1") != hash_secret("s2")

    @pytest.mark.parametrize("secret", ["", None])
    def test_empty_rejected(self, secret):
        with pytest.raises(InputError):
            hash_secret(secret)

    def test_generate_secret(self):
        s1, s2 = generate_secret(), generate_secret()
        assert len(s1) == 32
        int(s1, 16)
        assert s1 != s2


class TestRaffleCommitments:
    def test_compute(self):
        c = RaffleCommitments.compute([ADDR_A, ADDR_B], "secret")
        assert c.participants_hash == hash_participants([ADDR_A, ADDR_B])
        assert c.secret_commitment == hash_secret("secret")

    def test_verify_reveal(self):
        c = RaffleCommitments.compute([ADDR_A, ADDR_B], "secret")
        assert verify_reveal(c, [ADDR_A, ADDR_B], "secret")
        assert not verify_reveal(c, [ADDR_B, ADDR_A], "secret")
        assert not verify_reveal(c, [ADDR_A, ADDR_B], "other")
        assert not verify_reveal(c, [], "secret")
