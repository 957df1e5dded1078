"""Commit-Reveal scheme for raffle draws.

Prevents the organizer from choosing the outcome after the fact: both the
participant list and a secret are bound on-chain at creation, and the
contract only draws once the revealed values hash to the stored commitments.

Flow:
1. Organizer normalizes the participant list and generates a secret
2. createRaffle stores participantsHash + secretCommitment on-chain
3. Later, draw reveals the secret and the full list (same order)
4. Contract recomputes both hashes; a mismatch reverts the draw
5. Winners are selected and recorded against the raffle id
"""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, Field

from onchain_raffle.crypto.hashing import hash_participants, hash_secret
from onchain_raffle.models.participants import ParticipantSet


class RaffleCommitments(BaseModel):
    """The two commitments stored with a raffle at creation."""

    participants_hash: str = Field(description="keccak256(abi.encodePacked(address[]))")
    secret_commitment: str = Field(description="keccak256(bytes(secret))")

    @classmethod
    def compute(cls, participants: ParticipantSet | Sequence[str], secret: str) -> RaffleCommitments:
        return cls(
            participants_hash=hash_participants(participants),
            secret_commitment=hash_secret(secret),
        )


def verify_reveal(
    commitments: RaffleCommitments,
    participants: ParticipantSet | Sequence[str],
    secret: str,
) -> bool:
    """Check locally that a reveal matches stored commitments.

    Informational only; the contract performs the binding check.
    """
    try:
        revealed = RaffleCommitments.compute(participants, secret)
    except ValueError:
        return False
    return (
        revealed.participants_hash.lower() == commitments.participants_hash.lower()
        and revealed.secret_commitment.lower() == commitments.secret_commitment.lower()
    )
