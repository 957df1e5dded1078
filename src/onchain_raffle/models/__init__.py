"""Data models for the raffle client: participants, commitments, raffles, transactions."""

from onchain_raffle.models.participants import (
    ParticipantSet,
    check_addresses,
    load_participants,
    normalize_addresses,
    parse_address,
    split_tokens,
)
from onchain_raffle.models.commit_reveal import RaffleCommitments, verify_reveal
from onchain_raffle.models.raffle import (
    CreateResult,
    DrawResult,
    LookupStatus,
    RaffleRecord,
    WinnerList,
)
from onchain_raffle.models.transaction import (
    EventRecord,
    IdentifierResolution,
    IdentifierSource,
    TransactionOutcome,
)

__all__ = [
    "CreateResult",
    "DrawResult",
    "EventRecord",
    "IdentifierResolution",
    "IdentifierSource",
    "LookupStatus",
    "ParticipantSet",
    "RaffleCommitments",
    "RaffleRecord",
    "TransactionOutcome",
    "WinnerList",
    "check_addresses",
    "load_participants",
    "normalize_addresses",
    "parse_address",
    "split_tokens",
    "verify_reveal",
]
