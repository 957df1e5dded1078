"""Session state for one organizer's raffle lifecycle.

Everything mutable lives here instead of in module globals so the client can
be driven without a live wallet.
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field

from onchain_raffle.crypto.hashing import generate_secret
from onchain_raffle.models.raffle import RaffleRecord, WinnerList
from onchain_raffle.protocol.errors import InputError


class SessionState(str, Enum):
    """Lifecycle of a raffle from the client's point of view."""

    UNCONFIGURED = "unconfigured"  # No signer yet
    CONNECTED = "connected"        # Signer on the right network
    CREATED = "created"            # createRaffle confirmed
    DRAWN = "drawn"                # draw confirmed, winners read


class Session(BaseModel):
    """Session fields written by exactly one in-flight operation at a time.

    Lookups run on their own flag and only touch ``last_lookup``.
    """

    state: SessionState = SessionState.UNCONFIGURED
    account: str = ""
    chain_id: int | None = None

    # Held locally until the draw reveals it; never logged
    secret: str = Field(default_factory=generate_secret, repr=False)

    raffle_id: int | None = None
    record: RaffleRecord | None = None
    winners: WinnerList | None = None
    tx_hash: str = ""
    status_message: str = ""

    in_flight: bool = False
    lookup_in_flight: bool = False
    last_lookup: WinnerList | None = None

    records: dict[int, RaffleRecord] = Field(
        default_factory=dict,
        description="Raffles created in this session, by id",
    )

    @property
    def is_connected(self) -> bool:
        return self.state is not SessionState.UNCONFIGURED and bool(self.account)

    @contextmanager
    def operation(self, label: str) -> Iterator[None]:
        """Guard a write operation against re-entry (e.g. double submit)."""
        if self.in_flight:
            msg = f"Cannot start {label}: another operation is in flight"
            raise InputError(msg)
        self.in_flight = True
        try:
            yield
        finally:
            self.in_flight = False

    @contextmanager
    def lookup(self) -> Iterator[None]:
        if self.lookup_in_flight:
            msg = "A lookup is already in flight"
            raise InputError(msg)
        self.lookup_in_flight = True
        try:
            yield
        finally:
            self.lookup_in_flight = False
