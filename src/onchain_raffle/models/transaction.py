"""Transactions — confirmed outcomes of state-changing contract calls."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EventRecord(BaseModel):
    """A decoded event log emitted while a transaction executed."""

    name: str = Field(description="Event name, e.g. RaffleCreated")
    args: dict[str, Any] = Field(default_factory=dict)
    address: str = Field(default="", description="Emitting contract address")
    log_index: int | None = None


class TransactionOutcome(BaseModel):
    """Result of a submitted call once the chain has confirmed it.

    Created on submission, finalized on confirmation and discarded after
    reconciliation; the client never persists these.
    """

    tx_hash: str = Field(description="Transaction hash (0x-prefixed hex)")
    success: bool = Field(default=True, description="Receipt status == 1")
    block_number: int | None = None
    events: list[EventRecord] = Field(default_factory=list)

    def find_events(self, name: str) -> list[EventRecord]:
        return [e for e in self.events if e.name == name]


class IdentifierSource(str, Enum):
    """Where a newly created raffle's identifier came from."""

    EVENT = "event"      # Read from the RaffleCreated event (authoritative)
    COUNTER = "counter"  # nextId() - 1 heuristic, racy
    UNKNOWN = "unknown"  # Neither path produced an identifier


class IdentifierResolution(BaseModel):
    raffle_id: int | None = None
    source: IdentifierSource = IdentifierSource.UNKNOWN

    @property
    def is_known(self) -> bool:
        return self.raffle_id is not None
