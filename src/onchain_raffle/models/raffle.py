"""Raffles — local caches of what the contract reports.

The client owns no chain state. A RaffleRecord is built from the values it
submitted plus the identifier the contract assigned; a WinnerList is
whatever getWinners returned.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from onchain_raffle.models.transaction import IdentifierSource
from onchain_raffle.protocol.errors import ErrorKind


class RaffleRecord(BaseModel):
    """A raffle as created by this client."""

    name: str
    num_winners: int = Field(ge=1)
    participants_hash: str
    participants_uri: str = Field(default="", description="Off-chain pointer to the full list")
    secret_commitment: str
    raffle_id: int | None = Field(default=None, description="Assigned by the contract")
    organizer: str = ""
    participant_count: int = 0
    tx_hash: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CreateResult(BaseModel):
    """Outcome of a create call.

    ``id_known`` False means creation succeeded on-chain but the new id must
    be discovered manually; it is not a failure.
    """

    record: RaffleRecord
    tx_hash: str
    id_source: IdentifierSource

    @property
    def id_known(self) -> bool:
        return self.record.raffle_id is not None

    @property
    def status_kind(self) -> ErrorKind | None:
        return None if self.id_known else ErrorKind.RECONCILIATION_AMBIGUITY


class LookupStatus(str, Enum):
    FOUND = "found"          # Winners recorded
    NOT_DRAWN = "not_drawn"  # Query succeeded, no winners yet
    ERROR = "error"          # Invalid id or query failure


class WinnerList(BaseModel):
    """Ordered winners for a raffle, read-only from the client's side."""

    raffle_id: int | None = None
    winners: list[str] = Field(default_factory=list)
    status: LookupStatus = LookupStatus.NOT_DRAWN
    error_kind: ErrorKind | None = None
    detail: str = ""

    @classmethod
    def from_query(cls, raffle_id: int, winners: list[str]) -> WinnerList:
        winners = [str(w) for w in winners]
        return cls(
            raffle_id=raffle_id,
            winners=winners,
            status=LookupStatus.FOUND if winners else LookupStatus.NOT_DRAWN,
        )

    @classmethod
    def failed(cls, raffle_id: int | None, kind: ErrorKind, detail: str) -> WinnerList:
        return cls(raffle_id=raffle_id, status=LookupStatus.ERROR, error_kind=kind, detail=detail)

    @property
    def message(self) -> str:
        if self.status is LookupStatus.FOUND:
            return f"Found {len(self.winners)} winner(s)."
        if self.status is LookupStatus.NOT_DRAWN:
            return "No winners recorded yet for this ID."
        return self.detail


class DrawResult(BaseModel):
    raffle_id: int
    tx_hash: str
    winners: WinnerList
