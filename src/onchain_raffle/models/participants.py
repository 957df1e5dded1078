"""Participant lists — free-form text to a canonical, ordered address set.

Normalization is the first step of the integrity pipeline: the participant
commitment is a hash over exactly this ordered list, so the same text must
always produce the same list and an invalid entry must never be dropped
silently.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from web3 import Web3

from onchain_raffle.protocol.errors import InputError

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"\r?\n|,|;|\s+")
_HEX_ADDRESS = re.compile(r"^(0x)?([0-9a-fA-F]{40})$")


class ParticipantSet(BaseModel):
    """Ordered, duplicate-free sequence of checksummed addresses.

    Order is first-seen order in the source text and is significant: it is
    the order hashed at creation and the order revealed at draw time.
    """

    addresses: list[str] = Field(default_factory=list)

    @field_validator("addresses")
    @classmethod
    def _canonical_addresses(cls, value: list[str]) -> list[str]:
        return check_addresses(value)

    def __len__(self) -> int:
        return len(self.addresses)

    def __contains__(self, address: object) -> bool:
        return address in self.addresses

    @property
    def is_empty(self) -> bool:
        return not self.addresses

    def to_text(self) -> str:
        """One address per line; normalizing this text yields the same set."""
        return "\n".join(self.addresses)


def split_tokens(text: str) -> list[str]:
    """Split on newlines, commas, semicolons or whitespace runs."""
    return [t.strip() for t in _SEPARATORS.split(text) if t and t.strip()]


def parse_address(token: str) -> str:
    """Validate one token and return its EIP-55 checksummed form.

    All-lowercase and all-uppercase hex are accepted as-is; mixed case is
    accepted only if it already carries a valid checksum.

    Raises:
        InputError: If the token is not a syntactically valid address.
    """
    match = _HEX_ADDRESS.match(token.strip())
    if match is None:
        msg = f"Invalid address: {token!r}"
        raise InputError(msg)

    body = match.group(2)
    candidate = "0x" + body
    if body != body.lower() and body != body.upper():
        if not Web3.is_checksum_address(candidate):
            msg = f"Bad address checksum: {token!r}"
            raise InputError(msg)
    return Web3.to_checksum_address(candidate)


def check_addresses(addresses: list[str]) -> list[str]:
    """Checksum an already-split address list, rejecting duplicates.

    Unlike ``normalize_addresses`` this never drops an entry: a repeated
    address (in any casing) is an error.

    Raises:
        InputError: On an invalid or repeated address.
    """
    checked: list[str] = []
    seen: set[str] = set()
    for entry in addresses:
        if not isinstance(entry, str):
            msg = f"Invalid address: {entry!r}"
            raise InputError(msg)
        address = parse_address(entry)
        if address in seen:
            msg = f"Duplicate participant: {address}"
            raise InputError(msg)
        seen.add(address)
        checked.append(address)
    return checked


def normalize_addresses(text: str | None) -> ParticipantSet:
    """Parse raw text into a ParticipantSet.

    Fails atomically: a single invalid token rejects the whole input, since
    a silently shrunk list would change the committed hash. Blank input is
    not an error and yields an empty set.
    """
    if not text:
        return ParticipantSet()

    seen: set[str] = set()
    ordered: list[str] = []
    for token in split_tokens(text):
        address = parse_address(token)
        if address in seen:
            continue
        seen.add(address)
        ordered.append(address)

    logger.debug("Normalized %d unique participant(s)", len(ordered))
    return ParticipantSet(addresses=ordered)


def coerce_participants(source: str | ParticipantSet | list[str] | tuple[str, ...]) -> ParticipantSet:
    """Accept raw text, an existing set, or a sequence of address tokens.

    An existing set is re-checked, since its list may have been mutated
    after validation.
    """
    if isinstance(source, ParticipantSet):
        return ParticipantSet(addresses=check_addresses(source.addresses))
    if isinstance(source, (list, tuple)):
        return normalize_addresses("\n".join(source))
    return normalize_addresses(source)


def load_participants(path: str | Path) -> ParticipantSet:
    """Read a .txt/.csv participant file and normalize its contents."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read participant file {path}: {exc}"
        raise InputError(msg) from exc
    return normalize_addresses(text)
