"""Raffle client: create, draw and look up raffles against the contract.

Lifecycle:
    UNCONFIGURED -> CONNECTED -> CREATED -> DRAWN

Lookups are a separate read-only path, available at any time, that never
touches the lifecycle fields.
"""

from __future__ import annotations

import logging
from typing import Any

from onchain_raffle.client.network import ensure_network
from onchain_raffle.client.reconciler import TransactionReconciler
from onchain_raffle.client.session import Session, SessionState
from onchain_raffle.crypto.hashing import generate_secret
from onchain_raffle.models.commit_reveal import RaffleCommitments, verify_reveal
from onchain_raffle.models.participants import ParticipantSet, coerce_participants
from onchain_raffle.models.raffle import CreateResult, DrawResult, RaffleRecord, WinnerList
from onchain_raffle.protocol.contract import (
    FN_CREATE_RAFFLE,
    FN_DRAW,
    FN_GET_WINNERS,
    MAX_RAFFLE_ID,
    MAX_WINNERS,
    MONAD_TESTNET,
    NetworkDescriptor,
)
from onchain_raffle.protocol.errors import (
    ChainCallError,
    ErrorKind,
    InputError,
    RaffleClientError,
    WalletError,
    error_message,
)
from onchain_raffle.protocol.provider import ChainProvider

logger = logging.getLogger(__name__)

ParticipantSource = str | ParticipantSet | list[str] | tuple[str, ...]


def parse_raffle_id(value: Any) -> int:
    """Parse a raffle identifier as a non-negative integer.

    Accepts ints and decimal strings (surrounding whitespace ignored).

    Raises:
        InputError: For anything else, including bools, floats, negatives
            and values beyond uint256.
    """
    if isinstance(value, bool):
        msg = f"Invalid raffle ID: {value!r}"
        raise InputError(msg)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        parsed = int(value.strip())
    else:
        msg = f"Invalid raffle ID: {value!r}"
        raise InputError(msg)
    if not 0 <= parsed <= MAX_RAFFLE_ID:
        msg = f"Raffle ID must be between 0 and 2**256-1, got {value!r}"
        raise InputError(msg)
    return parsed


def parse_winner_count(value: Any) -> int:
    """Parse the requested number of winners (uint32, at least 1)."""
    if isinstance(value, bool):
        msg = f"Invalid number of winners: {value!r}"
        raise InputError(msg)
    try:
        count = int(value.strip()) if isinstance(value, str) else value
    except ValueError as exc:
        msg = f"Invalid number of winners: {value!r}"
        raise InputError(msg) from exc
    if not isinstance(count, int) or not 1 <= count <= MAX_WINNERS:
        msg = f"Number of winners must be between 1 and {MAX_WINNERS}, got {value!r}"
        raise InputError(msg)
    return count


def _require_participants(source: ParticipantSource) -> ParticipantSet:
    participants = coerce_participants(source)
    if participants.is_empty:
        msg = "Participant list is empty"
        raise InputError(msg)
    return participants


class RaffleClient:
    """Orchestrates the commit-reveal raffle flow over a ChainProvider.

    Write operations (connect, create, draw) run one at a time under the
    session's in-flight guard; nothing is retried automatically.
    """

    def __init__(
        self,
        provider: ChainProvider,
        network: NetworkDescriptor = MONAD_TESTNET,
        session: Session | None = None,
    ) -> None:
        self.provider = provider
        self.network = network
        self.session = session if session is not None else Session()
        self.reconciler = TransactionReconciler(provider)

    # ------------------------------------------------------------------
    # Connection / network
    # ------------------------------------------------------------------

    async def ensure_network(self) -> int:
        chain_id = await ensure_network(self.provider, self.network)
        self.session.chain_id = chain_id
        return chain_id

    async def connect(self) -> str:
        """Switch to the raffle network and resolve the signer account."""
        with self.session.operation("connect"):
            self.session.status_message = "Connecting wallet..."
            try:
                await self.ensure_network()
                try:
                    account = await self.provider.account()
                except RaffleClientError:
                    raise
                except Exception as exc:
                    raise WalletError.from_exception(exc) from exc
                if not account:
                    msg = "No wallet account available"
                    raise WalletError(msg)
            except RaffleClientError as exc:
                self.session.status_message = f"Connection failed: {exc.detail}"
                raise

            self.session.account = account
            if self.session.state is SessionState.UNCONFIGURED:
                self.session.state = SessionState.CONNECTED
            self.session.status_message = "Wallet connected"
            logger.info("Connected as %s on chain %s", account, self.session.chain_id)
            return account

    def _require_signer(self) -> None:
        if not self.session.is_connected:
            msg = "Connect a wallet first"
            raise WalletError(msg)

    def new_secret(self) -> str:
        """Replace the session secret (only meaningful before create)."""
        self.session.secret = generate_secret()
        return self.session.secret

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create(
        self,
        name: str,
        num_winners: int | str,
        participants: ParticipantSource,
        participants_uri: str = "",
        secret: str | None = None,
    ) -> CreateResult:
        """Commit to the participant list and secret on-chain.

        An unknown identifier after a confirmed transaction is reported
        through ``CreateResult.id_known``, not raised.
        """
        with self.session.operation("create"):
            secret = self.session.secret if secret is None else secret
            try:
                self._require_signer()
                count = parse_winner_count(num_winners)
                participant_set = _require_participants(participants)
                commitments = RaffleCommitments.compute(participant_set, secret)
                await self.ensure_network()
                self.session.status_message = "Sending create transaction..."
                outcome = await self.reconciler.submit(
                    FN_CREATE_RAFFLE,
                    [
                        name.strip(),
                        count,
                        commitments.participants_hash,
                        participants_uri.strip(),
                        commitments.secret_commitment,
                    ],
                )
            except RaffleClientError as exc:
                self.session.status_message = f"Create failed: {exc.detail}"
                raise

            self.session.tx_hash = outcome.tx_hash
            resolution = await self.reconciler.extract_identifier(outcome)

            record = RaffleRecord(
                name=name.strip(),
                num_winners=count,
                participants_hash=commitments.participants_hash,
                participants_uri=participants_uri.strip(),
                secret_commitment=commitments.secret_commitment,
                raffle_id=resolution.raffle_id,
                organizer=self.session.account,
                participant_count=len(participant_set),
                tx_hash=outcome.tx_hash,
            )
            self.session.secret = secret
            self.session.record = record
            self.session.raffle_id = resolution.raffle_id
            self.session.winners = None
            self.session.state = SessionState.CREATED
            if resolution.raffle_id is not None:
                self.session.records[resolution.raffle_id] = record
                self.session.status_message = f"Raffle created (ID {resolution.raffle_id})"
            else:
                self.session.status_message = (
                    f"Raffle created in tx {outcome.tx_hash}, but its ID is unknown; look it up manually"
                )
            logger.info(self.session.status_message)
            return CreateResult(record=record, tx_hash=outcome.tx_hash, id_source=resolution.source)

    # ------------------------------------------------------------------
    # Draw
    # ------------------------------------------------------------------

    def _check_local_commitments(self, raffle_id: int, participants: ParticipantSet, secret: str) -> None:
        record = self.session.records.get(raffle_id)
        if record is None:
            return
        commitments = RaffleCommitments(
            participants_hash=record.participants_hash,
            secret_commitment=record.secret_commitment,
        )
        if not verify_reveal(commitments, participants, secret):
            logger.warning(
                "Reveal for raffle %d does not match the commitments recorded at creation; "
                "the contract will reject it",
                raffle_id,
            )

    async def draw(
        self,
        raffle_id: int | str,
        secret: str | None,
        participants: ParticipantSource,
    ) -> DrawResult:
        """Reveal the secret and participant list, then read the winners.

        The participant order must be the one hashed at creation. A contract
        rejection is raised as ChainCallError with its original text.
        """
        with self.session.operation("draw"):
            try:
                self._require_signer()
                rid = parse_raffle_id(raffle_id)
                participant_set = _require_participants(participants)
                if not secret:
                    msg = "Secret is required to draw"
                    raise InputError(msg)
                self._check_local_commitments(rid, participant_set, secret)
                await self.ensure_network()
                self.session.status_message = "Drawing on-chain..."
                outcome = await self.reconciler.submit(
                    FN_DRAW,
                    [rid, secret, list(participant_set.addresses)],
                )
            except RaffleClientError as exc:
                self.session.status_message = f"Draw failed: {exc.detail}"
                raise

            # The reveal is confirmed from here on
            self.session.tx_hash = outcome.tx_hash
            self.session.raffle_id = rid
            self.session.state = SessionState.DRAWN

            try:
                raw = await self.provider.call(FN_GET_WINNERS, [rid])
            except Exception as exc:
                err = ChainCallError.from_exception(exc)
                self.session.winners = None
                self.session.status_message = (
                    f"Draw confirmed in tx {outcome.tx_hash}, but reading winners failed: {err.detail}"
                )
                raise err from exc

            winners = WinnerList.from_query(rid, list(raw or []))
            self.session.winners = winners
            self.session.status_message = f"Draw complete with {len(winners.winners)} winner(s)."
            logger.info("Raffle %d drawn in tx %s: %d winner(s)", rid, outcome.tx_hash, len(winners.winners))
            return DrawResult(raffle_id=rid, tx_hash=outcome.tx_hash, winners=winners)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    async def lookup_winners(self, raffle_id: int | str) -> WinnerList:
        """Read the recorded winners for ``raffle_id``.

        Never raises for bad input or query failures; those come back with
        ``LookupStatus.ERROR`` so they stay distinct from "not drawn yet".
        """
        with self.session.lookup():
            try:
                rid = parse_raffle_id(raffle_id)
            except InputError as exc:
                result = WinnerList.failed(None, ErrorKind.INPUT, exc.detail)
            else:
                try:
                    raw = await self.provider.call(FN_GET_WINNERS, [rid])
                except Exception as exc:
                    logger.warning("getWinners(%d) failed: %s", rid, error_message(exc))
                    result = WinnerList.failed(rid, ErrorKind.CHAIN_CALL, error_message(exc))
                else:
                    result = WinnerList.from_query(rid, list(raw or []))
            self.session.last_lookup = result
            return result
