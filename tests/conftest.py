"""Shared fixtures: an in-memory raffle contract behind the ChainProvider interface."""

from __future__ import annotations

from typing import Any

import pytest

from onchain_raffle.crypto.hashing import hash_participants, hash_secret
from onchain_raffle.models.transaction import EventRecord, TransactionOutcome
from onchain_raffle.protocol.contract import MONAD_TESTNET, NetworkDescriptor
from onchain_raffle.protocol.provider import ChainProvider

# EIP-55 reference addresses
ADDR_A = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ADDR_B = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
ADDR_C = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"
ADDR_D = "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb"
ORGANIZER = ADDR_D


class FakeWalletError(Exception):
    """Mimics an EIP-1193 provider error: numeric code plus message."""

    def __init__(self, code: int | None, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class FakeRevert(Exception):
    """Mimics web3's ContractLogicError."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FakeChain(ChainProvider):
    """Raffle contract simulation that verifies reveals like the real one."""

    def __init__(self, chain_id: int = MONAD_TESTNET.chain_id, accounts: list[str] | None = None) -> None:
        self.current_chain = chain_id
        self.known_chains = {chain_id, MONAD_TESTNET.chain_id}
        self.accounts = [ORGANIZER] if accounts is None else accounts
        self.raffles: dict[int, dict[str, Any]] = {}
        self.next_id = 0
        self.block = 100

        # Failure knobs
        self.emit_events = True
        self.next_id_error: Exception | None = None
        self.transact_error: Exception | None = None
        self.winners_error: Exception | None = None
        self.switch_error: Exception | None = None
        self.add_error: Exception | None = None
        self.revert_receipt = False
        self.null_winners = False

        # Recorded interactions
        self.transactions: list[tuple[str, list[Any]]] = []
        self.calls: list[tuple[str, list[Any]]] = []
        self.switch_requests: list[str] = []
        self.add_requests: list[NetworkDescriptor] = []

    async def chain_id(self) -> int:
        return self.current_chain

    async def switch_network(self, chain_id_hex: str) -> None:
        self.switch_requests.append(chain_id_hex)
        if self.switch_error is not None:
            raise self.switch_error
        chain_id = int(chain_id_hex, 16)
        if chain_id not in self.known_chains:
            raise FakeWalletError(4902, f"Unrecognized chain ID \"{chain_id_hex}\".")
        self.current_chain = chain_id

    async def add_network(self, network: NetworkDescriptor) -> None:
        self.add_requests.append(network)
        if self.add_error is not None:
            raise self.add_error
        self.known_chains.add(network.chain_id)
        self.current_chain = network.chain_id

    async def account(self) -> str:
        if not self.accounts:
            raise FakeWalletError(None, "No wallet found")
        return self.accounts[0]

    def _next_tx(self) -> tuple[str, int]:
        self.block += 1
        return "0x" + format(self.block, "064x"), self.block

    async def transact(self, function: str, args: list[Any]) -> TransactionOutcome:
        self.transactions.append((function, list(args)))
        if self.transact_error is not None:
            raise self.transact_error

        tx_hash, block = self._next_tx()
        events: list[EventRecord] = []

        if function == "createRaffle":
            name, num_winners, participants_hash, uri, secret_commitment = args
            raffle_id = self.next_id
            self.next_id += 1
            self.raffles[raffle_id] = {
                "name": name,
                "num_winners": num_winners,
                "participants_hash": participants_hash,
                "uri": uri,
                "secret_commitment": secret_commitment,
                "winners": [],
            }
            events.append(
                EventRecord(
                    name="RaffleCreated",
                    args={
                        "id": raffle_id,
                        "organizer": self.accounts[0],
                        "name": name,
                        "numWinners": num_winners,
                        "participantsHash": participants_hash,
                        "participantsURI": uri,
                        "secretCommitment": secret_commitment,
                    },
                )
            )
        elif function == "draw":
            raffle_id, secret, participants = args
            raffle = self.raffles.get(raffle_id)
            if raffle is None:
                raise FakeRevert("execution reverted: raffle does not exist")
            if raffle["winners"]:
                raise FakeRevert("execution reverted: already drawn")
            if hash_secret(secret) != raffle["secret_commitment"]:
                raise FakeRevert("execution reverted: secret mismatch")
            if hash_participants(participants) != raffle["participants_hash"]:
                raise FakeRevert("execution reverted: participants mismatch")
            raffle["winners"] = list(participants[: raffle["num_winners"]])
            events.append(
                EventRecord(name="WinnersDrawn", args={"id": raffle_id, "winners": raffle["winners"]})
            )
        else:
            raise FakeRevert(f"unknown function {function}")

        return TransactionOutcome(
            tx_hash=tx_hash,
            success=not self.revert_receipt,
            block_number=block,
            events=events if self.emit_events else [],
        )

    async def call(self, function: str, args: list[Any]) -> Any:
        self.calls.append((function, list(args)))
        if function == "nextId":
            if self.next_id_error is not None:
                raise self.next_id_error
            return self.next_id
        if function == "getWinners":
            if self.winners_error is not None:
                raise self.winners_error
            if self.null_winners:
                return None
            raffle = self.raffles.get(args[0])
            return list(raffle["winners"]) if raffle else []
        raise FakeRevert(f"unknown function {function}")


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()
