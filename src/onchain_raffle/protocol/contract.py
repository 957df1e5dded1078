"""Contract surface and network parameters of the deployed raffle.

The contract is the source of truth: it stores both commitments at creation,
recomputes them from the revealed secret and participant list at draw time,
and only then selects winners.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

DEFAULT_CONTRACT_ADDRESS = "0x660ebb941839c63d76115d5246fdcaa20c786fe6"

# Event names the reconciler looks for
RAFFLE_CREATED_EVENT = "RaffleCreated"
WINNERS_DRAWN_EVENT = "WinnersDrawn"

# Function names as exposed by the ABI
FN_CREATE_RAFFLE = "createRaffle"
FN_DRAW = "draw"
FN_GET_WINNERS = "getWinners"
FN_NEXT_ID = "nextId"

MAX_WINNERS = 2**32 - 1  # uint32 numWinners
MAX_RAFFLE_ID = 2**256 - 1  # uint256 id


def _param(name: str, abi_type: str, indexed: bool | None = None) -> dict[str, Any]:
    entry: dict[str, Any] = {"name": name, "type": abi_type, "internalType": abi_type}
    if indexed is not None:
        entry["indexed"] = indexed
    return entry


RAFFLE_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": FN_NEXT_ID,
        "stateMutability": "view",
        "inputs": [],
        "outputs": [_param("", "uint256")],
    },
    {
        "type": "function",
        "name": FN_CREATE_RAFFLE,
        "stateMutability": "nonpayable",
        "inputs": [
            _param("name", "string"),
            _param("numWinners", "uint32"),
            _param("participantsHash", "bytes32"),
            _param("participantsURI", "string"),
            _param("secretCommitment", "bytes32"),
        ],
        "outputs": [_param("id", "uint256")],
    },
    {
        "type": "function",
        "name": FN_DRAW,
        "stateMutability": "nonpayable",
        "inputs": [
            _param("id", "uint256"),
            _param("secret", "string"),
            _param("participants", "address[]"),
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": FN_GET_WINNERS,
        "stateMutability": "view",
        "inputs": [_param("id", "uint256")],
        "outputs": [_param("", "address[]")],
    },
    {
        "type": "event",
        "name": RAFFLE_CREATED_EVENT,
        "anonymous": False,
        "inputs": [
            _param("id", "uint256", indexed=True),
            _param("organizer", "address", indexed=True),
            _param("name", "string", indexed=False),
            _param("numWinners", "uint32", indexed=False),
            _param("participantsHash", "bytes32", indexed=False),
            _param("participantsURI", "string", indexed=False),
            _param("secretCommitment", "bytes32", indexed=False),
            _param("targetChainId", "uint64", indexed=False),
            _param("createdAt", "uint64", indexed=False),
        ],
    },
    {
        "type": "event",
        "name": WINNERS_DRAWN_EVENT,
        "anonymous": False,
        "inputs": [
            _param("id", "uint256", indexed=True),
            _param("randomness", "bytes32", indexed=False),
            _param("winners", "address[]", indexed=False),
        ],
    },
]


class NativeCurrency(BaseModel):
    name: str
    symbol: str
    decimals: int = 18


class NetworkDescriptor(BaseModel):
    """Fixed parameter set used to register a network with a wallet.

    ``to_wallet_params`` produces the EIP-3085 ``wallet_addEthereumChain``
    payload.
    """

    chain_id: int = Field(description="Numeric chain id")
    chain_name: str
    native_currency: NativeCurrency
    rpc_urls: list[str] = Field(min_length=1)
    block_explorer_urls: list[str] = Field(default_factory=list)
    tx_explorer_url: str = Field(
        default="",
        description="Prefix for transaction links; falls back to the first block explorer",
    )

    @property
    def chain_id_hex(self) -> str:
        return hex(self.chain_id)

    def to_wallet_params(self) -> dict[str, Any]:
        return {
            "chainId": self.chain_id_hex,
            "chainName": self.chain_name,
            "nativeCurrency": self.native_currency.model_dump(),
            "rpcUrls": list(self.rpc_urls),
            "blockExplorerUrls": list(self.block_explorer_urls),
        }

    def explorer_tx_url(self, tx_hash: str) -> str:
        """Link to a transaction on the network's explorer ('' if none)."""
        if not tx_hash:
            return ""
        if self.tx_explorer_url:
            return f"{self.tx_explorer_url.rstrip('/')}/tx/{tx_hash}"
        if self.block_explorer_urls:
            return f"{self.block_explorer_urls[0].rstrip('/')}/tx/{tx_hash}"
        return ""


MONAD_TESTNET = NetworkDescriptor(
    chain_id=10143,
    chain_name="Monad Testnet",
    native_currency=NativeCurrency(name="MON", symbol="MON", decimals=18),
    rpc_urls=["https://testnet-rpc.monad.xyz"],
    block_explorer_urls=["https://testnet.monadexplorer.com"],
    tx_explorer_url="https://monad-testnet.socialscan.io",
)
