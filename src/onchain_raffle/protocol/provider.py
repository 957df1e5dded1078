"""Abstract chain-access collaborator.

Implementations wrap a wallet/RPC stack. They may raise whatever their stack
raises; the client maps those errors at its boundary (see
``onchain_raffle.protocol.errors``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from onchain_raffle.protocol.contract import NetworkDescriptor

if TYPE_CHECKING:
    from onchain_raffle.models.transaction import TransactionOutcome

# EIP-1193 / MetaMask code for "chain has not been added to the wallet"
UNRECOGNIZED_CHAIN_CODE = 4902


class ChainProvider(ABC):
    """Interface to the wallet and the raffle contract.

    All methods suspend for network and confirmation latency. No timeout is
    imposed by the client; implementations own hard cancellation.
    """

    @abstractmethod
    async def chain_id(self) -> int:
        """Return the numeric id of the active network."""

    @abstractmethod
    async def switch_network(self, chain_id_hex: str) -> None:
        """Ask the wallet to switch to ``chain_id_hex``.

        Raises:
            Exception: With ``code == 4902`` (or an "Unrecognized chain ID"
                message) when the wallet does not know the chain.
        """

    @abstractmethod
    async def add_network(self, network: NetworkDescriptor) -> None:
        """Ask the wallet to register ``network``."""

    @abstractmethod
    async def account(self) -> str:
        """Return the signer's address; raise if no wallet is available."""

    @abstractmethod
    async def transact(self, function: str, args: list[Any]) -> TransactionOutcome:
        """Sign and send a contract call, then wait for its receipt.

        Logs that fail to decode are skipped, not raised.
        """

    @abstractmethod
    async def call(self, function: str, args: list[Any]) -> Any:
        """Run a read-only contract call."""
