"""Contract surface, chain provider interface and error taxonomy."""

from onchain_raffle.protocol.contract import (
    DEFAULT_CONTRACT_ADDRESS,
    MONAD_TESTNET,
    RAFFLE_ABI,
    NativeCurrency,
    NetworkDescriptor,
)
from onchain_raffle.protocol.errors import (
    ChainCallError,
    ErrorKind,
    InputError,
    RaffleClientError,
    WalletError,
)
from onchain_raffle.protocol.provider import ChainProvider

__all__ = [
    "ChainCallError",
    "ChainProvider",
    "DEFAULT_CONTRACT_ADDRESS",
    "ErrorKind",
    "InputError",
    "MONAD_TESTNET",
    "NativeCurrency",
    "NetworkDescriptor",
    "RAFFLE_ABI",
    "RaffleClientError",
    "WalletError",
]
