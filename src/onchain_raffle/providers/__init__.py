"""Concrete chain providers."""

from onchain_raffle.providers.web3_provider import ProviderRequestError, Web3ChainProvider

__all__ = [
    "ProviderRequestError",
    "Web3ChainProvider",
]
