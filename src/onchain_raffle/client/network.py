"""Network guard: make sure the wallet is on the raffle's chain before writing."""

from __future__ import annotations

import logging
import re

from onchain_raffle.protocol.contract import NetworkDescriptor
from onchain_raffle.protocol.errors import WalletError, error_code, error_message
from onchain_raffle.protocol.provider import UNRECOGNIZED_CHAIN_CODE, ChainProvider

logger = logging.getLogger(__name__)

_UNRECOGNIZED_CHAIN = re.compile(r"Unrecognized chain ID", re.IGNORECASE)


def is_unrecognized_chain(exc: BaseException) -> bool:
    """True if a switch failed because the wallet does not know the chain."""
    code = error_code(exc)
    if code is not None and str(code) == str(UNRECOGNIZED_CHAIN_CODE):
        return True
    return bool(_UNRECOGNIZED_CHAIN.search(error_message(exc)))


async def ensure_network(provider: ChainProvider, network: NetworkDescriptor) -> int:
    """Switch to (or register) ``network`` if the wallet is elsewhere.

    Returns:
        The chain id the wallet is on afterwards.

    Raises:
        WalletError: If reading, switching or adding the network fails for
            any reason other than an unknown chain on switch.
    """
    try:
        current = await provider.chain_id()
    except Exception as exc:
        raise WalletError.from_exception(exc) from exc

    if current == network.chain_id:
        return current

    logger.info("Wallet on chain %s; switching to %s (%s)", current, network.chain_id, network.chain_name)
    try:
        await provider.switch_network(network.chain_id_hex)
    except Exception as exc:
        if not is_unrecognized_chain(exc):
            raise WalletError.from_exception(exc) from exc
        logger.info("Chain %s unknown to wallet; adding it", network.chain_id_hex)
        try:
            await provider.add_network(network)
        except Exception as add_exc:
            raise WalletError.from_exception(add_exc) from add_exc

    return network.chain_id
