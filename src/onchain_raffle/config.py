"""Runtime settings read from the environment (and a local .env file)."""

from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from web3 import Web3

from onchain_raffle.protocol.contract import DEFAULT_CONTRACT_ADDRESS, MONAD_TESTNET, NetworkDescriptor
from onchain_raffle.protocol.errors import InputError

DEFAULT_RECEIPT_TIMEOUT = 120.0


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    rpc_url: str
    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    private_key: str | None = Field(default=None, repr=False)
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    network: NetworkDescriptor = MONAD_TESTNET

    @staticmethod
    def from_env(
        rpc_url_override: str | None = None,
        contract_override: str | None = None,
        timeout_override: float | None = None,
        network: NetworkDescriptor = MONAD_TESTNET,
    ) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))

        # CLI overrides win over the environment, which wins over network defaults.
        rpc_url = rpc_url_override or os.getenv("RAFFLE_RPC_URL", "").strip() or network.rpc_urls[0]

        contract = contract_override or os.getenv("RAFFLE_CONTRACT_ADDRESS", "").strip() or DEFAULT_CONTRACT_ADDRESS
        if not Web3.is_address(contract):
            msg = f"Invalid contract address: {contract!r}"
            raise InputError(msg)

        timeout = timeout_override
        if timeout is None:
            raw_timeout = os.getenv("RAFFLE_RECEIPT_TIMEOUT", "").strip()
            try:
                timeout = float(raw_timeout) if raw_timeout else DEFAULT_RECEIPT_TIMEOUT
            except ValueError as exc:
                msg = f"RAFFLE_RECEIPT_TIMEOUT must be a number, got {raw_timeout!r}"
                raise InputError(msg) from exc
        if timeout <= 0:
            msg = f"Receipt timeout must be positive, got {timeout}"
            raise InputError(msg)

        return Settings(
            rpc_url=rpc_url,
            contract_address=Web3.to_checksum_address(contract),
            private_key=os.getenv("RAFFLE_PRIVATE_KEY", "").strip() or None,
            receipt_timeout=timeout,
            network=network,
        )
