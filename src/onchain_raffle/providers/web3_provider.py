"""web3.py implementation of the chain-access collaborator."""

from __future__ import annotations

import logging
from typing import Any

from eth_abi.exceptions import DecodingError
from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import LogTopicError, MismatchedABI
from web3.types import RPCEndpoint

from onchain_raffle.models.transaction import EventRecord, TransactionOutcome
from onchain_raffle.protocol.contract import (
    RAFFLE_ABI,
    RAFFLE_CREATED_EVENT,
    WINNERS_DRAWN_EVENT,
    NetworkDescriptor,
)
from onchain_raffle.protocol.errors import WalletError
from onchain_raffle.protocol.provider import ChainProvider

logger = logging.getLogger(__name__)

_DECODED_EVENTS = (RAFFLE_CREATED_EVENT, WINNERS_DRAWN_EVENT)


class ProviderRequestError(Exception):
    """JSON-RPC error returned for a wallet request."""

    def __init__(self, code: Any, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def _plain(value: Any) -> Any:
    """Convert web3 return values (HexBytes, AttributeDict) to plain data."""
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if hasattr(value, "items"):
        return {k: _plain(v) for k, v in value.items()}
    return value


class Web3ChainProvider(ChainProvider):
    """Talks to the raffle contract over JSON-RPC.

    With ``private_key`` set, transactions are signed locally. Otherwise they
    are sent from the node's first managed account, which is how a wallet
    RPC (or a dev node) exposes its signer.
    """

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        private_key: str | None = None,
        receipt_timeout: float = 120.0,
    ) -> None:
        self._w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self._contract = self._w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(contract_address),
            abi=RAFFLE_ABI,
        )
        self._account = Account.from_key(private_key) if private_key else None
        self._receipt_timeout = receipt_timeout

    @property
    def contract_address(self) -> str:
        return self._contract.address

    async def _request(self, method: str, params: list[Any]) -> Any:
        response = await self._w3.provider.make_request(RPCEndpoint(method), params)
        error = response.get("error")
        if error:
            if isinstance(error, dict):
                raise ProviderRequestError(error.get("code"), str(error.get("message", "")))
            raise ProviderRequestError(None, str(error))
        return response.get("result")

    async def chain_id(self) -> int:
        return int(await self._w3.eth.chain_id)

    async def switch_network(self, chain_id_hex: str) -> None:
        await self._request("wallet_switchEthereumChain", [{"chainId": chain_id_hex}])

    async def add_network(self, network: NetworkDescriptor) -> None:
        await self._request("wallet_addEthereumChain", [network.to_wallet_params()])

    async def account(self) -> str:
        if self._account is not None:
            return self._account.address
        accounts = await self._w3.eth.accounts
        if not accounts:
            msg = "No wallet found: set a private key or unlock an account on the node"
            raise WalletError(msg)
        return accounts[0]

    async def transact(self, function: str, args: list[Any]) -> TransactionOutcome:
        fn = getattr(self._contract.functions, function)(*args)
        sender = await self.account()

        if self._account is not None:
            tx = await fn.build_transaction(
                {
                    "from": sender,
                    "nonce": await self._w3.eth.get_transaction_count(sender, "pending"),
                }
            )
            signed = self._account.sign_transaction(tx)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            tx_hash = await fn.transact({"from": sender})

        logger.debug("Sent %s in tx %s, waiting for receipt", function, tx_hash.hex())
        receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self._receipt_timeout)
        return TransactionOutcome(
            tx_hash=_plain(receipt["transactionHash"]),
            success=receipt.get("status", 1) == 1,
            block_number=receipt.get("blockNumber"),
            events=self._decode_logs(receipt.get("logs", [])),
        )

    def _decode_logs(self, logs: list[Any]) -> list[EventRecord]:
        """Decode raffle events; logs that do not decode are skipped."""
        records: list[EventRecord] = []
        for log in logs:
            if str(log.get("address", "")).lower() != self._contract.address.lower():
                continue
            for name in _DECODED_EVENTS:
                try:
                    decoded = getattr(self._contract.events, name)().process_log(log)
                except (MismatchedABI, LogTopicError, DecodingError, ValueError) as exc:
                    logger.debug("Log %s is not %s: %s", log.get("logIndex"), name, exc)
                    continue
                records.append(
                    EventRecord(
                        name=decoded["event"],
                        args=_plain(dict(decoded["args"])),
                        address=str(decoded["address"]),
                        log_index=decoded.get("logIndex"),
                    )
                )
                break
        return records

    async def call(self, function: str, args: list[Any]) -> Any:
        result = await getattr(self._contract.functions, function)(*args).call()
        return _plain(result)
