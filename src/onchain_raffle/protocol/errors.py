"""Error taxonomy for the raffle client.

Chain collaborators raise loosely-shaped errors: web3 exceptions, JSON-RPC
error dicts, wallet errors carrying a numeric ``code``. They are mapped here
to a closed set of kinds while the original diagnostic text is preserved
verbatim in ``detail``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the client."""

    INPUT = "input"                                        # Rejected before any chain interaction
    WALLET = "wallet"                                      # No wallet, switch/add rejected
    CHAIN_CALL = "chain_call"                              # Submission, confirmation or revert
    RECONCILIATION_AMBIGUITY = "reconciliation_ambiguity"  # Created, but ID unknown


class RaffleClientError(Exception):
    """Base class for every error raised by the client."""

    kind: ErrorKind = ErrorKind.CHAIN_CALL

    def __init__(self, detail: str, code: Any = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.code = code

    @classmethod
    def from_exception(cls, exc: BaseException) -> RaffleClientError:
        """Wrap an arbitrary collaborator error, keeping its text and code."""
        return cls(error_message(exc), code=error_code(exc))

    def __str__(self) -> str:
        return self.detail


class InputError(RaffleClientError, ValueError):
    """Malformed address, missing field or non-numeric identifier."""

    kind = ErrorKind.INPUT


class WalletError(RaffleClientError):
    """No wallet available, or a network switch/add request failed."""

    kind = ErrorKind.WALLET


class ChainCallError(RaffleClientError):
    """Submission or confirmation failure, including contract reverts."""

    kind = ErrorKind.CHAIN_CALL


def _first_arg_dict(exc: BaseException) -> dict[str, Any] | None:
    if exc.args and isinstance(exc.args[0], dict):
        return exc.args[0]
    return None


def error_code(exc: BaseException) -> Any:
    """Best-effort extraction of a numeric/string error code."""
    code = getattr(exc, "code", None)
    if code is not None:
        return code
    payload = _first_arg_dict(exc)
    if payload is not None:
        return payload.get("code")
    return None


def error_message(exc: BaseException) -> str:
    """Best-effort extraction of the human-readable diagnostic text.

    Preference order mirrors what wallets and web3 put first: a short
    message, then ``message``, then an RPC error dict, then ``str(exc)``.
    """
    if isinstance(exc, RaffleClientError):
        return exc.detail
    for attr in ("short_message", "message"):
        value = getattr(exc, attr, None)
        if isinstance(value, str) and value:
            return value
    payload = _first_arg_dict(exc)
    if payload is not None and payload.get("message"):
        return str(payload["message"])
    text = str(exc)
    return text or exc.__class__.__name__
