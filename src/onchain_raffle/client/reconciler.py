"""Transaction reconciliation — map confirmed outcomes back to local state.

Identifier extraction after createRaffle, first match wins:
  1. The RaffleCreated event in the receipt (authoritative).
  2. nextId() - 1, read after confirmation. Only correct if no other raffle
     was created between our confirmation and the read; this race is a known
     limitation and is not papered over.
  3. Unknown. Creation still succeeded; the id must be found manually.
"""

from __future__ import annotations

import logging
from typing import Any

from onchain_raffle.models.transaction import (
    IdentifierResolution,
    IdentifierSource,
    TransactionOutcome,
)
from onchain_raffle.protocol.contract import FN_NEXT_ID, RAFFLE_CREATED_EVENT
from onchain_raffle.protocol.errors import ChainCallError, RaffleClientError, error_message
from onchain_raffle.protocol.provider import ChainProvider

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class TransactionReconciler:
    """Submits calls through the provider and reconciles their outcomes.

    Never retries: resubmitting costs gas and may double-apply, so retry is
    left to the human.
    """

    def __init__(self, provider: ChainProvider) -> None:
        self._provider = provider

    async def submit(self, function: str, args: list[Any]) -> TransactionOutcome:
        """Send a state-changing call and wait for confirmation.

        Raises:
            ChainCallError: On any submission/confirmation failure or a
                reverted receipt, with the original diagnostic text.
        """
        logger.info("Submitting %s", function)
        try:
            outcome = await self._provider.transact(function, args)
        except RaffleClientError:
            raise
        except Exception as exc:
            logger.error("%s failed: %s", function, error_message(exc))
            raise ChainCallError.from_exception(exc) from exc

        if not outcome.success:
            msg = f"Transaction {outcome.tx_hash} reverted"
            raise ChainCallError(msg)

        logger.info(
            "%s confirmed in tx %s (block %s, %d event(s))",
            function,
            outcome.tx_hash,
            outcome.block_number,
            len(outcome.events),
        )
        return outcome

    async def extract_identifier(self, outcome: TransactionOutcome) -> IdentifierResolution:
        """Resolve the id of the raffle created by ``outcome``."""
        for event in outcome.find_events(RAFFLE_CREATED_EVENT):
            raffle_id = _as_int(event.args.get("id"))
            if raffle_id is not None and raffle_id >= 0:
                return IdentifierResolution(raffle_id=raffle_id, source=IdentifierSource.EVENT)
            logger.debug("Skipping %s event without usable id: %r", event.name, event.args)

        try:
            next_id = _as_int(await self._provider.call(FN_NEXT_ID, []))
        except Exception as exc:
            logger.warning("nextId() fallback failed: %s", error_message(exc))
            next_id = None

        if next_id is not None and next_id > 0:
            logger.warning(
                "No %s event in tx %s; using nextId()-1 = %d (racy with concurrent creations)",
                RAFFLE_CREATED_EVENT,
                outcome.tx_hash,
                next_id - 1,
            )
            return IdentifierResolution(raffle_id=next_id - 1, source=IdentifierSource.COUNTER)

        logger.warning("Raffle created in tx %s but its id could not be determined", outcome.tx_hash)
        return IdentifierResolution(raffle_id=None, source=IdentifierSource.UNKNOWN)
