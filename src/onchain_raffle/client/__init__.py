"""Raffle orchestration: network guard, reconciliation and the client itself."""

from onchain_raffle.client.network import ensure_network
from onchain_raffle.client.raffle_client import RaffleClient, parse_raffle_id, parse_winner_count
from onchain_raffle.client.reconciler import TransactionReconciler
from onchain_raffle.client.session import Session, SessionState

__all__ = [
    "RaffleClient",
    "Session",
    "SessionState",
    "TransactionReconciler",
    "ensure_network",
    "parse_raffle_id",
    "parse_winner_count",
]
