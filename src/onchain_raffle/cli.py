"""Command-line entry point: ``raffle-client secret|hash|create|draw|lookup``."""

from __future__ import annotations

import argparse
import asyncio
import logging

from onchain_raffle.client.raffle_client import RaffleClient
from onchain_raffle.config import Settings
from onchain_raffle.crypto.hashing import generate_secret
from onchain_raffle.export import write_winners_csv
from onchain_raffle.models.commit_reveal import RaffleCommitments
from onchain_raffle.models.participants import load_participants
from onchain_raffle.models.raffle import LookupStatus, WinnerList
from onchain_raffle.protocol.errors import RaffleClientError
from onchain_raffle.providers.web3_provider import Web3ChainProvider


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _build_client(args: argparse.Namespace) -> tuple[RaffleClient, Settings]:
    settings = Settings.from_env(
        rpc_url_override=args.rpc_url,
        contract_override=args.contract,
        timeout_override=args.timeout,
    )
    provider = Web3ChainProvider(
        rpc_url=settings.rpc_url,
        contract_address=settings.contract_address,
        private_key=settings.private_key,
        receipt_timeout=settings.receipt_timeout,
    )
    return RaffleClient(provider, network=settings.network), settings


def _print_winners(winners: WinnerList) -> None:
    print(winners.message)
    for position, address in enumerate(winners.winners, start=1):
        print(f"{position:>3}. {address}")


def cmd_secret(args: argparse.Namespace) -> int:
    print(generate_secret())
    return 0


def cmd_hash(args: argparse.Namespace) -> int:
    participants = load_participants(args.participants)
    commitments = RaffleCommitments.compute(participants, args.secret)
    print(f"Participants     : {len(participants)}")
    print(f"participantsHash : {commitments.participants_hash}")
    print(f"secretCommitment : {commitments.secret_commitment}")
    return 0


async def _create(args: argparse.Namespace) -> int:
    client, settings = _build_client(args)
    participants = load_participants(args.participants)
    await client.connect()
    result = await client.create(
        name=args.name,
        num_winners=args.winners,
        participants=participants,
        participants_uri=args.uri,
        secret=args.secret,
    )
    print(f"Account          : {client.session.account}")
    print(f"participantsHash : {result.record.participants_hash}")
    print(f"secretCommitment : {result.record.secret_commitment}")
    print(f"Transaction      : {result.tx_hash}")
    link = settings.network.explorer_tx_url(result.tx_hash)
    if link:
        print(f"Explorer         : {link}")
    if result.id_known:
        print(f"Raffle ID        : {result.record.raffle_id} (from {result.id_source.value})")
    else:
        print("Raffle ID        : unknown (creation succeeded; find the ID on the explorer)")
    return 0


async def _draw(args: argparse.Namespace) -> int:
    client, settings = _build_client(args)
    participants = load_participants(args.participants)
    await client.connect()
    result = await client.draw(args.id, args.secret, participants)
    print(f"Transaction      : {result.tx_hash}")
    link = settings.network.explorer_tx_url(result.tx_hash)
    if link:
        print(f"Explorer         : {link}")
    _print_winners(result.winners)
    if args.csv:
        print(f"Wrote {write_winners_csv(args.csv, result.winners, args.name)}")
    return 0


async def _lookup(args: argparse.Namespace) -> int:
    client, _ = _build_client(args)
    winners = await client.lookup_winners(args.id)
    if winners.status is LookupStatus.ERROR:
        print(f"{winners.error_kind.value if winners.error_kind else 'error'}: {winners.detail}")
        return 1
    _print_winners(winners)
    if args.csv and winners.winners:
        print(f"Wrote {write_winners_csv(args.csv, winners, args.name)}")
    return 0


def cmd_create(args: argparse.Namespace) -> int:
    return asyncio.run(_create(args))


def cmd_draw(args: argparse.Namespace) -> int:
    return asyncio.run(_draw(args))


def cmd_lookup(args: argparse.Namespace) -> int:
    return asyncio.run(_lookup(args))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="raffle-client",
        description="Create, draw and look up commit-reveal raffles on-chain.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--rpc-url", default=None, help="Override RPC URL (else use env).")
    p.add_argument("--contract", default=None, help="Override raffle contract address.")
    p.add_argument("--timeout", type=float, default=None, help="Receipt wait timeout in seconds.")

    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("secret", help="Generate a fresh reveal secret.")
    s.set_defaults(func=cmd_secret)

    h = sub.add_parser("hash", help="Compute both commitments offline.")
    h.add_argument("--participants", required=True, help="Participant .txt/.csv file.")
    h.add_argument("--secret", required=True, help="Reveal secret.")
    h.set_defaults(func=cmd_hash)

    c = sub.add_parser("create", help="Create a raffle on-chain.")
    c.add_argument("--name", required=True, help="Raffle display name.")
    c.add_argument("--winners", required=True, type=int, help="Number of winners.")
    c.add_argument("--participants", required=True, help="Participant .txt/.csv file.")
    c.add_argument("--uri", default="", help="Off-chain URI of the full participant list.")
    c.add_argument(
        "--secret",
        required=True,
        help="Reveal secret. Keep it: the draw needs the exact same value.",
    )
    c.set_defaults(func=cmd_create)

    d = sub.add_parser("draw", help="Reveal the secret and draw winners.")
    d.add_argument("--id", required=True, help="Raffle ID.")
    d.add_argument("--participants", required=True, help="Same participant file used at creation.")
    d.add_argument("--secret", required=True, help="Secret committed at creation.")
    d.add_argument("--name", default="", help="Raffle name for the CSV export.")
    d.add_argument("--csv", default=None, help="Write winners to this CSV file.")
    d.set_defaults(func=cmd_draw)

    lk = sub.add_parser("lookup", help="Read the recorded winners of a raffle.")
    lk.add_argument("--id", required=True, help="Raffle ID.")
    lk.add_argument("--name", default="", help="Raffle name for the CSV export.")
    lk.add_argument("--csv", default=None, help="Write winners to this CSV file.")
    lk.set_defaults(func=cmd_lookup)

    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        code = args.func(args)
    except RaffleClientError as exc:
        print(f"{exc.kind.value}: {exc.detail}")
        code = 1
    raise SystemExit(code)
