"""CSV export of drawn winners."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from onchain_raffle.models.raffle import WinnerList

CSV_HEADER = ["position", "address", "raffle_id", "name"]


def winners_to_rows(winners: WinnerList, raffle_name: str = "") -> list[list[str]]:
    """Rows in winner order; positions are 1-based."""
    raffle_id = "" if winners.raffle_id is None else str(winners.raffle_id)
    return [
        [str(position), address, raffle_id, raffle_name]
        for position, address in enumerate(winners.winners, start=1)
    ]


def winners_to_csv(winners: WinnerList, raffle_name: str = "") -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(winners_to_rows(winners, raffle_name))
    return buf.getvalue()


def write_winners_csv(path: str | Path, winners: WinnerList, raffle_name: str = "") -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(winners_to_csv(winners, raffle_name), encoding="utf-8")
    return path
