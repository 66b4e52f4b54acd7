"""Deterministic ordering of scored bids."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class RankEntry:
    """What the ranker needs to know about one scored bid"""
    bid_id: str
    total: float
    amount: Decimal
    vendor_rating: float
    submitted_at: datetime
    position: int  # index in the package's bid list


class Ranker:
    """
    Orders bids by, in priority:
    1. weighted total, higher first
    2. base amount, lower first
    3. vendor rating, higher first
    4. submission time, earlier first
    5. position in the package's bid list

    Compliance plays no part here; eligibility is decided afterwards.
    """

    @staticmethod
    def sort_key(entry: RankEntry) -> Tuple:
        return (
            -entry.total,
            entry.amount,
            -entry.vendor_rating,
            entry.submitted_at,
            entry.position,
        )

    def rank(self, entries: Sequence[RankEntry]) -> List[RankEntry]:
        return sorted(entries, key=self.sort_key)
