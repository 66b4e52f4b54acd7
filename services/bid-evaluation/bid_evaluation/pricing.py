"""Min-max price normalization across the bids being scored."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping, Union

HUNDRED = Decimal(100)
ONE_DECIMAL = Decimal("0.1")


def round_score(value: Union[Decimal, float]) -> float:
    """Round half-up to one decimal place"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return float(value.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


class PriceNormalizer:
    """
    Converts base bid amounts into a 0-100 price score.

    The lowest amount scores 100, the highest scores 0, and amounts in
    between are interpolated linearly. When every amount is identical
    all bids score 100.
    """

    def normalize(self, amounts: Mapping[str, Decimal]) -> Dict[str, float]:
        """Map bid id -> price score. Alternates must not be included in amounts."""
        if not amounts:
            return {}

        low = min(amounts.values())
        high = max(amounts.values())
        if high == low:
            return {bid_id: 100.0 for bid_id in amounts}

        spread = high - low
        return {
            bid_id: round_score(HUNDRED - (amount - low) / spread * HUNDRED)
            for bid_id, amount in amounts.items()
        }
