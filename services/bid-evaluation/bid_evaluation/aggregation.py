"""Weighted aggregation of per-criterion scores."""

from decimal import Decimal
from typing import Dict, List, Mapping

from .errors import IncompleteBidError, InvalidScoreError
from .models import Bid, Criterion, ScoreBreakdown
from .pricing import HUNDRED, round_score
from .summary import score_band


class CriterionAggregator:
    """
    Combines normalized criterion scores into one weighted total.

    total = sum(weight_c / 100 * score_c) over every weighted criterion,
    price included. Criteria do not interact with each other.
    """

    def check_scores(self, bid: Bid, weights: Mapping[str, float]) -> List[str]:
        """
        Validate a bid's raw scores against the weighted criteria.

        Raises InvalidScoreError for a value outside [0, 100] and
        IncompleteBidError when a weighted non-price criterion has no score.
        Returns the names of supplied scores that are not used.
        """
        required = [name for name in weights if name != Criterion.PRICE.value]

        for name in required:
            if name in bid.raw_scores:
                value = bid.raw_scores[name]
                if not 0 <= value <= 100:
                    raise InvalidScoreError(bid.id, name, value)

        missing = [name for name in required if name not in bid.raw_scores]
        if missing:
            raise IncompleteBidError(bid.id, missing)

        return sorted(name for name in bid.raw_scores if name not in required)

    def aggregate(
        self,
        raw_scores: Mapping[str, float],
        weights: Mapping[str, float],
        price_score: float,
    ) -> ScoreBreakdown:
        criterion_scores: Dict[str, float] = {}
        total = Decimal(0)

        for name, weight in weights.items():
            if name == Criterion.PRICE.value:
                score = price_score
            else:
                score = raw_scores[name]
            criterion_scores[name] = float(score)
            total += Decimal(str(weight)) / HUNDRED * Decimal(str(score))

        # Weight sums within tolerance of 100 can push a perfect bid just past it
        total_score = round_score(min(HUNDRED, max(Decimal(0), total)))
        return ScoreBreakdown(
            criterion_scores=criterion_scores,
            total=total_score,
            band=score_band(total_score),
        )
