"""Selection of the awardable bid from a ranking."""

from typing import Mapping, Sequence

from .models import ComplianceState, Recommendation, SkippedBid

REASON_TOP_COMPLIANT = "highest-ranked compliant bid"
REASON_NO_COMPLIANT = "no compliant bid"
REASON_NO_BIDS = "no bids"


class RecommendationSelector:
    """Picks the first compliant bid in ranking order, or none"""

    def select(
        self,
        ranking: Sequence[str],
        compliance: Mapping[str, ComplianceState],
        bid_count: int,
    ) -> Recommendation:
        if bid_count == 0:
            return Recommendation(bid_id=None, reason=REASON_NO_BIDS)

        skipped = []
        for bid_id in ranking:
            state = compliance[bid_id]
            if state == ComplianceState.COMPLIANT:
                return Recommendation(
                    bid_id=bid_id, reason=REASON_TOP_COMPLIANT, skipped=skipped
                )
            skipped.append(SkippedBid(bid_id=bid_id, compliance=state))

        return Recommendation(bid_id=None, reason=REASON_NO_COMPLIANT, skipped=skipped)
