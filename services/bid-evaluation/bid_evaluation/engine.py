"""
Evaluation Engine
=================
Multi-criteria bid evaluation for a single bid package.

Pipeline:
1. Validate criteria weights (fatal on failure)
2. Check each bid's raw scores; incomplete or out-of-range bids are excluded
3. Normalize prices across the remaining bids
4. Aggregate weighted totals
5. Classify compliance for every bid
6. Rank scored bids and select the first compliant one

The engine is pure: the same package snapshot always yields the same result.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from .aggregation import CriterionAggregator
from .compliance import ComplianceClassifier
from .errors import EvaluationError, IncompleteBidError, InvalidScoreError, PackageStateError
from .models import (
    Bid,
    BidEvaluation,
    BidPackage,
    ComplianceState,
    ErrorDetail,
    EvaluationResult,
    EvaluationSettings,
    Flag,
    PackageStatus,
    ScoreBreakdown,
)
from .pricing import PriceNormalizer
from .ranking import Ranker, RankEntry
from .recommendation import RecommendationSelector
from .weights import WeightValidator

logger = logging.getLogger(__name__)

# Bids below this share of the estimate are worth a second look
LOW_BID_RATIO = Decimal("0.8")


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps are taken as UTC so mixed inputs stay comparable
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class EvaluationEngine:
    """
    Scores, ranks and recommends bids for one package.

    Ranking and eligibility are separate: a rejected bid can be ranked
    first but is never recommended.
    """

    def __init__(self, settings: Optional[EvaluationSettings] = None):
        self.settings = settings or EvaluationSettings()
        self.weight_validator = WeightValidator(self.settings)
        self.price_normalizer = PriceNormalizer()
        self.aggregator = CriterionAggregator()
        self.classifier = ComplianceClassifier()
        self.ranker = Ranker()
        self.selector = RecommendationSelector()

    def evaluate(self, package: BidPackage) -> EvaluationResult:
        if package.status != PackageStatus.EVALUATION:
            raise PackageStateError(package.id, package.status.value, "evaluate")

        # Step 1: weights
        weights = self.weight_validator.validate(package.id, package.criteria_weights)

        # Step 2: raw score checks
        scorable: List[Bid] = []
        exclusions: Dict[str, EvaluationError] = {}
        ignored: Dict[str, List[str]] = {}
        for bid in package.bids:
            try:
                ignored[bid.id] = self.aggregator.check_scores(bid, weights)
            except (InvalidScoreError, IncompleteBidError) as e:
                logger.warning("Package %s: bid %s excluded (%s)", package.id, bid.id, e.message)
                exclusions[bid.id] = e
                continue
            scorable.append(bid)

        # Step 3: price scores over the bids actually being scored
        price_scores = self.price_normalizer.normalize({bid.id: bid.amount for bid in scorable})

        # Step 4: weighted totals
        breakdowns: Dict[str, ScoreBreakdown] = {
            bid.id: self.aggregator.aggregate(bid.raw_scores, weights, price_scores[bid.id])
            for bid in scorable
        }

        # Step 5: compliance for every bid, scored or not
        compliance: Dict[str, ComplianceState] = {}
        blocked: Dict[str, bool] = {}
        for bid in package.bids:
            state, was_blocked = self.classifier.classify_from(bid.compliance, bid.prior_compliance)
            compliance[bid.id] = state
            blocked[bid.id] = was_blocked
            if was_blocked:
                logger.warning(
                    "Package %s: bid %s kept %s, derived state not reachable",
                    package.id, bid.id, state.value,
                )

        # Step 6: ranking and recommendation
        positions = {bid.id: i for i, bid in enumerate(package.bids)}
        ranked = self.ranker.rank([
            RankEntry(
                bid_id=bid.id,
                total=breakdowns[bid.id].total,
                amount=bid.amount,
                vendor_rating=bid.vendor_rating,
                submitted_at=_as_utc(bid.submitted_at),
                position=positions[bid.id],
            )
            for bid in scorable
        ])
        ranking = [entry.bid_id for entry in ranked]
        ranks = {bid_id: i + 1 for i, bid_id in enumerate(ranking)}
        recommendation = self.selector.select(ranking, compliance, len(package.bids))

        evaluations: List[BidEvaluation] = []
        errors: List[ErrorDetail] = []
        for bid in package.bids:
            excluded = exclusions.get(bid.id)
            detail = excluded.to_detail() if excluded else None
            if detail is not None:
                errors.append(detail)
            evaluations.append(BidEvaluation(
                bid_id=bid.id,
                vendor_name=bid.vendor_name,
                compliance=compliance[bid.id],
                breakdown=breakdowns.get(bid.id),
                rank=ranks.get(bid.id),
                excluded=excluded is not None,
                exclusion=detail,
                flags=self._generate_flags(
                    package, bid, ignored.get(bid.id, []), blocked[bid.id]
                ),
            ))

        logger.info(
            "Package %s evaluated: %d bids, %d ranked, %d excluded, recommendation=%s",
            package.id, len(package.bids), len(ranking), len(exclusions),
            recommendation.bid_id or "none",
        )

        return EvaluationResult(
            package_id=package.id,
            bids=evaluations,
            ranking=ranking,
            recommendation=recommendation,
            errors=errors,
        )

    def _generate_flags(
        self, package: BidPackage, bid: Bid, ignored: List[str], blocked: bool
    ) -> List[Flag]:
        """Generate warning/info flags"""
        flags = []

        if bid.amount > package.estimated_value:
            flags.append(Flag(
                type="warning",
                code="ABOVE_ESTIMATE",
                message=f"Bid amount {bid.amount} exceeds estimated value {package.estimated_value}"
            ))
        elif bid.amount < package.estimated_value * LOW_BID_RATIO:
            flags.append(Flag(
                type="warning",
                code="FAR_BELOW_ESTIMATE",
                message=f"Bid amount {bid.amount} is more than 20% below estimated value {package.estimated_value}"
            ))

        signals = bid.compliance
        if signals.bond_required and not signals.bond_provided:
            flags.append(Flag(type="warning", code="BOND_MISSING", message="Required bond not provided"))

        if signals.open_clarifications:
            flags.append(Flag(
                type="info",
                code="OPEN_CLARIFICATIONS",
                message=f"{len(signals.open_clarifications)} clarification(s) open"
            ))

        if bid.alternates:
            flags.append(Flag(
                type="info",
                code="ALTERNATES_OFFERED",
                message=f"{len(bid.alternates)} alternate(s) offered, not part of base ranking"
            ))

        if ignored:
            flags.append(Flag(
                type="info",
                code="UNWEIGHTED_SCORE_IGNORED",
                message=f"Scores ignored for unweighted criteria: {', '.join(ignored)}"
            ))

        if blocked:
            flags.append(Flag(
                type="warning",
                code="COMPLIANCE_TRANSITION_BLOCKED",
                message=f"Compliance stays {bid.prior_compliance.value}; derived state is not a permitted transition"
            ))

        return flags


def evaluate(package: BidPackage, settings: Optional[EvaluationSettings] = None) -> EvaluationResult:
    """
    Evaluate a package snapshot with the given settings.

    Example:
        from bid_evaluation import evaluate

        result = evaluate(package)
        print(result.recommendation.bid_id, result.recommendation.reason)
        for bid_id in result.ranking:
            print(bid_id, result.for_bid(bid_id).breakdown.total)
    """
    return EvaluationEngine(settings).evaluate(package)
