# Bid Evaluation Module
# Multi-criteria scoring, ranking and recommendation of vendor bids

from .models import (
    Criterion,
    DEFAULT_CRITERIA,
    DEFAULT_WEIGHTS,
    PackageStatus,
    ComplianceState,
    ScoreBand,
    EvaluationSettings,
    CriteriaWeightSet,
    Alternate,
    Schedule,
    ComplianceSignals,
    Bid,
    BidPackage,
    ScoreBreakdown,
    Flag,
    ErrorDetail,
    BidEvaluation,
    SkippedBid,
    Recommendation,
    EvaluationResult,
    PackageSummary,
    SummaryRequest,
)
from .errors import (
    WeightRule,
    EvaluationError,
    InvalidWeightsError,
    InvalidScoreError,
    IncompleteBidError,
    PackageStateError,
    DuplicateBidError,
    UnknownAlternateError,
)
from .weights import WeightValidator
from .pricing import PriceNormalizer
from .aggregation import CriterionAggregator
from .compliance import ComplianceClassifier
from .ranking import Ranker, RankEntry
from .recommendation import RecommendationSelector
from .engine import EvaluationEngine, evaluate
from .lifecycle import add_bid, open_evaluation, record_evaluation, award, cancel, contract_value
from .summary import SCORE_BANDS, score_band, filter_packages, summarize_packages

__all__ = [
    "Criterion",
    "DEFAULT_CRITERIA",
    "DEFAULT_WEIGHTS",
    "PackageStatus",
    "ComplianceState",
    "ScoreBand",
    "EvaluationSettings",
    "CriteriaWeightSet",
    "Alternate",
    "Schedule",
    "ComplianceSignals",
    "Bid",
    "BidPackage",
    "ScoreBreakdown",
    "Flag",
    "ErrorDetail",
    "BidEvaluation",
    "SkippedBid",
    "Recommendation",
    "EvaluationResult",
    "PackageSummary",
    "SummaryRequest",
    "WeightRule",
    "EvaluationError",
    "InvalidWeightsError",
    "InvalidScoreError",
    "IncompleteBidError",
    "PackageStateError",
    "DuplicateBidError",
    "UnknownAlternateError",
    "WeightValidator",
    "PriceNormalizer",
    "CriterionAggregator",
    "ComplianceClassifier",
    "Ranker",
    "RankEntry",
    "RecommendationSelector",
    "EvaluationEngine",
    "evaluate",
    "add_bid",
    "open_evaluation",
    "record_evaluation",
    "award",
    "cancel",
    "contract_value",
    "SCORE_BANDS",
    "score_band",
    "filter_packages",
    "summarize_packages",
]
