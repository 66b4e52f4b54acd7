"""
Bid Evaluation Models
=====================
Pydantic models for multi-criteria bid evaluation.

Key principles:
1. Price is always computed from bid amounts, never supplied as a raw score
2. Weights are percentages and must sum to 100 before evaluation runs
3. Ranking and eligibility (compliance) are separate concerns
4. Derived results are frozen: evaluation history is never rewritten
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel


class Criterion(str, Enum):
    """Built-in evaluation criteria"""
    PRICE = "price"
    SCHEDULE = "schedule"
    EXPERIENCE = "experience"
    QUALITY = "quality"
    SAFETY = "safety"


DEFAULT_CRITERIA = tuple(c.value for c in Criterion)

# Weights used by the structural steel packages on the bid comparison screen
DEFAULT_WEIGHTS = {
    Criterion.PRICE.value: 40.0,
    Criterion.SCHEDULE.value: 20.0,
    Criterion.EXPERIENCE.value: 20.0,
    Criterion.QUALITY.value: 15.0,
    Criterion.SAFETY.value: 5.0,
}


class PackageStatus(str, Enum):
    BIDDING = "bidding"
    EVALUATION = "evaluation"
    AWARDED = "awarded"
    CANCELLED = "cancelled"


class ComplianceState(str, Enum):
    COMPLIANT = "compliant"
    CLARIFICATION_NEEDED = "clarification_needed"
    UNDER_REVIEW = "under_review"
    REJECTED = "rejected"


class ScoreBand(str, Enum):
    """Display band for a 0-100 score"""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class EvaluationSettings(BaseModel):
    """Parameters for an evaluation run"""
    weight_tolerance: float = Field(
        default=0.01, ge=0, le=1,
        description="Allowed deviation of the weight sum from 100"
    )
    extra_criteria: List[str] = Field(
        default_factory=list,
        description="Criterion names accepted in addition to the built-in ones"
    )

    @property
    def taxonomy(self) -> List[str]:
        names = list(DEFAULT_CRITERIA)
        for name in self.extra_criteria:
            if name not in names:
                names.append(name)
        return names


class CriteriaWeightSet(RootModel[Dict[str, float]]):
    """Criterion name -> weight in percent (0-100)"""
    model_config = ConfigDict(frozen=True)

    @property
    def total(self) -> float:
        return sum(self.root.values())

    def names(self) -> List[str]:
        return list(self.root.keys())

    def non_price(self) -> List[str]:
        return [name for name in self.root if name != Criterion.PRICE.value]


class Alternate(BaseModel):
    """Optional priced add-on, never part of base ranking"""
    model_config = ConfigDict(frozen=True)

    description: str
    amount: Decimal = Field(..., description="Cost delta relative to the base bid")


class Schedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    duration_days: int = Field(..., ge=0)
    milestones: List[str] = Field(default_factory=list)


class ComplianceSignals(BaseModel):
    """Document and bond signals gathered during compliance review"""
    model_config = ConfigDict(frozen=True)

    review_complete: bool = Field(..., description="False until compliance checks have run")
    bond_required: bool
    bond_provided: bool
    missing_documents: List[str] = Field(default_factory=list)
    open_clarifications: List[str] = Field(default_factory=list)


class Bid(BaseModel):
    """A single vendor submission. Corrections are new Bid records."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    vendor_id: str
    vendor_name: str
    amount: Decimal = Field(..., gt=0, description="Base bid amount")
    submitted_at: datetime
    compliance: ComplianceSignals
    raw_scores: Dict[str, float] = Field(
        ..., description="Raw 0-100 score for every weighted non-price criterion"
    )
    vendor_rating: float = Field(..., ge=0, le=5, description="Historical rating, tie-break only")
    alternates: List[Alternate] = Field(default_factory=list)
    schedule: Schedule
    references: List[str] = Field(default_factory=list)
    exclusions: List[str] = Field(default_factory=list)
    prior_compliance: Optional[ComplianceState] = Field(
        default=None,
        description="Compliance state recorded at a previous evaluation"
    )


class ScoreBreakdown(BaseModel):
    """Normalized criterion scores and weighted total for one bid"""
    model_config = ConfigDict(frozen=True)

    criterion_scores: Dict[str, float]
    total: float = Field(ge=0, le=100)
    band: ScoreBand


class Flag(BaseModel):
    """Warning or info flag for a bid"""
    model_config = ConfigDict(frozen=True)

    type: Literal["warning", "info"] = "info"
    code: str
    message: str


class ErrorDetail(BaseModel):
    """Structured error as reported in results and HTTP bodies"""
    model_config = ConfigDict(frozen=True)

    kind: str
    identifier: str
    message: str
    criterion: Optional[str] = None
    value: Optional[float] = None
    missing: List[str] = Field(default_factory=list)


class BidEvaluation(BaseModel):
    """Per-bid outcome of an evaluation run"""
    model_config = ConfigDict(frozen=True)

    bid_id: str
    vendor_name: str
    compliance: ComplianceState
    breakdown: Optional[ScoreBreakdown] = None
    rank: Optional[int] = None
    excluded: bool = False
    exclusion: Optional[ErrorDetail] = None
    flags: List[Flag] = Field(default_factory=list)


class SkippedBid(BaseModel):
    model_config = ConfigDict(frozen=True)

    bid_id: str
    compliance: ComplianceState


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    bid_id: Optional[str] = None
    reason: str
    skipped: List[SkippedBid] = Field(default_factory=list)


class EvaluationResult(BaseModel):
    """The engine's sole output"""
    model_config = ConfigDict(frozen=True)

    package_id: str
    bids: List[BidEvaluation]
    ranking: List[str]
    recommendation: Recommendation
    errors: List[ErrorDetail] = Field(default_factory=list)

    def for_bid(self, bid_id: str) -> Optional[BidEvaluation]:
        for evaluation in self.bids:
            if evaluation.bid_id == bid_id:
                return evaluation
        return None


class BidPackage(BaseModel):
    """Procurement solicitation for one trade, with its weights and bids"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    trade: str
    project: str = ""
    status: PackageStatus
    estimated_value: Decimal = Field(..., gt=0)
    due_date: date
    criteria_weights: CriteriaWeightSet
    bids: List[Bid]
    notes: str = ""
    recommended_bid_id: Optional[str] = None
    awarded_bid_id: Optional[str] = None
    evaluation_result: Optional[EvaluationResult] = None

    def get_bid(self, bid_id: str) -> Optional[Bid]:
        for bid in self.bids:
            if bid.id == bid_id:
                return bid
        return None


class PackageSummary(BaseModel):
    """Portfolio statistics across bid packages"""
    total_packages: int
    total_estimated_value: Decimal
    total_bids: int
    avg_bids_per_package: float


class SummaryRequest(BaseModel):
    packages: List[BidPackage]
    search: Optional[str] = None
    trade: Optional[str] = None
    status: Optional[PackageStatus] = None
