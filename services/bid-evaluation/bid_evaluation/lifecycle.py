"""
Package lifecycle: bidding -> evaluation -> awarded | cancelled.

Every operation takes a package snapshot and returns a new one. The
storage layer that persists packages is responsible for serializing
concurrent transitions.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from .errors import DuplicateBidError, PackageStateError, UnknownAlternateError
from .models import Bid, BidPackage, ComplianceState, EvaluationResult, EvaluationSettings, PackageStatus
from .weights import WeightValidator

logger = logging.getLogger(__name__)


def _require(package: BidPackage, operation: str, *statuses: PackageStatus) -> None:
    if package.status not in statuses:
        raise PackageStateError(package.id, package.status.value, operation)


def _check_recommendation(
    package: BidPackage, result: EvaluationResult, recommended: Optional[str], operation: str
) -> None:
    """A recommended bid must be the result's recommendation and must be compliant"""
    if recommended != result.recommendation.bid_id:
        raise PackageStateError(
            package.id, package.status.value, operation,
            f"Recommended bid '{recommended}' does not match the evaluation result "
            f"('{result.recommendation.bid_id}')",
        )
    if recommended is not None:
        evaluation = result.for_bid(recommended)
        if evaluation is None or evaluation.compliance != ComplianceState.COMPLIANT:
            raise PackageStateError(
                package.id, package.status.value, operation,
                f"Recommended bid '{recommended}' is not compliant",
            )


def add_bid(package: BidPackage, bid: Bid) -> BidPackage:
    """Append a bid; only allowed while the package is bidding"""
    _require(package, "add a bid to", PackageStatus.BIDDING)
    if package.get_bid(bid.id) is not None:
        raise DuplicateBidError(package.id, bid.id)
    return package.model_copy(update={"bids": [*package.bids, bid]})


def open_evaluation(package: BidPackage, settings: Optional[EvaluationSettings] = None) -> BidPackage:
    """Close bidding. Weights must be valid before any scoring starts."""
    _require(package, "open evaluation for", PackageStatus.BIDDING)
    WeightValidator(settings).validate(package.id, package.criteria_weights)
    logger.info("Package %s moved to evaluation with %d bids", package.id, len(package.bids))
    return package.model_copy(update={"status": PackageStatus.EVALUATION})


def record_evaluation(package: BidPackage, result: EvaluationResult) -> BidPackage:
    """Store an evaluation result and its recommendation on the package"""
    _require(package, "record an evaluation for", PackageStatus.EVALUATION)
    if result.package_id != package.id:
        raise PackageStateError(
            package.id, package.status.value, "record an evaluation for",
            f"Result belongs to package '{result.package_id}', not '{package.id}'",
        )

    recommended = result.recommendation.bid_id
    _check_recommendation(package, result, recommended, "record an evaluation for")

    return package.model_copy(update={
        "evaluation_result": result,
        "recommended_bid_id": recommended,
    })


def award(package: BidPackage) -> BidPackage:
    """Accept the recorded recommendation and pin the awarded bid"""
    _require(package, "award", PackageStatus.EVALUATION)
    if package.evaluation_result is None or package.recommended_bid_id is None:
        raise PackageStateError(
            package.id, package.status.value, "award",
            "Cannot award a package without a recommended bid",
        )
    # Snapshots may come back from storage; never pin a bid the result did not recommend
    _check_recommendation(package, package.evaluation_result, package.recommended_bid_id, "award")

    logger.info("Package %s awarded to bid %s", package.id, package.recommended_bid_id)
    return package.model_copy(update={
        "status": PackageStatus.AWARDED,
        "awarded_bid_id": package.recommended_bid_id,
    })


def cancel(package: BidPackage) -> BidPackage:
    _require(package, "cancel", PackageStatus.BIDDING, PackageStatus.EVALUATION)
    logger.info("Package %s cancelled", package.id)
    return package.model_copy(update={"status": PackageStatus.CANCELLED})


def contract_value(
    package: BidPackage,
    accepted_alternates: Iterable[str] = (),
    change_orders: Iterable[Decimal] = (),
) -> Decimal:
    """
    Contract value of an awarded package.

    Base amount of the awarded bid plus the cost deltas of the accepted
    alternates (matched by description) and any change orders. The stored
    evaluation result is not touched.
    """
    _require(package, "compute the contract value of", PackageStatus.AWARDED)
    bid = package.get_bid(package.awarded_bid_id) if package.awarded_bid_id else None
    if bid is None:
        raise PackageStateError(
            package.id, package.status.value, "compute the contract value of",
            f"Awarded bid '{package.awarded_bid_id}' is not in the package",
        )

    deltas = {alternate.description: alternate.amount for alternate in bid.alternates}
    value = bid.amount
    for description in accepted_alternates:
        if description not in deltas:
            raise UnknownAlternateError(bid.id, description)
        value += deltas[description]
    for amount in change_orders:
        value += Decimal(str(amount))
    return value
