import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date, datetime
from decimal import Decimal

import pytest

from bid_evaluation import (
    Alternate,
    Bid,
    BidPackage,
    ComplianceSignals,
    CriteriaWeightSet,
    DEFAULT_WEIGHTS,
    PackageStatus,
    Schedule,
)


def _make_bid(
    bid_id,
    amount,
    scores,
    rating=4.0,
    submitted_at=datetime(2024, 12, 15, 9, 0),
    review_complete=True,
    bond_required=True,
    bond_provided=True,
    missing_documents=(),
    open_clarifications=(),
    alternates=(),
    prior_compliance=None,
):
    return Bid(
        id=bid_id,
        vendor_id=f"v-{bid_id}",
        vendor_name=f"Vendor {bid_id}",
        amount=Decimal(str(amount)),
        submitted_at=submitted_at,
        compliance=ComplianceSignals(
            review_complete=review_complete,
            bond_required=bond_required,
            bond_provided=bond_provided,
            missing_documents=list(missing_documents),
            open_clarifications=list(open_clarifications),
        ),
        raw_scores=dict(scores),
        vendor_rating=rating,
        alternates=[Alternate(description=d, amount=Decimal(str(a))) for d, a in alternates],
        schedule=Schedule(
            start_date=date(2025, 1, 15),
            duration_days=120,
            milestones=["Foundation Ready", "Frame Complete", "Final Inspection"],
        ),
        prior_compliance=prior_compliance,
    )


def _make_package(
    bids,
    weights=None,
    status=PackageStatus.EVALUATION,
    package_id="bp001",
    title="Structural Steel Package",
    trade="Structural",
    project="Palm Beach Luxury Estate",
    estimated_value=2_800_000,
):
    return BidPackage(
        id=package_id,
        title=title,
        trade=trade,
        project=project,
        status=status,
        estimated_value=Decimal(str(estimated_value)),
        due_date=date(2024, 12, 22),
        criteria_weights=CriteriaWeightSet(dict(weights or DEFAULT_WEIGHTS)),
        bids=list(bids),
    )


@pytest.fixture
def make_bid():
    return _make_bid


@pytest.fixture
def make_package():
    return _make_package


@pytest.fixture
def steel_bids():
    """The three structural steel bids X, Y, Z"""
    return [
        _make_bid(
            "X", 2_650_000,
            {"schedule": 90, "experience": 95, "quality": 92, "safety": 88},
            rating=4.8,
            alternates=[("Premium finish upgrade", 85_000), ("Expedited delivery", 125_000)],
        ),
        _make_bid(
            "Y", 2_890_000,
            {"schedule": 95, "experience": 90, "quality": 95, "safety": 95},
            rating=4.6,
        ),
        _make_bid(
            "Z", 2_720_000,
            {"schedule": 85, "experience": 88, "quality": 89, "safety": 92},
            rating=4.4,
        ),
    ]


@pytest.fixture
def steel_package(steel_bids):
    return _make_package(steel_bids)
