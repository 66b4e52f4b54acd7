"""Portfolio statistics, filtering and score bands across bid packages."""

from decimal import Decimal
from typing import Iterable, List, Optional

from .models import BidPackage, PackageStatus, PackageSummary, ScoreBand

# Lower bound (inclusive) of each band, best first
SCORE_BANDS = [
    (90.0, ScoreBand.EXCELLENT),
    (80.0, ScoreBand.GOOD),
    (70.0, ScoreBand.FAIR),
]


def score_band(score: float) -> ScoreBand:
    for lower, band in SCORE_BANDS:
        if score >= lower:
            return band
    return ScoreBand.POOR


def filter_packages(
    packages: Iterable[BidPackage],
    search: Optional[str] = None,
    trade: Optional[str] = None,
    status: Optional[PackageStatus] = None,
) -> List[BidPackage]:
    """
    Filter packages the way the bid comparison list does.

    search matches title, trade or project case-insensitively;
    trade and status must match exactly.
    """
    result = list(packages)

    if search:
        term = search.lower()
        result = [
            pkg for pkg in result
            if term in pkg.title.lower()
            or term in pkg.trade.lower()
            or term in pkg.project.lower()
        ]

    if trade:
        result = [pkg for pkg in result if pkg.trade == trade]

    if status is not None:
        result = [pkg for pkg in result if pkg.status == status]

    return result


def summarize_packages(packages: Iterable[BidPackage]) -> PackageSummary:
    packages = list(packages)
    total_packages = len(packages)
    total_bids = sum(len(pkg.bids) for pkg in packages)

    return PackageSummary(
        total_packages=total_packages,
        total_estimated_value=sum((pkg.estimated_value for pkg in packages), Decimal(0)),
        total_bids=total_bids,
        avg_bids_per_package=total_bids / total_packages if total_packages > 0 else 0.0,
    )
