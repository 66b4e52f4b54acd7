"""Typed evaluation errors. Each carries a kind and the offending identifier."""

from enum import Enum
from typing import Iterable, Optional

from .models import ErrorDetail


class WeightRule(str, Enum):
    MISSING = "missing"
    NEGATIVE_WEIGHT = "negative_weight"
    NON_FINITE_WEIGHT = "non_finite_weight"
    UNKNOWN_CRITERION = "unknown_criterion"
    SUM_MISMATCH = "sum_mismatch"


class EvaluationError(Exception):
    kind = "evaluation_error"

    def __init__(self, identifier: str, message: str):
        super().__init__(message)
        self.identifier = identifier
        self.message = message

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(kind=self.kind, identifier=self.identifier, message=self.message)

    def to_dict(self) -> dict:
        return self.to_detail().model_dump(mode="json")


class InvalidWeightsError(EvaluationError):
    """Weight set is missing, non-finite, negative, unknown or does not sum to 100"""
    kind = "invalid_weights"

    def __init__(self, package_id: str, rule: WeightRule, message: str,
                 criterion: Optional[str] = None, total: Optional[float] = None):
        super().__init__(package_id, message)
        self.rule = rule
        self.criterion = criterion
        self.total = total

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(
            kind=self.kind,
            identifier=self.identifier,
            message=self.message,
            criterion=self.criterion,
            value=self.total,
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["rule"] = self.rule.value
        return data


class InvalidScoreError(EvaluationError):
    """Raw criterion score outside [0, 100]. Excludes the bid only."""
    kind = "invalid_score"

    def __init__(self, bid_id: str, criterion: str, value: float):
        super().__init__(
            bid_id,
            f"Score for '{criterion}' must be between 0 and 100, got {value}",
        )
        self.criterion = criterion
        self.value = value

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(
            kind=self.kind,
            identifier=self.identifier,
            message=self.message,
            criterion=self.criterion,
            value=self.value,
        )


class IncompleteBidError(EvaluationError):
    """Bid lacks a raw score for a weighted criterion. Excludes the bid only."""
    kind = "incomplete_bid"

    def __init__(self, bid_id: str, missing: Iterable[str]):
        self.missing = sorted(missing)
        super().__init__(bid_id, f"Missing scores for: {', '.join(self.missing)}")

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(
            kind=self.kind,
            identifier=self.identifier,
            message=self.message,
            missing=list(self.missing),
        )


class PackageStateError(EvaluationError):
    """Operation not allowed in the package's current status"""
    kind = "invalid_package_state"

    def __init__(self, package_id: str, status: str, operation: str, message: Optional[str] = None):
        super().__init__(
            package_id,
            message or f"Cannot {operation} a package in status '{status}'",
        )
        self.status = status
        self.operation = operation

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["status"] = self.status
        data["operation"] = self.operation
        return data


class DuplicateBidError(EvaluationError):
    kind = "duplicate_bid"

    def __init__(self, package_id: str, bid_id: str):
        super().__init__(bid_id, f"Bid '{bid_id}' already exists in package '{package_id}'")
        self.package_id = package_id

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["package_id"] = self.package_id
        return data


class UnknownAlternateError(EvaluationError):
    """Accepted alternate is not offered on the awarded bid"""
    kind = "unknown_alternate"

    def __init__(self, bid_id: str, description: str):
        super().__init__(bid_id, f"Bid '{bid_id}' has no alternate '{description}'")
        self.description = description

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["description"] = self.description
        return data
