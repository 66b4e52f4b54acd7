"""Validation of a package's criteria weight set."""

import math
from typing import Dict, Optional

from .errors import InvalidWeightsError, WeightRule
from .models import CriteriaWeightSet, EvaluationSettings


class WeightValidator:
    """
    Checks a weight set before any scoring happens.

    Rules are checked in a fixed order so the same bad input always
    reports the same rule: missing, non-finite, negative, unknown, sum.
    """

    def __init__(self, settings: Optional[EvaluationSettings] = None):
        self.settings = settings or EvaluationSettings()

    def validate(self, package_id: str, weights: CriteriaWeightSet) -> Dict[str, float]:
        """Return the weights as a plain dict, or raise InvalidWeightsError"""
        values = dict(weights.root)
        if not values:
            raise InvalidWeightsError(
                package_id, WeightRule.MISSING, "No evaluation criteria weights defined"
            )

        for name, weight in values.items():
            if not math.isfinite(weight):
                raise InvalidWeightsError(
                    package_id,
                    WeightRule.NON_FINITE_WEIGHT,
                    f"Weight for '{name}' is not a finite number ({weight})",
                    criterion=name,
                )
            if weight < 0:
                raise InvalidWeightsError(
                    package_id,
                    WeightRule.NEGATIVE_WEIGHT,
                    f"Weight for '{name}' is negative ({weight})",
                    criterion=name,
                )

        taxonomy = self.settings.taxonomy
        for name in values:
            if name not in taxonomy:
                raise InvalidWeightsError(
                    package_id,
                    WeightRule.UNKNOWN_CRITERION,
                    f"Unknown criterion '{name}'",
                    criterion=name,
                )

        total = sum(values.values())
        if abs(total - 100.0) > self.settings.weight_tolerance:
            raise InvalidWeightsError(
                package_id,
                WeightRule.SUM_MISMATCH,
                f"Weights sum to {total:g}, expected 100",
                total=total,
            )

        return values
