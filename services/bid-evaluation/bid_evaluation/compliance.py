"""Compliance classification of bids from their review signals."""

from typing import Dict, FrozenSet, Optional, Tuple

from .models import ComplianceSignals, ComplianceState

# Allowed moves between states. A state may always stay where it is.
# Nothing returns to under_review and nothing leaves rejected.
TRANSITIONS: Dict[ComplianceState, FrozenSet[ComplianceState]] = {
    ComplianceState.UNDER_REVIEW: frozenset({
        ComplianceState.CLARIFICATION_NEEDED,
        ComplianceState.COMPLIANT,
        ComplianceState.REJECTED,
    }),
    ComplianceState.CLARIFICATION_NEEDED: frozenset({
        ComplianceState.COMPLIANT,
        ComplianceState.REJECTED,
    }),
    # A compliant bid can still lose its bond or gain a clarification item
    ComplianceState.COMPLIANT: frozenset({
        ComplianceState.CLARIFICATION_NEEDED,
        ComplianceState.REJECTED,
    }),
    ComplianceState.REJECTED: frozenset(),
}


def can_transition(current: ComplianceState, target: ComplianceState) -> bool:
    return current == target or target in TRANSITIONS[current]


class ComplianceClassifier:
    """
    Derives a bid's compliance state. Price and score are never considered.

    - under_review: compliance checks have not run yet
    - rejected: a required document is missing or a required bond is absent
    - clarification_needed: documents complete but clarifications are open
    - compliant: everything else
    """

    def classify(self, signals: ComplianceSignals) -> ComplianceState:
        if not signals.review_complete:
            return ComplianceState.UNDER_REVIEW
        if signals.missing_documents:
            return ComplianceState.REJECTED
        if signals.bond_required and not signals.bond_provided:
            return ComplianceState.REJECTED
        if signals.open_clarifications:
            return ComplianceState.CLARIFICATION_NEEDED
        return ComplianceState.COMPLIANT

    def classify_from(
        self, signals: ComplianceSignals, prior: Optional[ComplianceState]
    ) -> Tuple[ComplianceState, bool]:
        """
        Classify, honouring the transition rule against a previously recorded state.

        Returns (state, blocked). When the derived state is not reachable from
        prior, prior is kept and blocked is True.
        """
        derived = self.classify(signals)
        if prior is None or can_transition(prior, derived):
            return derived, False
        return prior, True
