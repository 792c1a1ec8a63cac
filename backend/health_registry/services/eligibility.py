"""Benefits-scheme eligibility rule.

Simulated locally: a household qualifies when its annual income is at or
below the configured threshold. No registry lookup takes place.
"""

from dataclasses import dataclass

from health_registry.config import settings

ELIGIBLE_REASON = "Eligible for benefits coverage"
INELIGIBLE_REASON = "Annual income exceeds the eligibility threshold"


@dataclass(frozen=True)
class EligibilityResult:
    eligible: bool
    reason: str


def evaluate_eligibility(annual_income: float, *, threshold: float | None = None) -> EligibilityResult:
    """Decide eligibility from household income. Boundary income is eligible."""
    limit = settings.benefits_income_threshold if threshold is None else threshold
    if annual_income <= limit:
        return EligibilityResult(eligible=True, reason=ELIGIBLE_REASON)
    return EligibilityResult(eligible=False, reason=INELIGIBLE_REASON)
