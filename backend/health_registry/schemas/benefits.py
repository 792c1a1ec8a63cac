"""Schemas for benefits verification and coverage."""

from pydantic import Field

from health_registry.schemas.common import ApiModel, ApiResponse

MAX_FAMILY_SIZE = 100


class VerifyBenefitsRequest(ApiModel):
    health_id: str | None = None
    annual_income: float | None = Field(default=None, allow_inf_nan=False)
    family_size: int | None = Field(default=None, le=MAX_FAMILY_SIZE)
    family_head_name: str | None = None
    state: str | None = None
    district: str | None = None
    block: str | None = None
    village: str | None = None


class EligibilityOutcome(ApiModel):
    eligible: bool
    reason: str
    card_number: str | None = None
    coverage_amount: float | None = None
    family_size: int | None = None
    remaining_amount: float | None = None


class VerifyBenefitsResponse(ApiResponse):
    benefits: EligibilityOutcome


class BenefitsSummary(ApiModel):
    """Enrollment as embedded in the full profile."""

    card_number: str | None = None
    coverage_amount: float
    used_amount: float
    remaining_amount: float
    family_size: int | None = None
    state: str = ""
    district: str = ""


class BenefitsView(BenefitsSummary):
    """Enrollment joined with the beneficiary's name and city."""

    beneficiary_name: str
    family_head_name: str | None = None
    city: str
    block: str = ""
    village: str = ""


class BenefitsResponse(ApiResponse):
    benefits: BenefitsView


class CoverageUsageRequest(ApiModel):
    amount: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Amount to draw from remaining coverage",
    )
