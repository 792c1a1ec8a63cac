"""Benefits API routes."""

from fastapi import APIRouter, Depends

from health_registry.dependencies import get_benefits_service
from health_registry.schemas import (
    BenefitsResponse,
    CoverageUsageRequest,
    VerifyBenefitsRequest,
    VerifyBenefitsResponse,
)
from health_registry.services.benefits import BenefitsService

router = APIRouter(prefix="/benefits", tags=["benefits"])


@router.post("/verify", response_model=VerifyBenefitsResponse)
async def verify_benefits(
    request: VerifyBenefitsRequest,
    service: BenefitsService = Depends(get_benefits_service),
) -> VerifyBenefitsResponse:
    """Verify eligibility and enroll eligible persons.

    An ineligible outcome is not an error: it returns 200 with
    ``success=false`` and the reason.
    """
    outcome = await service.verify(request)
    if not outcome.eligible:
        return VerifyBenefitsResponse(success=False, message=outcome.reason, benefits=outcome)
    return VerifyBenefitsResponse(
        message=f"Benefits verification successful! You are eligible for {outcome.coverage_amount:,.0f} coverage.",
        benefits=outcome,
    )


@router.get("/{health_id}", response_model=BenefitsResponse)
async def get_benefits(
    health_id: str,
    service: BenefitsService = Depends(get_benefits_service),
) -> BenefitsResponse:
    benefits = await service.get_benefits(health_id)
    return BenefitsResponse(benefits=benefits)


@router.post("/{health_id}/usage", response_model=BenefitsResponse)
async def record_usage(
    health_id: str,
    request: CoverageUsageRequest,
    service: BenefitsService = Depends(get_benefits_service),
) -> BenefitsResponse:
    """Draw an amount from the person's remaining coverage."""
    benefits = await service.record_usage(health_id, request.amount)
    return BenefitsResponse(message="Coverage usage recorded.", benefits=benefits)
