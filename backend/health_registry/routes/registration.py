"""Registration API routes: identifier issuance, registration, login."""

from fastapi import APIRouter, Depends

from health_registry.dependencies import get_registration_service
from health_registry.schemas import (
    CandidateRegistration,
    CompleteRegistrationRequest,
    FingerprintScanned,
    FullProfileResponse,
    HealthIdRequest,
    IdentifierIssued,
    LoginResponse,
    RegistrationCompleted,
)
from health_registry.services.registration import RegistrationService

router = APIRouter(prefix="/registration", tags=["registration"])


@router.post("/identifier", response_model=IdentifierIssued)
async def issue_identifier(
    candidate: CandidateRegistration,
    service: RegistrationService = Depends(get_registration_service),
) -> IdentifierIssued:
    """Issue a health identifier for a candidate. Nothing is stored yet."""
    health_id, user_data = await service.issue_identifier(candidate)
    return IdentifierIssued(
        message="Health ID generated successfully!",
        health_id=health_id,
        user_data=user_data,
    )


@router.post("/complete", response_model=RegistrationCompleted)
async def complete_registration(
    request: CompleteRegistrationRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationCompleted:
    """Persist the person and their health profile under an issued identifier."""
    person, profile_saved = await service.complete_registration(request)
    return RegistrationCompleted(
        message="Registration completed successfully!",
        health_id=person.health_id,
        health_profile_saved=profile_saved,
    )


@router.post("/fingerprint", response_model=FingerprintScanned)
async def fingerprint_scan(
    request: HealthIdRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> FingerprintScanned:
    health_status = await service.mark_fingerprint_scanned(request.health_id)
    return FingerprintScanned(
        message="Fingerprint scan completed successfully!",
        health_status=health_status,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    request: HealthIdRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> LoginResponse:
    user = await service.login(request.health_id)
    return LoginResponse(message="Login successful!", user=user)


@router.post("/login-with-benefits", response_model=FullProfileResponse)
async def login_with_benefits(
    request: HealthIdRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> FullProfileResponse:
    """Login returning the full profile: benefits and family members included."""
    user = await service.login_with_benefits(request.health_id)
    return FullProfileResponse(message="Login successful!", user=user)
