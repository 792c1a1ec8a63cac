"""Teleconsultation routes."""

from fastapi import APIRouter, Depends

from health_registry.dependencies import get_consultation_service
from health_registry.schemas import (
    ConsultationCreate,
    ConsultationHistoryResponse,
    ConsultationResponse,
    ConsultationSubmitted,
    DoctorResponseRequest,
)
from health_registry.services.consultations import ConsultationService

router = APIRouter(prefix="/consultations", tags=["consultations"])


@router.post("", response_model=ConsultationSubmitted)
async def submit_consultation(
    request: ConsultationCreate,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationSubmitted:
    consultation = await service.submit(request)
    return ConsultationSubmitted(
        message="Consultation request submitted successfully",
        consultation_id=consultation.id,
        status=consultation.status.value,
    )


@router.get("/{health_id}", response_model=ConsultationHistoryResponse)
async def consultation_history(
    health_id: str,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationHistoryResponse:
    consultations = await service.list_history(health_id)
    return ConsultationHistoryResponse(consultations=consultations)


@router.post("/{consultation_id}/response", response_model=ConsultationResponse)
async def respond_to_consultation(
    consultation_id: int,
    request: DoctorResponseRequest,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationResponse:
    """Record the clinician's response; the request becomes ``responded``."""
    consultation = await service.respond(consultation_id, request.doctor_response)
    return ConsultationResponse(message="Consultation response recorded.", consultation=consultation)
