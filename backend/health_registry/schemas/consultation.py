"""Schemas for teleconsultation requests."""

from datetime import datetime

from health_registry.schemas.common import ApiModel, ApiResponse


class ConsultationCreate(ApiModel):
    health_id: str | None = None
    patient_name: str | None = None
    subject: str | None = None
    description: str | None = None
    urgency: str | None = None
    preferred_language: str | None = None
    attached_images: list[str] | None = None
    submission_date: datetime | None = None


class ConsultationView(ApiModel):
    id: int
    patient_name: str
    subject: str
    description: str
    urgency: str
    preferred_language: str
    attached_images: list[str]
    submission_date: datetime
    status: str
    doctor_response: str | None = None
    response_date: datetime | None = None
    # Set when stored attachments could not be read back
    attachment_warning: str | None = None


class ConsultationSubmitted(ApiResponse):
    consultation_id: int
    status: str


class ConsultationHistoryResponse(ApiResponse):
    consultations: list[ConsultationView]


class DoctorResponseRequest(ApiModel):
    doctor_response: str | None = None


class ConsultationResponse(ApiResponse):
    consultation: ConsultationView
