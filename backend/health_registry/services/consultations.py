"""Teleconsultation request lifecycle.

A request is ``pending`` from submission until a clinician responds, after
which it is ``responded`` for good.
"""

from __future__ import annotations

import json
import logging

from health_registry.config import settings
from health_registry.errors import NotFound, ValidationError
from health_registry.models import ConsultationRequest, ConsultationStatus
from health_registry.repositories import RecordStore
from health_registry.schemas.consultation import ConsultationCreate, ConsultationView
from health_registry.utils.timestamps import as_utc, utcnow

logger = logging.getLogger(__name__)

MALFORMED_ATTACHMENTS_WARNING = "Attached images could not be read and were omitted."


def serialize_attachments(image_ids: list[str] | None) -> str | None:
    if not image_ids:
        return None
    return json.dumps(list(image_ids))


def deserialize_attachments(raw: str | None) -> list[str] | None:
    """Decode stored attachment ids. Returns None when the stored value is unreadable."""
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(decoded, list):
        return None
    return [str(item) for item in decoded]


def consultation_view(consultation: ConsultationRequest) -> ConsultationView:
    attachments = deserialize_attachments(consultation.attached_images)
    warning = None
    if attachments is None:
        logger.warning(
            "Consultation %s has malformed attachment data; treating as empty",
            consultation.id,
        )
        attachments = []
        warning = MALFORMED_ATTACHMENTS_WARNING

    return ConsultationView(
        id=consultation.id,
        patient_name=consultation.patient_name,
        subject=consultation.subject,
        description=consultation.description,
        urgency=consultation.urgency,
        preferred_language=consultation.preferred_language,
        attached_images=attachments,
        submission_date=consultation.submitted_at,
        status=ConsultationStatus(consultation.status).value,
        doctor_response=consultation.doctor_response,
        response_date=consultation.responded_at,
        attachment_warning=warning,
    )


class ConsultationService:
    def __init__(self, store: RecordStore):
        self.store = store

    async def submit(self, request: ConsultationCreate) -> ConsultationRequest:
        """Store a new consultation request in the ``pending`` state.

        Raises:
            ValidationError: Health ID, subject, description or urgency missing.
            NotFound: The person is not registered.
        """
        missing = [
            field
            for field in ("health_id", "subject", "description", "urgency")
            if not (getattr(request, field) or "").strip()
        ]
        if missing:
            raise ValidationError("Missing required consultation data.", missing_fields=missing)

        person = await self.store.get_person(request.health_id)
        if person is None:
            raise NotFound(f"Health ID {request.health_id} not found.")

        consultation = await self.store.add_consultation(
            ConsultationRequest(
                owner_health_id=person.health_id,
                patient_name=(request.patient_name or "").strip() or person.name,
                subject=request.subject.strip(),
                description=request.description.strip(),
                urgency=request.urgency.strip().lower(),
                preferred_language=(request.preferred_language or "").strip()
                or settings.default_preferred_language,
                attached_images=serialize_attachments(request.attached_images),
                submitted_at=as_utc(request.submission_date),
                status=ConsultationStatus.PENDING,
            )
        )
        logger.info("Consultation %s submitted by %s", consultation.id, person.health_id)
        return consultation

    async def list_history(self, health_id: str) -> list[ConsultationView]:
        """Consultations for a person, newest first."""
        consultations = await self.store.list_consultations(health_id)
        return [consultation_view(consultation) for consultation in consultations]

    async def respond(self, consultation_id: int, doctor_response: str | None) -> ConsultationView:
        """Record the clinician's response, closing the request.

        Raises:
            ValidationError: Empty response.
            NotFound: No such consultation.
            InvalidTransition: The request was already responded to.
        """
        if not (doctor_response or "").strip():
            raise ValidationError(missing_fields=["doctor_response"])
        consultation = await self.store.record_consultation_response(
            consultation_id, doctor_response.strip(), utcnow()
        )
        logger.info("Consultation %s responded", consultation_id)
        return consultation_view(consultation)
