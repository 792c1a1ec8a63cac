"""Tests for teleconsultation requests."""

from datetime import datetime, timedelta, timezone

import pytest

from health_registry.errors import InvalidTransition, NotFound, ValidationError
from health_registry.models import ConsultationRequest, ConsultationStatus
from health_registry.schemas import ConsultationCreate
from health_registry.services.consultations import (
    MALFORMED_ATTACHMENTS_WARNING,
    ConsultationService,
    deserialize_attachments,
    serialize_attachments,
)

from conftest import PERSON_ID

SUBMITTED = datetime(2026, 1, 18, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def service(store) -> ConsultationService:
    return ConsultationService(store)


def consultation_request(**overrides) -> ConsultationCreate:
    fields = {
        "health_id": PERSON_ID,
        "subject": "Persistent cough",
        "description": "Dry cough for two weeks",
        "urgency": "High",
    }
    fields.update(overrides)
    return ConsultationCreate(**fields)


class TestAttachments:
    def test_serialization(self):
        assert serialize_attachments([]) is None
        assert deserialize_attachments(serialize_attachments(["a", "b"])) == ["a", "b"]

    def test_malformed_values(self):
        assert deserialize_attachments("not json") is None
        assert deserialize_attachments('{"a": 1}') is None
        assert deserialize_attachments(None) == []


class TestSubmit:
    """Tests for consultation submission."""

    @pytest.mark.asyncio
    async def test_defaults(self, service, person):
        consultation = await service.submit(consultation_request())

        assert consultation.status == ConsultationStatus.PENDING
        assert consultation.patient_name == "Asha Verma"
        assert consultation.urgency == "high"
        assert consultation.preferred_language == "English"
        assert consultation.attached_images is None

    @pytest.mark.asyncio
    async def test_missing_fields(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.submit(consultation_request(subject="", urgency=None))
        assert exc_info.value.missing_fields == ["subject", "urgency"]

    @pytest.mark.asyncio
    async def test_unknown_person(self, service):
        with pytest.raises(NotFound):
            await service.submit(consultation_request())


class TestHistory:
    @pytest.mark.asyncio
    async def test_newest_first_with_attachments(self, service, person):
        await service.submit(consultation_request(subject="First", submission_date=SUBMITTED))
        await service.submit(
            consultation_request(
                subject="Second",
                attached_images=["img-a", "img-b"],
                submission_date=SUBMITTED + timedelta(days=1),
            )
        )

        history = await service.list_history(PERSON_ID)

        assert [c.subject for c in history] == ["Second", "First"]
        assert history[0].attached_images == ["img-a", "img-b"]
        assert history[1].attached_images == []
        assert history[0].status == "pending"

    @pytest.mark.asyncio
    async def test_malformed_attachments_are_flagged(self, service, store, person):
        await store.add_consultation(
            ConsultationRequest(
                owner_health_id=PERSON_ID,
                patient_name="Asha Verma",
                subject="Rash",
                description="Itchy rash",
                urgency="low",
                preferred_language="Hindi",
                attached_images="[broken",
                status=ConsultationStatus.PENDING,
            )
        )

        [view] = await service.list_history(PERSON_ID)
        assert view.attached_images == []
        assert view.attachment_warning == MALFORMED_ATTACHMENTS_WARNING

    @pytest.mark.asyncio
    async def test_empty_history(self, service, person):
        assert await service.list_history(PERSON_ID) == []


class TestRespond:
    @pytest.mark.asyncio
    async def test_response_closes_request(self, service, person):
        consultation = await service.submit(consultation_request())
        view = await service.respond(consultation.id, "  Rest and fluids  ")

        assert view.status == "responded"
        assert view.doctor_response == "Rest and fluids"
        assert view.response_date is not None

    @pytest.mark.asyncio
    async def test_cannot_respond_twice(self, service, person):
        consultation = await service.submit(consultation_request())
        await service.respond(consultation.id, "First")

        with pytest.raises(InvalidTransition):
            await service.respond(consultation.id, "Second")

    @pytest.mark.asyncio
    async def test_empty_response(self, service, person):
        consultation = await service.submit(consultation_request())
        with pytest.raises(ValidationError):
            await service.respond(consultation.id, " ")
