"""Registration service: identifier issuance, registration and login.

Registration is a two-step flow. ``issue_identifier`` validates the candidate
and hands back a fresh health identifier without persisting anything, so an
abandoned identifier leaves no orphan row. ``complete_registration`` persists
the person and then, as a separate best-effort write, their health profile.
"""

from __future__ import annotations

import logging

from health_registry.errors import DuplicateEmail, NotFound, RegistryError, ValidationError
from health_registry.models import HealthProfile, PersonRecord
from health_registry.repositories import RecordStore
from health_registry.schemas.benefits import BenefitsSummary
from health_registry.schemas.registration import (
    CandidateRegistration,
    CompleteRegistrationRequest,
    FullProfileView,
    PersonView,
)
from health_registry.services.directory import family_member_view
from health_registry.services.identifiers import PERSON_ID_PATTERN, IdentifierGenerator, issue_unique
from health_registry.utils.redaction import redact_national_id

logger = logging.getLogger(__name__)

PERSON_FIELDS = ("name", "date_of_birth", "city", "email", "blood_group", "national_id")

FINGERPRINT_HEALTH_STATUS = (
    "Health scan complete. All parameters normal. Registration process finished."
)


def missing_fields(data: object, fields: tuple[str, ...]) -> list[str]:
    """Names of ``fields`` that are absent or blank on ``data``, in order."""
    missing = []
    for field in fields:
        value = getattr(data, field, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def normalize_email(email: str) -> str:
    return email.strip().lower()


def person_view(person: PersonRecord, profile: HealthProfile | None) -> PersonView:
    return PersonView(
        health_id=person.health_id,
        name=person.name,
        date_of_birth=person.date_of_birth,
        city=person.city,
        email=person.email,
        blood_group=person.blood_group,
        national_id=redact_national_id(person.national_id),
        fingerprint_scanned=person.fingerprint_scanned,
        chronic_conditions=profile.chronic_conditions if profile else None,
        allergies=profile.allergies if profile else None,
        emergency_contact=profile.emergency_contact if profile else None,
        current_medication=profile.current_medication if profile else None,
        created_at=person.created_at,
    )


class RegistrationService:
    def __init__(self, store: RecordStore, generator: IdentifierGenerator):
        self.store = store
        self.generator = generator

    async def issue_identifier(self, candidate: CandidateRegistration) -> tuple[str, CandidateRegistration]:
        """Validate a candidate and issue an unused health identifier.

        Nothing is persisted; the identifier is only reserved once
        ``complete_registration`` stores the person.

        Raises:
            ValidationError: Required fields are missing.
            DuplicateEmail: The email is already registered.
            GenerationExhausted: No unused identifier could be produced.
        """
        missing = missing_fields(candidate, PERSON_FIELDS)
        if missing:
            raise ValidationError(missing_fields=missing)

        if await self.store.get_person_by_email(normalize_email(candidate.email)) is not None:
            raise DuplicateEmail()

        health_id, _ = await issue_unique(
            self.generator.issue_person_id,
            self.store.health_id_exists,
            kind="health ID",
        )
        logger.info("Issued health ID %s", health_id)
        return health_id, candidate

    async def complete_registration(self, request: CompleteRegistrationRequest) -> tuple[PersonRecord, bool]:
        """Persist the person, then their health profile.

        The person row is authoritative: once it is stored the registration
        succeeds, even if the profile write fails afterwards.

        Returns:
            The stored person and whether the health profile was saved.
        """
        missing = missing_fields(request, ("health_id", *PERSON_FIELDS))
        if missing:
            raise ValidationError(missing_fields=missing)
        health_id = request.health_id.strip()
        if not PERSON_ID_PATTERN.match(health_id):
            raise ValidationError(f"Malformed health ID: {health_id}.")

        person = await self.store.create_person(
            PersonRecord(
                health_id=health_id,
                name=request.name.strip(),
                date_of_birth=request.date_of_birth.strip(),
                city=request.city.strip(),
                email=normalize_email(request.email),
                blood_group=request.blood_group.strip(),
                national_id=request.national_id.strip(),
                fingerprint_scanned=False,
            )
        )

        try:
            await self.store.upsert_health_profile(
                health_id,
                chronic_conditions=request.chronic_conditions,
                allergies=request.allergies,
                emergency_contact=request.emergency_contact,
                current_medication=request.current_medication,
            )
        except RegistryError as exc:
            logger.warning("Health profile for %s not saved: %s", health_id, exc.message)
            return person, False

        return person, True

    async def mark_fingerprint_scanned(self, health_id: str | None) -> str:
        if not health_id:
            raise ValidationError(missing_fields=["health_id"])
        await self.store.set_fingerprint_status(health_id, True)
        logger.info("Fingerprint scanned for %s", health_id)
        return FINGERPRINT_HEALTH_STATUS

    async def login(self, health_id: str | None) -> PersonView:
        """Person joined with their health profile."""
        person = await self._require_person(health_id)
        profile = await self.store.get_health_profile(person.health_id)
        return person_view(person, profile)

    async def login_with_benefits(self, health_id: str | None) -> FullProfileView:
        """Person, profile, benefits summary and family members in one view."""
        person = await self._require_person(health_id)
        profile = await self.store.get_health_profile(person.health_id)
        enrollment = await self.store.get_benefits_enrollment(person.health_id)
        members = await self.store.list_family_members(person.health_id)

        benefits = None
        if enrollment is not None and enrollment.enrolled:
            benefits = BenefitsSummary(
                card_number=enrollment.card_number,
                coverage_amount=enrollment.coverage_amount,
                used_amount=enrollment.used_amount,
                remaining_amount=enrollment.remaining_amount,
                family_size=enrollment.family_size,
                state=enrollment.state,
                district=enrollment.district,
            )

        return FullProfileView(
            **person_view(person, profile).model_dump(),
            benefits=benefits,
            family_members=[family_member_view(member) for member in members],
        )

    async def _require_person(self, health_id: str | None) -> PersonRecord:
        if not health_id:
            raise ValidationError(missing_fields=["health_id"])
        person = await self.store.get_person(health_id)
        if person is None:
            raise NotFound("Health ID not found. Please check your ID and try again.")
        return person
