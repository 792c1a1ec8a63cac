"""Record store.

Single entry point for registry persistence. Every public operation runs in
its own transaction: the write and any checks it depends on either commit
together or roll back together. Joins across entities are left to the
services, so each method here touches one entity (plus the owning person
check for foreign-keyed rows).

Uniqueness and foreign keys are enforced twice: a read-before-write check that
produces a precise error, and the database constraint itself for writes that
race past the check. An ``IntegrityError`` at commit is classified by
re-reading the store.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import delete, exists, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from health_registry.config import settings
from health_registry.errors import (
    DuplicateCard,
    DuplicateEmail,
    DuplicateIdentifier,
    DuplicateImage,
    InvalidTransition,
    NotFound,
    StorageError,
    ValidationError,
)
from health_registry.models import (
    BenefitsEnrollment,
    ConsultationRequest,
    ConsultationStatus,
    EmpaneledHospital,
    FamilyMember,
    HealthProfile,
    MedicalImage,
    PersonRecord,
)

logger = logging.getLogger(__name__)

# Columns a hospital upsert may set; the code is the lookup key
HOSPITAL_FIELDS = frozenset(EmpaneledHospital.__table__.columns.keys()) - {
    "id",
    "code",
    "created_at",
}


@dataclass(frozen=True)
class HospitalFilter:
    """Case-insensitive substring filter for the hospital directory."""

    city_contains: str | None = None
    specialty_contains: str | None = None
    limit: int = field(default_factory=lambda: settings.hospital_search_default_limit)


class RecordStore:
    """Transactional per-entity persistence for the registry.

    Constructed explicitly over a session factory and handed to the services,
    so tests can point it at a throwaway database.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Open a session and transaction, committing on clean exit.

        Integrity errors propagate untouched for the caller to classify; any
        other database failure is logged and surfaced as ``StorageError``.
        """
        try:
            async with self._session_maker() as session, session.begin():
                yield session
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            logger.error("Storage failure during %s: %s", operation, exc, exc_info=True)
            raise StorageError(operation) from exc

    def _unclassified(self, operation: str, exc: IntegrityError) -> StorageError:
        logger.error("Unexpected constraint violation during %s: %s", operation, exc)
        return StorageError(operation)

    @staticmethod
    async def _require_person(session: AsyncSession, health_id: str) -> PersonRecord:
        person = await session.get(PersonRecord, health_id)
        if person is None:
            raise NotFound(f"Health ID {health_id} not found.")
        return person

    @staticmethod
    async def _health_id_taken(session: AsyncSession, health_id: str) -> bool:
        stmt = select(
            or_(
                exists().where(PersonRecord.health_id == health_id),
                exists().where(FamilyMember.member_health_id == health_id),
            )
        )
        return bool(await session.scalar(stmt))

    # ------------------------------------------------------------------
    # Persons
    # ------------------------------------------------------------------

    async def create_person(self, person: PersonRecord) -> PersonRecord:
        """Insert a new person.

        Raises:
            DuplicateEmail: The email is already registered.
            DuplicateIdentifier: The health identifier is already in use.
        """
        try:
            async with self._transaction("create person") as session:
                taken = await session.scalar(
                    select(exists().where(PersonRecord.email == person.email))
                )
                if taken:
                    raise DuplicateEmail()
                if await self._health_id_taken(session, person.health_id):
                    raise DuplicateIdentifier(f"Health ID {person.health_id} already exists.")
                session.add(person)
        except IntegrityError as exc:
            if await self.get_person_by_email(person.email) is not None:
                raise DuplicateEmail() from exc
            if await self.health_id_exists(person.health_id):
                raise DuplicateIdentifier(f"Health ID {person.health_id} already exists.") from exc
            raise self._unclassified("create person", exc) from exc

        logger.info("Registered person %s", person.health_id)
        return person

    async def get_person(self, health_id: str) -> PersonRecord | None:
        async with self._transaction("get person") as session:
            return await session.get(PersonRecord, health_id)

    async def get_person_by_email(self, email: str) -> PersonRecord | None:
        async with self._transaction("get person by email") as session:
            result = await session.execute(select(PersonRecord).where(PersonRecord.email == email))
            return result.scalar_one_or_none()

    async def health_id_exists(self, health_id: str) -> bool:
        """Whether a person or a family member already holds this identifier."""
        async with self._transaction("check health id") as session:
            return await self._health_id_taken(session, health_id)

    async def set_fingerprint_status(self, health_id: str, scanned: bool) -> None:
        async with self._transaction("set fingerprint status") as session:
            result = await session.execute(
                update(PersonRecord)
                .where(PersonRecord.health_id == health_id)
                .values(fingerprint_scanned=scanned)
            )
            if result.rowcount == 0:
                raise NotFound(f"Health ID {health_id} not found.")

    # ------------------------------------------------------------------
    # Health profiles
    # ------------------------------------------------------------------

    async def upsert_health_profile(
        self,
        health_id: str,
        *,
        chronic_conditions: str | None = None,
        allergies: str | None = None,
        emergency_contact: str | None = None,
        current_medication: str | None = None,
    ) -> HealthProfile:
        """Insert or replace the health profile keyed by health identifier."""
        try:
            async with self._transaction("upsert health profile") as session:
                await self._require_person(session, health_id)
                profile = await session.get(HealthProfile, health_id)
                if profile is None:
                    profile = HealthProfile(health_id=health_id)
                    session.add(profile)
                profile.chronic_conditions = chronic_conditions or ""
                profile.allergies = allergies or ""
                profile.emergency_contact = emergency_contact or ""
                profile.current_medication = current_medication or ""
        except IntegrityError as exc:
            raise self._unclassified("upsert health profile", exc) from exc
        return profile

    async def get_health_profile(self, health_id: str) -> HealthProfile | None:
        async with self._transaction("get health profile") as session:
            return await session.get(HealthProfile, health_id)

    # ------------------------------------------------------------------
    # Benefits enrollments
    # ------------------------------------------------------------------

    async def card_number_exists(self, card_number: str) -> bool:
        async with self._transaction("check card number") as session:
            return bool(
                await session.scalar(
                    select(exists().where(BenefitsEnrollment.card_number == card_number))
                )
            )

    async def upsert_benefits_enrollment(
        self,
        health_id: str,
        *,
        card_number: str,
        coverage_amount: float,
        annual_income: float | None = None,
        family_size: int | None = None,
        family_head_name: str | None = None,
        state: str | None = None,
        district: str | None = None,
        block: str | None = None,
        village: str | None = None,
    ) -> BenefitsEnrollment:
        """Insert or replace the person's enrollment.

        A replacement supersedes the prior enrollment entirely, so usage
        tracking starts again from zero.

        Raises:
            NotFound: The person does not exist.
            DuplicateCard: The card number belongs to another enrollment.
        """
        try:
            async with self._transaction("upsert benefits enrollment") as session:
                await self._require_person(session, health_id)
                enrollment = await session.get(BenefitsEnrollment, health_id)
                if enrollment is None:
                    enrollment = BenefitsEnrollment(health_id=health_id)
                    session.add(enrollment)
                enrollment.enrolled = True
                enrollment.card_number = card_number
                enrollment.used_amount = 0
                enrollment.coverage_amount = coverage_amount
                enrollment.annual_income = annual_income
                enrollment.family_size = family_size
                enrollment.family_head_name = family_head_name
                enrollment.state = state or ""
                enrollment.district = district or ""
                enrollment.block = block or ""
                enrollment.village = village or ""
        except IntegrityError as exc:
            if await self.card_number_exists(card_number):
                raise DuplicateCard(f"Card number {card_number} already exists.") from exc
            raise self._unclassified("upsert benefits enrollment", exc) from exc

        logger.info("Enrolled %s with card %s", health_id, card_number)
        return enrollment

    async def get_benefits_enrollment(self, health_id: str) -> BenefitsEnrollment | None:
        async with self._transaction("get benefits enrollment") as session:
            return await session.get(BenefitsEnrollment, health_id)

    async def record_coverage_usage(self, health_id: str, amount: float) -> BenefitsEnrollment:
        """Add ``amount`` to the used coverage, never exceeding the coverage."""
        try:
            async with self._transaction("record coverage usage") as session:
                enrollment = await session.get(BenefitsEnrollment, health_id, with_for_update=True)
                if enrollment is None or not enrollment.enrolled:
                    raise NotFound(f"No benefits enrollment found for {health_id}.")
                if amount > enrollment.remaining_amount:
                    raise ValidationError(
                        f"Amount {amount:.2f} exceeds remaining coverage "
                        f"{enrollment.remaining_amount:.2f}."
                    )
                enrollment.used_amount = enrollment.used_amount + amount
        except IntegrityError as exc:
            raise self._unclassified("record coverage usage", exc) from exc
        return enrollment

    # ------------------------------------------------------------------
    # Family members
    # ------------------------------------------------------------------

    async def add_family_member(self, member: FamilyMember) -> FamilyMember:
        """Append a family member under an existing person.

        Raises:
            NotFound: The owning person does not exist.
            DuplicateIdentifier: The member's nested health identifier is taken.
        """
        try:
            async with self._transaction("add family member") as session:
                await self._require_person(session, member.owner_health_id)
                if member.member_health_id and await self._health_id_taken(
                    session, member.member_health_id
                ):
                    raise DuplicateIdentifier(
                        f"Health ID {member.member_health_id} already exists."
                    )
                session.add(member)
        except IntegrityError as exc:
            if member.member_health_id and await self.health_id_exists(member.member_health_id):
                raise DuplicateIdentifier(
                    f"Health ID {member.member_health_id} already exists."
                ) from exc
            if await self.get_person(member.owner_health_id) is None:
                raise NotFound(f"Health ID {member.owner_health_id} not found.") from exc
            raise self._unclassified("add family member", exc) from exc
        return member

    async def list_family_members(self, owner_health_id: str) -> list[FamilyMember]:
        """Family members in the order they were added."""
        async with self._transaction("list family members") as session:
            result = await session.execute(
                select(FamilyMember)
                .where(FamilyMember.owner_health_id == owner_health_id)
                .order_by(FamilyMember.created_at.asc(), FamilyMember.id.asc())
            )
            return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Empaneled hospitals
    # ------------------------------------------------------------------

    async def upsert_hospital(self, *, code: str, **fields) -> tuple[EmpaneledHospital, bool]:
        """Insert or update a hospital keyed by its unique code.

        Returns:
            The hospital and whether it was newly created.

        Raises:
            ValidationError: A field is not a hospital column.
        """
        unknown = sorted(set(fields) - HOSPITAL_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown hospital fields: {', '.join(unknown)}.")

        try:
            async with self._transaction("upsert hospital") as session:
                result = await session.execute(
                    select(EmpaneledHospital).where(EmpaneledHospital.code == code)
                )
                hospital = result.scalar_one_or_none()
                created = hospital is None
                if created:
                    hospital = EmpaneledHospital(code=code)
                    session.add(hospital)
                for key, value in fields.items():
                    setattr(hospital, key, value)
        except IntegrityError as exc:
            raise self._unclassified("upsert hospital", exc) from exc
        return hospital, created

    async def count_hospitals(self) -> int:
        async with self._transaction("count hospitals") as session:
            return await session.scalar(select(func.count()).select_from(EmpaneledHospital)) or 0

    async def list_hospitals(self, hospital_filter: HospitalFilter) -> list[EmpaneledHospital]:
        """Hospitals matching the filter, ordered by name, at most ``limit`` rows."""
        query = select(EmpaneledHospital)
        if hospital_filter.city_contains:
            query = query.where(
                EmpaneledHospital.city.icontains(hospital_filter.city_contains, autoescape=True)
            )
        if hospital_filter.specialty_contains:
            query = query.where(
                EmpaneledHospital.specialties.icontains(
                    hospital_filter.specialty_contains, autoescape=True
                )
            )
        query = query.order_by(EmpaneledHospital.name.asc(), EmpaneledHospital.id.asc()).limit(
            hospital_filter.limit
        )

        async with self._transaction("list hospitals") as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Medical images
    # ------------------------------------------------------------------

    async def add_medical_image(self, image: MedicalImage) -> MedicalImage:
        try:
            async with self._transaction("add medical image") as session:
                await self._require_person(session, image.owner_health_id)
                if await session.get(MedicalImage, image.image_id) is not None:
                    raise DuplicateImage(f"Image {image.image_id} already exists.")
                session.add(image)
        except IntegrityError as exc:
            if await self._image_exists(image.image_id):
                raise DuplicateImage(f"Image {image.image_id} already exists.") from exc
            if await self.get_person(image.owner_health_id) is None:
                raise NotFound(f"Health ID {image.owner_health_id} not found.") from exc
            raise self._unclassified("add medical image", exc) from exc
        return image

    async def _image_exists(self, image_id: str) -> bool:
        async with self._transaction("check medical image") as session:
            return await session.get(MedicalImage, image_id) is not None

    async def list_medical_images(self, owner_health_id: str) -> list[MedicalImage]:
        """Images for a person, most recent upload first."""
        async with self._transaction("list medical images") as session:
            result = await session.execute(
                select(MedicalImage)
                .where(MedicalImage.owner_health_id == owner_health_id)
                .order_by(MedicalImage.uploaded_at.desc(), MedicalImage.image_id.desc())
            )
            return list(result.scalars().all())

    async def delete_medical_image(self, image_id: str) -> bool:
        """Delete an image. Deleting an absent image is not an error.

        Returns:
            True if a row was removed, False if it was already absent.
        """
        async with self._transaction("delete medical image") as session:
            result = await session.execute(delete(MedicalImage).where(MedicalImage.image_id == image_id))
            return result.rowcount > 0

    # ------------------------------------------------------------------
    # Consultations
    # ------------------------------------------------------------------

    async def add_consultation(self, consultation: ConsultationRequest) -> ConsultationRequest:
        try:
            async with self._transaction("add consultation") as session:
                await self._require_person(session, consultation.owner_health_id)
                session.add(consultation)
        except IntegrityError as exc:
            if await self.get_person(consultation.owner_health_id) is None:
                raise NotFound(f"Health ID {consultation.owner_health_id} not found.") from exc
            raise self._unclassified("add consultation", exc) from exc
        return consultation

    async def list_consultations(self, owner_health_id: str) -> list[ConsultationRequest]:
        """Consultations for a person, newest submission first."""
        async with self._transaction("list consultations") as session:
            result = await session.execute(
                select(ConsultationRequest)
                .where(ConsultationRequest.owner_health_id == owner_health_id)
                .order_by(ConsultationRequest.submitted_at.desc(), ConsultationRequest.id.desc())
            )
            return list(result.scalars().all())

    async def get_consultation(self, consultation_id: int) -> ConsultationRequest | None:
        async with self._transaction("get consultation") as session:
            return await session.get(ConsultationRequest, consultation_id)

    async def record_consultation_response(
        self,
        consultation_id: int,
        doctor_response: str,
        responded_at: datetime,
    ) -> ConsultationRequest:
        """Move a pending consultation to responded.

        Raises:
            NotFound: No such consultation.
            InvalidTransition: The consultation was already responded to.
        """
        async with self._transaction("record consultation response") as session:
            result = await session.execute(
                update(ConsultationRequest)
                .where(
                    ConsultationRequest.id == consultation_id,
                    ConsultationRequest.status == ConsultationStatus.PENDING,
                )
                .values(
                    status=ConsultationStatus.RESPONDED,
                    doctor_response=doctor_response,
                    responded_at=responded_at,
                )
            )
            consultation = await session.get(
                ConsultationRequest, consultation_id, populate_existing=True
            )
            if consultation is None:
                raise NotFound(f"Consultation {consultation_id} not found.")
            if result.rowcount == 0:
                raise InvalidTransition(
                    f"Consultation {consultation_id} is already {consultation.status.value}."
                )
        return consultation


