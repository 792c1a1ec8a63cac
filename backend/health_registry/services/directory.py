"""Directory service: family members and empaneled hospital search.

National ID numbers are stored in full and redacted here, on the way out.
"""

from __future__ import annotations

import logging

from health_registry.config import settings
from health_registry.errors import ValidationError
from health_registry.models import EmpaneledHospital, FamilyMember
from health_registry.repositories import HospitalFilter, RecordStore
from health_registry.schemas.directory import FamilyMemberCreate, FamilyMemberView, HospitalView
from health_registry.services.identifiers import IdentifierGenerator, issue_unique
from health_registry.utils.redaction import redact_national_id
from health_registry.utils.tags import split_tags

logger = logging.getLogger(__name__)


def family_member_view(member: FamilyMember) -> FamilyMemberView:
    return FamilyMemberView(
        id=member.id,
        name=member.name,
        relation=member.relation,
        age=member.age,
        gender=member.gender,
        health_id=member.member_health_id,
        national_id=redact_national_id(member.national_id),
    )


def hospital_view(hospital: EmpaneledHospital) -> HospitalView:
    return HospitalView(
        id=hospital.id,
        name=hospital.name,
        code=hospital.code,
        address=hospital.address,
        city=hospital.city,
        state=hospital.state,
        postal_code=hospital.postal_code,
        phone=hospital.phone,
        specialties=split_tags(hospital.specialties),
        packages=split_tags(hospital.packages),
        latitude=hospital.latitude,
        longitude=hospital.longitude,
    )


class DirectoryService:
    def __init__(self, store: RecordStore, generator: IdentifierGenerator):
        self.store = store
        self.generator = generator

    async def add_family_member(self, request: FamilyMemberCreate) -> FamilyMemberView:
        """Register a family member under an existing person.

        A member supplied with a national ID gets their own health identifier,
        issued under the same collision rules as a person's.

        Raises:
            ValidationError: Owner, name or relation missing, or negative age.
            NotFound: The owning person is not registered.
        """
        missing = [
            field
            for field in ("owner_health_id", "name", "relation")
            if not (getattr(request, field) or "").strip()
        ]
        if missing:
            raise ValidationError(
                "Primary health ID, member name, and relation are required.",
                missing_fields=missing,
            )
        if request.age is not None and request.age < 0:
            raise ValidationError("Age cannot be negative.")

        national_id = (request.national_id or "").strip()

        def build(member_health_id: str | None) -> FamilyMember:
            return FamilyMember(
                owner_health_id=request.owner_health_id.strip(),
                name=request.name.strip(),
                relation=request.relation.strip(),
                age=request.age,
                gender=(request.gender or "").strip(),
                national_id=national_id,
                member_health_id=member_health_id,
            )

        if not national_id:
            member = await self.store.add_family_member(build(None))
        else:

            async def claim(member_health_id: str) -> FamilyMember:
                return await self.store.add_family_member(build(member_health_id))

            _, member = await issue_unique(
                self.generator.issue_person_id,
                self.store.health_id_exists,
                kind="family member health ID",
                claim=claim,
            )

        logger.info("Added family member %s under %s", member.id, member.owner_health_id)
        return family_member_view(member)

    async def list_family_members(self, owner_health_id: str) -> list[FamilyMemberView]:
        members = await self.store.list_family_members(owner_health_id)
        return [family_member_view(member) for member in members]

    async def list_hospitals(
        self,
        city: str | None = None,
        specialty: str | None = None,
        limit: int | None = None,
    ) -> list[HospitalView]:
        """Search empaneled hospitals by city and specialty substring."""
        if limit is None:
            limit = settings.hospital_search_default_limit
        if limit < 1:
            raise ValidationError("Limit must be at least 1.")
        limit = min(limit, settings.hospital_search_max_limit)

        hospitals = await self.store.list_hospitals(
            HospitalFilter(
                city_contains=(city or "").strip() or None,
                specialty_contains=(specialty or "").strip() or None,
                limit=limit,
            )
        )
        return [hospital_view(hospital) for hospital in hospitals]
