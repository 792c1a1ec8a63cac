"""Schemas for identifier issuance, registration and login."""

from datetime import datetime

from pydantic import Field

from health_registry.schemas.benefits import BenefitsSummary
from health_registry.schemas.common import ApiModel, ApiResponse
from health_registry.schemas.directory import FamilyMemberView


class CandidateRegistration(ApiModel):
    """Person details submitted to obtain a health identifier.

    Fields are optional at the schema level so the service can report every
    missing field at once.
    """

    name: str | None = None
    date_of_birth: str | None = None
    city: str | None = None
    email: str | None = None
    blood_group: str | None = None
    national_id: str | None = None


class CompleteRegistrationRequest(CandidateRegistration):
    health_id: str | None = None

    # Health profile
    chronic_conditions: str | None = None
    allergies: str | None = None
    emergency_contact: str | None = None
    current_medication: str | None = None


class IdentifierIssued(ApiResponse):
    health_id: str
    user_data: CandidateRegistration


class RegistrationCompleted(ApiResponse):
    health_id: str
    health_profile_saved: bool


class FingerprintScanned(ApiResponse):
    health_status: str


class PersonView(ApiModel):
    """Person joined with their health profile. National ID is redacted."""

    health_id: str
    name: str
    date_of_birth: str
    city: str
    email: str
    blood_group: str
    national_id: str | None = None
    fingerprint_scanned: bool
    chronic_conditions: str | None = None
    allergies: str | None = None
    emergency_contact: str | None = None
    current_medication: str | None = None
    created_at: datetime | None = None


class FullProfileView(PersonView):
    benefits: BenefitsSummary | None = None
    family_members: list[FamilyMemberView] = Field(default_factory=list)


class LoginResponse(ApiResponse):
    user: PersonView


class FullProfileResponse(ApiResponse):
    user: FullProfileView
