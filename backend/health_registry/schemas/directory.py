"""Schemas for family members and the hospital directory."""

from pydantic import Field

from health_registry.schemas.common import ApiModel, ApiResponse

MAX_AGE = 150


class FamilyMemberCreate(ApiModel):
    owner_health_id: str | None = None
    name: str | None = None
    relation: str | None = None
    age: int | None = Field(default=None, le=MAX_AGE)
    gender: str | None = None
    national_id: str | None = None


class FamilyMemberView(ApiModel):
    id: int
    name: str
    relation: str
    age: int | None = None
    gender: str = ""
    health_id: str | None = None
    national_id: str | None = Field(default=None, description="Redacted to the last four digits")


class FamilyMemberResponse(ApiResponse):
    family_member: FamilyMemberView


class FamilyMembersResponse(ApiResponse):
    family_members: list[FamilyMemberView]


class HospitalView(ApiModel):
    id: int
    name: str
    code: str
    address: str
    city: str
    state: str
    postal_code: str
    phone: str
    specialties: list[str]
    packages: list[str]
    latitude: float | None = None
    longitude: float | None = None


class HospitalsResponse(ApiResponse):
    hospitals: list[HospitalView]
