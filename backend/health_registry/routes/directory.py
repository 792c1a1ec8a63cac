"""Family member and empaneled hospital routes."""

from fastapi import APIRouter, Depends, Query

from health_registry.dependencies import get_directory_service
from health_registry.schemas import (
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMembersResponse,
    HospitalsResponse,
)
from health_registry.services.directory import DirectoryService

router = APIRouter(tags=["directory"])


@router.post("/family-members", response_model=FamilyMemberResponse)
async def add_family_member(
    request: FamilyMemberCreate,
    service: DirectoryService = Depends(get_directory_service),
) -> FamilyMemberResponse:
    member = await service.add_family_member(request)
    return FamilyMemberResponse(message="Family member added successfully!", family_member=member)


@router.get("/family-members/{health_id}", response_model=FamilyMembersResponse)
async def list_family_members(
    health_id: str,
    service: DirectoryService = Depends(get_directory_service),
) -> FamilyMembersResponse:
    """Family members of a person, national IDs redacted."""
    members = await service.list_family_members(health_id)
    return FamilyMembersResponse(family_members=members)


@router.get("/hospitals", response_model=HospitalsResponse)
async def list_hospitals(
    city: str | None = None,
    specialty: str | None = None,
    limit: int | None = Query(None),
    service: DirectoryService = Depends(get_directory_service),
) -> HospitalsResponse:
    """Search empaneled hospitals.

    Args:
        city: Case-insensitive substring of the hospital's city.
        specialty: Case-insensitive substring of the hospital's specialties.
        limit: Maximum number of hospitals to return.
    """
    hospitals = await service.list_hospitals(city=city, specialty=specialty, limit=limit)
    return HospitalsResponse(hospitals=hospitals)
