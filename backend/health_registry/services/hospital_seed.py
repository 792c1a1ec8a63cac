"""Empaneled hospital reference data and its idempotent seeding."""

from __future__ import annotations

import logging

from health_registry.repositories import RecordStore
from health_registry.utils.tags import join_tags

logger = logging.getLogger(__name__)

DEFAULT_PACKAGES = "General Surgery,Emergency Care,Maternity Care"

SEED_HOSPITALS: list[dict] = [
    {
        "name": "AIIMS Delhi",
        "code": "AIIMS-DEL-001",
        "address": "Ansari Nagar, New Delhi",
        "city": "New Delhi",
        "state": "Delhi",
        "postal_code": "110029",
        "phone": "011-26588500",
        "specialties": "Cardiology,Neurology,Oncology,Orthopedics,General Surgery",
        "latitude": 28.5672,
        "longitude": 77.2100,
        "packages": DEFAULT_PACKAGES,
    },
    {
        "name": "Safdarjung Hospital",
        "code": "SFDJ-DEL-002",
        "address": "Safdarjung Enclave, New Delhi",
        "city": "New Delhi",
        "state": "Delhi",
        "postal_code": "110029",
        "phone": "011-26165060",
        "specialties": "General Medicine,Pediatrics,Gynecology,Emergency Care",
        "latitude": 28.5678,
        "longitude": 77.2089,
        "packages": DEFAULT_PACKAGES,
    },
    {
        "name": "Government Medical College, Kerala",
        "code": "GMC-KER-003",
        "address": "Thiruvananthapuram, Kerala",
        "city": "Thiruvananthapuram",
        "state": "Kerala",
        "postal_code": "695011",
        "phone": "0471-2528300",
        "specialties": "General Medicine,Surgery,Pediatrics,Cardiology",
        "latitude": 8.5241,
        "longitude": 76.9366,
        "packages": DEFAULT_PACKAGES,
    },
]


async def seed_hospitals(
    store: RecordStore,
    hospitals: list[dict] | None = None,
    *,
    force: bool = False,
) -> int:
    """Seed the hospital directory once.

    Skipped when hospitals already exist unless ``force`` is set. Rows are
    upserted by hospital code, so even a forced re-seed never duplicates.

    Returns:
        Number of hospitals newly created.
    """
    if not force and await store.count_hospitals() > 0:
        logger.info("Hospital directory already seeded; skipping")
        return 0

    created = 0
    for entry in hospitals if hospitals is not None else SEED_HOSPITALS:
        # Files may list specialties and packages as arrays
        fields = {
            **entry,
            "specialties": join_tags(entry.get("specialties")),
            "packages": join_tags(entry.get("packages")),
        }
        _, was_created = await store.upsert_hospital(**fields)
        created += int(was_created)

    logger.info("Seeded hospital directory: %d new hospitals", created)
    return created
