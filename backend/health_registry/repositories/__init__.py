"""Repository layer for data access.

Repositories encapsulate database operations and provide a clean interface
for CRUD operations on domain objects.
"""

from health_registry.repositories.record_store import HospitalFilter, RecordStore

__all__ = ["HospitalFilter", "RecordStore"]
