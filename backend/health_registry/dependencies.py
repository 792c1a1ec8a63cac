"""FastAPI dependencies wiring the record store into the services."""

from fastapi import Depends, Request

from health_registry.repositories import RecordStore
from health_registry.services.benefits import BenefitsService
from health_registry.services.consultations import ConsultationService
from health_registry.services.directory import DirectoryService
from health_registry.services.identifiers import IdentifierGenerator
from health_registry.services.medical_images import MedicalImageService
from health_registry.services.registration import RegistrationService


def get_record_store(request: Request) -> RecordStore:
    """The store built at startup. Tests override this dependency."""
    return request.app.state.record_store


def get_identifier_generator() -> IdentifierGenerator:
    return IdentifierGenerator()


def get_registration_service(
    store: RecordStore = Depends(get_record_store),
    generator: IdentifierGenerator = Depends(get_identifier_generator),
) -> RegistrationService:
    return RegistrationService(store, generator)


def get_benefits_service(
    store: RecordStore = Depends(get_record_store),
    generator: IdentifierGenerator = Depends(get_identifier_generator),
) -> BenefitsService:
    return BenefitsService(store, generator)


def get_directory_service(
    store: RecordStore = Depends(get_record_store),
    generator: IdentifierGenerator = Depends(get_identifier_generator),
) -> DirectoryService:
    return DirectoryService(store, generator)


def get_consultation_service(store: RecordStore = Depends(get_record_store)) -> ConsultationService:
    return ConsultationService(store)


def get_medical_image_service(store: RecordStore = Depends(get_record_store)) -> MedicalImageService:
    return MedicalImageService(store)
