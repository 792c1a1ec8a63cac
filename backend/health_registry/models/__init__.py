"""SQLAlchemy models."""

from health_registry.models.benefits import BenefitsEnrollment
from health_registry.models.consultation import ConsultationRequest, ConsultationStatus
from health_registry.models.family import FamilyMember
from health_registry.models.hospital import EmpaneledHospital
from health_registry.models.medical_image import MedicalImage
from health_registry.models.person import HealthProfile, PersonRecord

__all__ = [
    "BenefitsEnrollment",
    "ConsultationRequest",
    "ConsultationStatus",
    "EmpaneledHospital",
    "FamilyMember",
    "HealthProfile",
    "MedicalImage",
    "PersonRecord",
]
