"""Pydantic schemas."""

from health_registry.schemas.benefits import (
    BenefitsResponse,
    BenefitsSummary,
    BenefitsView,
    CoverageUsageRequest,
    EligibilityOutcome,
    VerifyBenefitsRequest,
    VerifyBenefitsResponse,
)
from health_registry.schemas.common import ApiModel, ApiResponse, HealthIdRequest
from health_registry.schemas.consultation import (
    ConsultationCreate,
    ConsultationHistoryResponse,
    ConsultationResponse,
    ConsultationSubmitted,
    ConsultationView,
    DoctorResponseRequest,
)
from health_registry.schemas.directory import (
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMembersResponse,
    FamilyMemberView,
    HospitalsResponse,
    HospitalView,
)
from health_registry.schemas.medical_image import (
    MedicalImageCreate,
    MedicalImagesResponse,
    MedicalImageUploaded,
    MedicalImageView,
)
from health_registry.schemas.registration import (
    CandidateRegistration,
    CompleteRegistrationRequest,
    FingerprintScanned,
    FullProfileResponse,
    FullProfileView,
    IdentifierIssued,
    LoginResponse,
    PersonView,
    RegistrationCompleted,
)

__all__ = [
    "ApiModel",
    "ApiResponse",
    "BenefitsResponse",
    "BenefitsSummary",
    "BenefitsView",
    "CandidateRegistration",
    "CompleteRegistrationRequest",
    "ConsultationCreate",
    "ConsultationHistoryResponse",
    "ConsultationResponse",
    "ConsultationSubmitted",
    "ConsultationView",
    "CoverageUsageRequest",
    "DoctorResponseRequest",
    "EligibilityOutcome",
    "FamilyMemberCreate",
    "FamilyMemberResponse",
    "FamilyMembersResponse",
    "FamilyMemberView",
    "FingerprintScanned",
    "FullProfileResponse",
    "FullProfileView",
    "HealthIdRequest",
    "HospitalsResponse",
    "HospitalView",
    "IdentifierIssued",
    "LoginResponse",
    "MedicalImageCreate",
    "MedicalImagesResponse",
    "MedicalImageUploaded",
    "MedicalImageView",
    "PersonView",
    "RegistrationCompleted",
    "VerifyBenefitsRequest",
    "VerifyBenefitsResponse",
]
