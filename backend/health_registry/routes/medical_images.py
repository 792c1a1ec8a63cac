"""Medical image routes."""

from fastapi import APIRouter, Depends

from health_registry.dependencies import get_medical_image_service
from health_registry.schemas import (
    ApiResponse,
    MedicalImageCreate,
    MedicalImagesResponse,
    MedicalImageUploaded,
)
from health_registry.services.medical_images import MedicalImageService

router = APIRouter(prefix="/medical-images", tags=["medical-images"])


@router.post("", response_model=MedicalImageUploaded)
async def upload_medical_image(
    request: MedicalImageCreate,
    service: MedicalImageService = Depends(get_medical_image_service),
) -> MedicalImageUploaded:
    image = await service.upload(request)
    return MedicalImageUploaded(message="Medical image uploaded successfully", image_id=image.image_id)


@router.get("/{health_id}", response_model=MedicalImagesResponse)
async def list_medical_images(
    health_id: str,
    service: MedicalImageService = Depends(get_medical_image_service),
) -> MedicalImagesResponse:
    images = await service.list_images(health_id)
    return MedicalImagesResponse(images=images)


@router.delete("/{image_id}", response_model=ApiResponse)
async def delete_medical_image(
    image_id: str,
    service: MedicalImageService = Depends(get_medical_image_service),
) -> ApiResponse:
    """Delete an image. Succeeds whether or not the image still existed."""
    await service.delete(image_id)
    return ApiResponse(message="Medical image deleted successfully")
