"""Schemas for medical image upload and listing."""

from datetime import datetime

from pydantic import Field

from health_registry.schemas.common import ApiModel, ApiResponse

# Largest value a signed 32-bit INTEGER column holds
MAX_IMAGE_SIZE = 2**31 - 1


class MedicalImageCreate(ApiModel):
    id: str | None = None
    health_id: str | None = None
    name: str | None = None
    size: int | None = Field(default=None, le=MAX_IMAGE_SIZE)
    type: str | None = None
    data_url: str | None = None
    upload_date: datetime | None = None


class MedicalImageView(ApiModel):
    id: str
    health_id: str
    name: str
    size: int
    type: str
    data_url: str
    upload_date: datetime


class MedicalImageUploaded(ApiResponse):
    image_id: str


class MedicalImagesResponse(ApiResponse):
    images: list[MedicalImageView]
