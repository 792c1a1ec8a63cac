"""Medical image upload, listing and removal."""

from __future__ import annotations

import logging
import uuid

from health_registry.errors import ValidationError
from health_registry.models import MedicalImage
from health_registry.repositories import RecordStore
from health_registry.schemas.medical_image import MedicalImageCreate, MedicalImageView
from health_registry.utils.timestamps import as_utc

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_TYPE = "application/octet-stream"


def medical_image_view(image: MedicalImage) -> MedicalImageView:
    return MedicalImageView(
        id=image.image_id,
        health_id=image.owner_health_id,
        name=image.name,
        size=image.size,
        type=image.image_type,
        data_url=image.data_url,
        upload_date=image.uploaded_at,
    )


class MedicalImageService:
    def __init__(self, store: RecordStore):
        self.store = store

    async def upload(self, request: MedicalImageCreate) -> MedicalImage:
        """Store an image for a registered person.

        The image id is generated when the client does not supply one; size
        defaults to the payload length.
        """
        missing = [
            field for field in ("health_id", "data_url") if not (getattr(request, field) or "").strip()
        ]
        if missing:
            raise ValidationError("Missing required image data.", missing_fields=missing)
        if request.size is not None and request.size < 0:
            raise ValidationError("Image size cannot be negative.")

        image_id = (request.id or "").strip() or uuid.uuid4().hex
        image = await self.store.add_medical_image(
            MedicalImage(
                image_id=image_id,
                owner_health_id=request.health_id.strip(),
                name=(request.name or "").strip() or image_id,
                size=request.size if request.size is not None else len(request.data_url),
                image_type=(request.type or "").strip() or DEFAULT_IMAGE_TYPE,
                data_url=request.data_url,
                uploaded_at=as_utc(request.upload_date),
            )
        )
        logger.info("Stored medical image %s for %s", image.image_id, image.owner_health_id)
        return image

    async def list_images(self, health_id: str) -> list[MedicalImageView]:
        images = await self.store.list_medical_images(health_id)
        return [medical_image_view(image) for image in images]

    async def delete(self, image_id: str) -> bool:
        if not image_id.strip():
            raise ValidationError(missing_fields=["image_id"])
        removed = await self.store.delete_medical_image(image_id)
        if not removed:
            logger.info("Medical image %s already absent", image_id)
        return removed
