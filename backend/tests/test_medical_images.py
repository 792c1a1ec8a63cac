"""Tests for medical image upload, listing and removal."""

from datetime import datetime, timezone

import pytest

from health_registry.errors import DuplicateImage, NotFound, ValidationError
from health_registry.schemas import MedicalImageCreate
from health_registry.services.medical_images import DEFAULT_IMAGE_TYPE, MedicalImageService

from conftest import PERSON_ID

DATA_URL = "data:image/png;base64,iVBORw0KGgo="


@pytest.fixture
def service(store) -> MedicalImageService:
    return MedicalImageService(store)


class TestUpload:
    @pytest.mark.asyncio
    async def test_defaults_when_fields_absent(self, service, person):
        image = await service.upload(MedicalImageCreate(health_id=PERSON_ID, data_url=DATA_URL))

        assert len(image.image_id) == 32
        assert image.name == image.image_id
        assert image.size == len(DATA_URL)
        assert image.image_type == DEFAULT_IMAGE_TYPE

    @pytest.mark.asyncio
    async def test_client_supplied_fields(self, service, person):
        uploaded = datetime(2026, 1, 18, 9, 30, tzinfo=timezone.utc)
        await service.upload(
            MedicalImageCreate(
                id="xray-1",
                health_id=PERSON_ID,
                name="chest.png",
                size=2048,
                type="image/png",
                data_url=DATA_URL,
                upload_date=uploaded,
            )
        )

        [view] = await service.list_images(PERSON_ID)
        assert view.id == "xray-1"
        assert view.name == "chest.png"
        assert view.size == 2048
        assert view.type == "image/png"

    @pytest.mark.asyncio
    async def test_duplicate_id(self, service, person):
        request = MedicalImageCreate(id="xray-1", health_id=PERSON_ID, data_url=DATA_URL)
        await service.upload(request)
        with pytest.raises(DuplicateImage):
            await service.upload(request)

    @pytest.mark.asyncio
    async def test_missing_data(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.upload(MedicalImageCreate())
        assert exc_info.value.missing_fields == ["health_id", "data_url"]

    @pytest.mark.asyncio
    async def test_unknown_person(self, service):
        with pytest.raises(NotFound):
            await service.upload(MedicalImageCreate(health_id=PERSON_ID, data_url=DATA_URL))


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, service, person):
        image = await service.upload(MedicalImageCreate(health_id=PERSON_ID, data_url=DATA_URL))

        assert await service.delete(image.image_id) is True
        assert await service.delete(image.image_id) is False
        assert await service.list_images(PERSON_ID) == []
