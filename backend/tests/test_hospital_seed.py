"""Tests for hospital seeding and the seed script."""

import json

import pytest

from health_registry.errors import ValidationError
from health_registry.repositories import HospitalFilter
from health_registry.services.hospital_seed import SEED_HOSPITALS, seed_hospitals


class TestSeedHospitals:
    @pytest.mark.asyncio
    async def test_seeds_reference_hospitals(self, store):
        created = await seed_hospitals(store)

        assert created == len(SEED_HOSPITALS)
        assert await store.count_hospitals() == len(SEED_HOSPITALS)

    @pytest.mark.asyncio
    async def test_skipped_when_already_seeded(self, store):
        await seed_hospitals(store)
        assert await seed_hospitals(store) == 0
        assert await store.count_hospitals() == len(SEED_HOSPITALS)

    @pytest.mark.asyncio
    async def test_forced_reseed_never_duplicates(self, store):
        await seed_hospitals(store)
        assert await seed_hospitals(store, force=True) == 0
        assert await store.count_hospitals() == len(SEED_HOSPITALS)

    @pytest.mark.asyncio
    async def test_accepts_tag_lists(self, store):
        await seed_hospitals(
            store,
            [{"code": "X-1", "name": "X", "specialties": ["Cardiology", " ENT "], "packages": None}],
        )
        hospital = (await store.list_hospitals(HospitalFilter()))[0]

        assert hospital.specialties == "Cardiology,ENT"
        assert hospital.packages == ""


class TestSeedScript:
    """Tests for the seed script module."""

    def test_module_exposes_entry_points(self):
        from health_registry.scripts import seed_hospitals as script

        assert callable(script.main)
        assert callable(script.verify_connection)

    def test_load_hospitals_from_file(self, tmp_path):
        from health_registry.scripts.seed_hospitals import load_hospitals

        path = tmp_path / "hospitals.json"
        path.write_text(json.dumps([{"code": "X-1", "name": "X"}]))
        assert load_hospitals(path) == [{"code": "X-1", "name": "X"}]

    def test_load_hospitals_rejects_non_list(self, tmp_path):
        from health_registry.scripts.seed_hospitals import load_hospitals

        path = tmp_path / "hospitals.json"
        path.write_text(json.dumps({"code": "X-1"}))
        with pytest.raises(ValueError):
            load_hospitals(path)


class TestSeedValidation:
    @pytest.mark.asyncio
    async def test_misspelled_key_is_rejected(self, store):
        with pytest.raises(ValidationError):
            await seed_hospitals(store, [{"code": "X-1", "name": "X", "specialites": "ENT"}])
        assert await store.count_hospitals() == 0
