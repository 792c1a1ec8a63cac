"""Seed the empaneled hospital directory.

Loads the built-in hospital list, or a JSON file holding a list of hospital
objects with the same keys, into the configured database.

Usage:
    python -m health_registry.scripts.seed_hospitals [--file hospitals.json] [--force]

The script is idempotent - hospitals are upserted by code, so running it
again updates existing rows instead of duplicating them.
"""

import argparse
import asyncio
import json
from pathlib import Path

from sqlalchemy import text

from health_registry.database import async_session_maker, engine, init_models
from health_registry.repositories import RecordStore
from health_registry.services.hospital_seed import SEED_HOSPITALS, seed_hospitals


async def verify_connection() -> bool:
    """Verify the database connection is working."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print("  Database: connected")
    except Exception as e:
        print(f"  Database: FAILED - {e}")
        return False
    return True


def load_hospitals(path: Path) -> list[dict]:
    """Read a hospital list from a JSON file."""
    with open(path) as f:
        hospitals = json.load(f)
    if not isinstance(hospitals, list):
        raise ValueError(f"{path} must contain a JSON list of hospitals")
    return hospitals


async def run(hospitals: list[dict], force: bool) -> int:
    try:
        print("\nVerifying database connection...")
        if not await verify_connection():
            raise RuntimeError("Database connection verification failed")

        await init_models(engine)
        return await seed_hospitals(RecordStore(async_session_maker), hospitals, force=force)
    finally:
        await engine.dispose()


def main() -> None:
    """Main entry point for the seed script."""
    parser = argparse.ArgumentParser(description="Seed the empaneled hospital directory")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="JSON file with hospitals to load (default: built-in list)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Upsert even when hospitals already exist",
    )
    args = parser.parse_args()

    hospitals = load_hospitals(args.file) if args.file else SEED_HOSPITALS

    print("=" * 50)
    print("Hospital Directory Seeding")
    print("=" * 50)

    created = asyncio.run(run(hospitals, args.force))

    print(f"\n  Hospitals provided: {len(hospitals)}")
    print(f"  Hospitals created: {created}")
    print("\nHospital seeding complete!")


if __name__ == "__main__":
    main()
