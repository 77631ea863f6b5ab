from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = ROOT / "test.db"
os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH.as_posix()}")
os.environ.setdefault("REGISTRY_LATENCY_ENABLED", "false")
os.environ.setdefault("REGISTRY_BACKEND", "database")
os.environ.setdefault("ACCEPTED_DOCUMENT_TYPE", "CC")

if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()

from vehicle_ownership.db import Base, SessionLocal, engine  # noqa: E402
from vehicle_ownership import models  # noqa: E402,F401
from vehicle_ownership.core.registry import Found, LookupResult, NotFound, RegistryRecord  # noqa: E402


class RecordingLookup:
    """Registry double that remembers every plate it was asked for."""

    def __init__(self, outcome: LookupResult | Exception | None = None):
        self.outcome = outcome
        self.calls: list[str] = []

    async def lookup(self, plate: str) -> LookupResult:
        self.calls.append(plate)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        if self.outcome is None:
            return NotFound(plate=plate)
        return self.outcome


def make_record(**overrides) -> RegistryRecord:
    fields = dict(
        plate="ABC123",
        owner_document_type="CC",
        owner_document_number="1020304050",
        owner_full_name="JOSÉ ANTONIO PÉREZ GÓMEZ",
        vehicle_brand="MAZDA",
        vehicle_model="3 TOURING",
        vehicle_year=2019,
        vehicle_color="ROJO",
        vehicle_type_label="Automóvil",
        soat_expiry="2026-03-01",
        technical_inspection_expiry="2026-05-15",
    )
    fields.update(overrides)
    return RegistryRecord(**fields)


@pytest.fixture
def registry_record() -> RegistryRecord:
    return make_record()


@pytest.fixture
def found_lookup(registry_record) -> RecordingLookup:
    return RecordingLookup(Found(record=registry_record))


@pytest.fixture(autouse=True)
def prepare_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
