#!/usr/bin/env python
"""
Load RUNT registry records from a JSON file into ``runt_vehicle_data``.

Usage:
    python scripts/seed_registry.py data/runt_vehicles.json

The file holds a list of objects keyed by ``runt_vehicle_data`` column names
(``license_plate``, ``owner_document_type``, ``owner_document_number``, ...).
Default vehicle types are created as well.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from vehicle_ownership.core.maintenance import ensure_default_service_types  # noqa: E402
from vehicle_ownership.core.registration import ensure_default_vehicle_types  # noqa: E402
from vehicle_ownership.crud import import_registry_rows  # noqa: E402
from vehicle_ownership.db import Base, SessionLocal, engine  # noqa: E402
from vehicle_ownership import models  # noqa: E402,F401


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the RUNT registry table from JSON.")
    parser.add_argument("path", type=Path, help="JSON file with a list of registry rows")
    args = parser.parse_args(argv)

    rows = json.loads(args.path.read_text(encoding="utf-8"))
    if not isinstance(rows, list):
        print(f"[ERROR] {args.path} must contain a JSON list")
        return 1

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        types = ensure_default_vehicle_types(db)
        service_types = ensure_default_service_types(db)
        plates = import_registry_rows(db, rows)

    print(f"[Seed] vehicle types: {', '.join(t.name for t in types)}")
    print(f"[Seed] service types: {len(service_types)}")
    print(f"[Seed] registry rows stored: {len(plates)}")
    for plate in plates:
        print(f"   ✓ {plate}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
