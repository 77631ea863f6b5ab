"""Persist a vehicle for a user after a successful ownership reconciliation."""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vehicle_ownership.constants import (
    DEFAULT_VEHICLE_TYPE,
    VEHICLE_TYPE_DESCRIPTIONS,
    VEHICLE_TYPE_LABELS,
)
from vehicle_ownership.core.reconciliation import VehicleData
from vehicle_ownership.crud import (
    create_vehicle,
    ensure_vehicle_type,
    get_vehicle_by_plate,
    get_vehicle_type_by_name,
)
from vehicle_ownership.models import Vehicle, VehicleType
from vehicle_ownership.utils.logging import logger
from vehicle_ownership.utils.string import normalize_vehicle_plate
from vehicle_ownership.utils.time import format_cot_iso

__all__ = [
    "VehicleAlreadyRegisteredError",
    "VehicleTypeNotFoundError",
    "resolve_vehicle_type",
    "register_vehicle",
    "ensure_default_vehicle_types",
    "serialize_vehicle",
]


class VehicleAlreadyRegisteredError(ValueError):
    """The plate is already linked to a vehicle row."""


class VehicleTypeNotFoundError(ValueError):
    """No active ``vehicle_types`` row for the internal type identifier."""


def ensure_default_vehicle_types(db: Session) -> list[VehicleType]:
    return [
        ensure_vehicle_type(db, label, VEHICLE_TYPE_DESCRIPTIONS.get(label))
        for label in VEHICLE_TYPE_LABELS.values()
    ]


def resolve_vehicle_type(db: Session, vehicle_type: str) -> VehicleType:
    label = VEHICLE_TYPE_LABELS.get(vehicle_type) or VEHICLE_TYPE_LABELS[DEFAULT_VEHICLE_TYPE]
    row = get_vehicle_type_by_name(db, label)
    if row is None or not row.is_active:
        raise VehicleTypeNotFoundError(vehicle_type)
    return row


def register_vehicle(db: Session, *, user_id: str, plate: str, vehicle_data: VehicleData) -> Vehicle:
    """Store the reconciled vehicle for ``user_id``; never retried here."""
    license_plate = normalize_vehicle_plate(plate)
    if get_vehicle_by_plate(db, license_plate) is not None:
        raise VehicleAlreadyRegisteredError(license_plate)

    vehicle_type = resolve_vehicle_type(db, vehicle_data.vehicle_type)
    try:
        vehicle = create_vehicle(
            db,
            user_id=user_id,
            vehicle_type_id=vehicle_type.id,
            license_plate=license_plate,
            brand=vehicle_data.brand,
            model=vehicle_data.model,
            year=vehicle_data.year,
            color=vehicle_data.color or None,
        )
    except IntegrityError as exc:
        db.rollback()
        raise VehicleAlreadyRegisteredError(license_plate) from exc
    logger.info("Registered vehicle %s for user %s", license_plate, user_id)
    return vehicle


def serialize_vehicle(vehicle: Vehicle) -> dict[str, Any]:
    return {
        "id": vehicle.id,
        "userId": vehicle.user_id,
        "licensePlate": vehicle.license_plate,
        "vehicleTypeId": vehicle.vehicle_type_id,
        "vehicleType": vehicle.vehicle_type.name if vehicle.vehicle_type else None,
        "brand": vehicle.brand,
        "model": vehicle.model,
        "year": vehicle.year,
        "color": vehicle.color,
        "isActive": vehicle.is_active,
        "createdAt": format_cot_iso(vehicle.created_at),
        "updatedAt": format_cot_iso(vehicle.updated_at),
    }
