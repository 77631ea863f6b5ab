"""Maintenance service records kept for a user's registered vehicles."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict

from sqlalchemy.orm import Session

from vehicle_ownership.constants import (
    DEFAULT_SERVICE_TYPES,
    EXPENSIVE_SERVICE_COST,
    RECENT_SERVICE_DAYS,
    SERVICE_CATEGORIES,
    SERVICE_DESCRIPTION_MIN_LENGTH,
)
from vehicle_ownership.crud import (
    create_service,
    ensure_service_type,
    get_service,
    get_service_type,
    get_vehicle_by_plate,
    list_vehicle_services,
    update_service,
)
from vehicle_ownership.models import ServiceType, Vehicle, VehicleService
from vehicle_ownership.utils.logging import logger
from vehicle_ownership.utils.time import format_cot_iso, today_in_cot

__all__ = [
    "ServiceValidationError",
    "ServiceNotFoundError",
    "ServiceTypeUnavailableError",
    "ServiceAlreadyCompletedError",
    "OwnedVehicleNotFoundError",
    "VehicleAccessDeniedError",
    "validate_service_fields",
    "validate_service_type_fields",
    "ensure_default_service_types",
    "resolve_owned_vehicle",
    "record_service",
    "vehicle_services",
    "revise_service",
    "complete_service",
    "serialize_service",
    "serialize_service_type",
]


class ServiceValidationError(ValueError):
    """A field breaks a service rule; ``code`` is the API error detail."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class ServiceNotFoundError(ValueError):
    pass


class ServiceTypeUnavailableError(ValueError):
    """Unknown or inactive service type."""


class ServiceAlreadyCompletedError(ValueError):
    pass


class OwnedVehicleNotFoundError(ValueError):
    """No active vehicle row for the plate."""


class VehicleAccessDeniedError(ValueError):
    """The vehicle belongs to another user."""


def validate_service_fields(
    *,
    description: str | None,
    cost: float,
    service_date: date,
    mileage: int | None,
    today: date | None = None,
) -> None:
    if not description or len(description.strip()) < SERVICE_DESCRIPTION_MIN_LENGTH:
        raise ServiceValidationError(
            "description_too_short",
            "La descripción del servicio debe tener al menos 5 caracteres",
        )
    if cost < 0:
        raise ServiceValidationError("negative_cost", "El costo del servicio no puede ser negativo")
    if service_date > (today or today_in_cot()):
        raise ServiceValidationError("future_service_date", "La fecha del servicio no puede ser futura")
    if mileage is not None and mileage < 0:
        raise ServiceValidationError("negative_mileage", "El kilometraje no puede ser negativo")


def validate_service_type_fields(
    *,
    name: str,
    description: str,
    category: str,
    estimated_duration: float | None = None,
    average_cost: float | None = None,
) -> None:
    if not name or len(name.strip()) < 2:
        raise ServiceValidationError(
            "service_type_name_too_short",
            "El nombre del tipo de servicio debe tener al menos 2 caracteres",
        )
    if not description or len(description.strip()) < SERVICE_DESCRIPTION_MIN_LENGTH:
        raise ServiceValidationError(
            "description_too_short", "La descripción debe tener al menos 5 caracteres"
        )
    if category not in SERVICE_CATEGORIES:
        raise ServiceValidationError(
            "invalid_service_category",
            f"La categoría debe ser una de: {', '.join(SERVICE_CATEGORIES)}",
        )
    if estimated_duration is not None and estimated_duration <= 0:
        raise ServiceValidationError(
            "invalid_estimated_duration", "La duración estimada debe ser mayor a 0 horas"
        )
    if average_cost is not None and average_cost < 0:
        raise ServiceValidationError("negative_cost", "El costo promedio no puede ser negativo")


def ensure_default_service_types(db: Session) -> list[ServiceType]:
    rows = []
    for name, description, category, duration, cost in DEFAULT_SERVICE_TYPES:
        validate_service_type_fields(
            name=name,
            description=description,
            category=category,
            estimated_duration=duration,
            average_cost=cost,
        )
        rows.append(
            ensure_service_type(
                db,
                name=name,
                description=description,
                category=category,
                estimated_duration=duration,
                average_cost=cost,
            )
        )
    return rows


def resolve_owned_vehicle(db: Session, *, user_id: str, license_plate: str) -> Vehicle:
    vehicle = get_vehicle_by_plate(db, license_plate)
    if vehicle is None or not vehicle.is_active:
        raise OwnedVehicleNotFoundError(license_plate)
    if vehicle.user_id != user_id:
        raise VehicleAccessDeniedError(license_plate)
    return vehicle


def _active_service_type(db: Session, service_type_id: int) -> ServiceType:
    service_type = get_service_type(db, service_type_id)
    if service_type is None or not service_type.is_active:
        raise ServiceTypeUnavailableError(service_type_id)
    return service_type


def _owned_service(db: Session, *, user_id: str, service_id: int) -> VehicleService:
    service = get_service(db, service_id)
    if service is None:
        raise ServiceNotFoundError(service_id)
    if service.vehicle is None or service.vehicle.user_id != user_id:
        raise VehicleAccessDeniedError(service_id)
    return service


def record_service(
    db: Session,
    *,
    user_id: str,
    license_plate: str,
    service_type_id: int,
    description: str,
    cost: float,
    service_date: date,
    mileage: int | None = None,
    notes: str | None = None,
    provider_id: str | None = None,
    today: date | None = None,
) -> VehicleService:
    vehicle = resolve_owned_vehicle(db, user_id=user_id, license_plate=license_plate)
    _active_service_type(db, service_type_id)
    validate_service_fields(
        description=description,
        cost=cost,
        service_date=service_date,
        mileage=mileage,
        today=today,
    )
    service = create_service(
        db,
        vehicle_id=vehicle.id,
        service_type_id=service_type_id,
        description=description.strip(),
        cost=cost,
        service_date=service_date,
        mileage=mileage,
        notes=notes,
        provider_id=provider_id,
    )
    logger.info("Recorded service %s for vehicle %s", service.id, vehicle.license_plate)
    return service


def vehicle_services(db: Session, *, user_id: str, license_plate: str) -> list[VehicleService]:
    vehicle = resolve_owned_vehicle(db, user_id=user_id, license_plate=license_plate)
    return list_vehicle_services(db, vehicle.id)


def revise_service(
    db: Session,
    *,
    user_id: str,
    service_id: int,
    changes: Dict[str, Any],
    today: date | None = None,
) -> VehicleService:
    """Apply a partial update; the merged record must still pass every service rule."""
    service = _owned_service(db, user_id=user_id, service_id=service_id)
    if "service_type_id" in changes:
        _active_service_type(db, changes["service_type_id"])

    merged = {
        "description": changes.get("description", service.description),
        "cost": changes.get("cost", service.cost),
        "service_date": changes.get("service_date", service.service_date),
        "mileage": changes.get("mileage", service.mileage),
    }
    validate_service_fields(today=today, **merged)

    if "description" in changes:
        changes = {**changes, "description": changes["description"].strip()}
    return update_service(db, service, changes)


def complete_service(
    db: Session,
    *,
    user_id: str,
    service_id: int,
    now: datetime | None = None,
) -> VehicleService:
    service = _owned_service(db, user_id=user_id, service_id=service_id)
    if service.is_completed:
        raise ServiceAlreadyCompletedError(service_id)
    completed = update_service(
        db,
        service,
        {"is_completed": True, "completed_at": now or datetime.now(timezone.utc)},
    )
    logger.info("Completed service %s", service_id)
    return completed


def serialize_service_type(service_type: ServiceType) -> dict[str, Any]:
    return {
        "id": service_type.id,
        "name": service_type.name,
        "description": service_type.description,
        "category": service_type.category,
        "estimatedDuration": service_type.estimated_duration,
        "averageCost": service_type.average_cost,
        "isActive": service_type.is_active,
        "isPreventiveMaintenance": service_type.category == "Mantenimiento Preventivo",
    }


def serialize_service(service: VehicleService, today: date | None = None) -> dict[str, Any]:
    days_since = ((today or today_in_cot()) - service.service_date).days
    return {
        "id": service.id,
        "vehicleId": service.vehicle_id,
        "licensePlate": service.vehicle.license_plate if service.vehicle else None,
        "serviceTypeId": service.service_type_id,
        "serviceType": service.service_type.name if service.service_type else None,
        "category": service.service_type.category if service.service_type else None,
        "description": service.description,
        "cost": service.cost,
        "serviceDate": service.service_date.isoformat(),
        "mileage": service.mileage,
        "notes": service.notes,
        "providerId": service.provider_id,
        "isCompleted": service.is_completed,
        "completedAt": format_cot_iso(service.completed_at),
        "daysSinceService": days_since,
        "isRecent": days_since <= RECENT_SERVICE_DAYS,
        "isExpensive": service.cost > EXPENSIVE_SERVICE_COST,
        "createdAt": format_cot_iso(service.created_at),
        "updatedAt": format_cot_iso(service.updated_at),
    }
