# crud.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from .models import (
    RuntVehicleData,
    ServiceType,
    UserProfile,
    Vehicle,
    VehicleService,
    VehicleType,
)
from .utils.string import normalize_vehicle_plate


def get_profile(db: Session, user_id: str) -> Optional[UserProfile]:
    return db.get(UserProfile, user_id)


def get_profile_by_email(db: Session, email: str) -> Optional[UserProfile]:
    return db.query(UserProfile).filter(UserProfile.email == email).first()


def upsert_profile(
    db: Session,
    *,
    user_id: str,
    full_name: str | None = None,
    document_type: str | None = None,
    document_number: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    address: str | None = None,
    city: str | None = None,
) -> UserProfile:
    profile = db.get(UserProfile, user_id)
    if profile is None:
        profile = UserProfile(id=user_id)
        db.add(profile)
    profile.full_name = full_name
    profile.document_type = document_type
    profile.document_number = document_number
    profile.email = email
    profile.phone = phone
    profile.address = address
    profile.city = city
    db.commit()
    db.refresh(profile)
    return profile


_PROFILE_FIELDS = frozenset({"full_name", "document_type", "document_number", "phone", "address", "city"})


def update_profile(db: Session, profile: UserProfile, changes: Dict[str, Any]) -> UserProfile:
    unknown = sorted(key for key in changes if key not in _PROFILE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown profile field(s): {', '.join(unknown)}")
    for key, value in changes.items():
        setattr(profile, key, value)
    db.commit()
    db.refresh(profile)
    return profile


def get_vehicle_type_by_name(db: Session, name: str) -> Optional[VehicleType]:
    return db.query(VehicleType).filter(VehicleType.name == name).one_or_none()


def ensure_vehicle_type(db: Session, name: str, description: str | None = None) -> VehicleType:
    vehicle_type = get_vehicle_type_by_name(db, name)
    if not vehicle_type:
        vehicle_type = VehicleType(name=name, description=description, is_active=True)
        db.add(vehicle_type)
        db.commit()
        db.refresh(vehicle_type)
    return vehicle_type


def list_vehicle_types(db: Session, *, active_only: bool = True) -> List[VehicleType]:
    q = db.query(VehicleType)
    if active_only:
        q = q.filter(VehicleType.is_active.is_(True))
    return q.order_by(VehicleType.name.asc()).all()


_REGISTRY_COLUMNS = frozenset(RuntVehicleData.__table__.columns.keys()) - {"id", "license_plate", "created_at"}


def get_registry_record_by_plate(db: Session, license_plate: str) -> Optional[RuntVehicleData]:
    plate = normalize_vehicle_plate(license_plate)
    return db.query(RuntVehicleData).filter(RuntVehicleData.license_plate == plate).one_or_none()


def upsert_registry_record(db: Session, *, license_plate: str, **fields: Any) -> RuntVehicleData:
    """Insert or refresh a registry row. Used by seeding scripts only."""
    unknown = sorted(key for key in fields if key not in _REGISTRY_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown registry field(s): {', '.join(unknown)}")

    plate = normalize_vehicle_plate(license_plate)
    record = get_registry_record_by_plate(db, plate)
    if record is None:
        record = RuntVehicleData(license_plate=plate)
        db.add(record)
    for key, value in fields.items():
        setattr(record, key, value)
    db.commit()
    db.refresh(record)
    return record


def get_vehicle_by_plate(db: Session, license_plate: str) -> Optional[Vehicle]:
    plate = normalize_vehicle_plate(license_plate)
    if not plate:
        return None
    return db.query(Vehicle).filter(Vehicle.license_plate == plate).one_or_none()


def create_vehicle(
    db: Session,
    *,
    user_id: str,
    vehicle_type_id: int,
    license_plate: str,
    brand: str,
    model: str,
    year: int,
    color: str | None = None,
) -> Vehicle:
    vehicle = Vehicle(
        user_id=user_id,
        vehicle_type_id=vehicle_type_id,
        license_plate=normalize_vehicle_plate(license_plate),
        brand=brand,
        model=model,
        year=year,
        color=color,
        is_active=True,
    )
    db.add(vehicle)
    db.commit()
    db.refresh(vehicle)
    return vehicle


def list_user_vehicles(db: Session, user_id: str, *, include_inactive: bool = False) -> List[Vehicle]:
    q = db.query(Vehicle).filter(Vehicle.user_id == user_id)
    if not include_inactive:
        q = q.filter(Vehicle.is_active.is_(True))
    return q.order_by(Vehicle.created_at.desc(), Vehicle.id.desc()).all()


def deactivate_vehicle(db: Session, *, user_id: str, license_plate: str) -> Optional[Vehicle]:
    vehicle = get_vehicle_by_plate(db, license_plate)
    if vehicle is None or vehicle.user_id != user_id:
        return None
    vehicle.is_active = False
    db.commit()
    db.refresh(vehicle)
    return vehicle


def import_registry_rows(db: Session, rows: Iterable[Dict[str, Any]]) -> List[str]:
    """Load registry rows (``runt_vehicle_data`` column names) and return the stored plates."""
    plates: List[str] = []
    for row in rows:
        fields = dict(row)
        license_plate = fields.pop("license_plate", None) or ""
        if not normalize_vehicle_plate(license_plate):
            raise ValueError("Registry row without license_plate")
        record = upsert_registry_record(db, license_plate=license_plate, **fields)
        plates.append(record.license_plate)
    return plates


def get_vehicle_by_id(db: Session, vehicle_id: int) -> Optional[Vehicle]:
    return db.get(Vehicle, vehicle_id)


def get_service_type(db: Session, service_type_id: int) -> Optional[ServiceType]:
    return db.get(ServiceType, service_type_id)


def get_service_type_by_name(db: Session, name: str) -> Optional[ServiceType]:
    return db.query(ServiceType).filter(ServiceType.name == name).one_or_none()


def ensure_service_type(
    db: Session,
    *,
    name: str,
    description: str,
    category: str,
    estimated_duration: float | None = None,
    average_cost: float | None = None,
) -> ServiceType:
    service_type = get_service_type_by_name(db, name)
    if not service_type:
        service_type = ServiceType(
            name=name,
            description=description,
            category=category,
            estimated_duration=estimated_duration,
            average_cost=average_cost,
            is_active=True,
        )
        db.add(service_type)
        db.commit()
        db.refresh(service_type)
    return service_type


def list_service_types(db: Session, *, active_only: bool = True) -> List[ServiceType]:
    q = db.query(ServiceType)
    if active_only:
        q = q.filter(ServiceType.is_active.is_(True))
    return q.order_by(ServiceType.category.asc(), ServiceType.name.asc()).all()


def create_service(
    db: Session,
    *,
    vehicle_id: int,
    service_type_id: int,
    description: str,
    cost: float,
    service_date: date,
    mileage: int | None = None,
    notes: str | None = None,
    provider_id: str | None = None,
) -> VehicleService:
    service = VehicleService(
        vehicle_id=vehicle_id,
        service_type_id=service_type_id,
        description=description,
        cost=cost,
        service_date=service_date,
        mileage=mileage,
        notes=notes,
        provider_id=provider_id,
        is_completed=False,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


def get_service(db: Session, service_id: int) -> Optional[VehicleService]:
    return db.get(VehicleService, service_id)


def list_vehicle_services(db: Session, vehicle_id: int) -> List[VehicleService]:
    return (
        db.query(VehicleService)
        .filter(VehicleService.vehicle_id == vehicle_id)
        .order_by(VehicleService.service_date.desc(), VehicleService.id.desc())
        .all()
    )


_SERVICE_FIELDS = frozenset(
    {
        "service_type_id",
        "description",
        "cost",
        "service_date",
        "mileage",
        "notes",
        "provider_id",
        "is_completed",
        "completed_at",
    }
)


def update_service(db: Session, service: VehicleService, changes: Dict[str, Any]) -> VehicleService:
    unknown = sorted(key for key in changes if key not in _SERVICE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown service field(s): {', '.join(unknown)}")
    for key, value in changes.items():
        setattr(service, key, value)
    db.commit()
    db.refresh(service)
    return service
