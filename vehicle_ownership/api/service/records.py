"""Maintenance service endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from vehicle_ownership.api.deps import get_current_user_id
from vehicle_ownership.api.service.common import raise_service_http_error
from vehicle_ownership.core.maintenance import (
    complete_service,
    record_service,
    revise_service,
    serialize_service,
    serialize_service_type,
    vehicle_services,
)
from vehicle_ownership.crud import list_service_types
from vehicle_ownership.db import get_db
from vehicle_ownership.schemas.service import ServiceCreateRequest, ServiceUpdateRequest
from vehicle_ownership.utils.string import normalize_vehicle_plate

router = APIRouter(prefix="/api/service")

_REQUIRED_ON_UPDATE = ("service_type_id", "description", "cost", "service_date")


@router.get("/types")
def get_service_types(db: Session = Depends(get_db)):
    return {"ok": True, "data": [serialize_service_type(item) for item in list_service_types(db)]}


@router.get("/vehicle/{vehicle_plate}")
def list_services_for_vehicle(
    vehicle_plate: str = Path(...),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    plate = normalize_vehicle_plate(vehicle_plate)
    if not plate:
        raise HTTPException(status_code=400, detail="vehicle_plate_required")
    try:
        services = vehicle_services(db, user_id=user_id, license_plate=plate)
    except ValueError as exc:
        raise_service_http_error(exc)
    return {"ok": True, "services": [serialize_service(service) for service in services]}


@router.post("")
def create_service_endpoint(
    payload: ServiceCreateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    plate = normalize_vehicle_plate(payload.vehicle_plate)
    if not plate:
        raise HTTPException(status_code=400, detail="vehicle_plate_required")
    try:
        service = record_service(
            db,
            user_id=user_id,
            license_plate=plate,
            service_type_id=payload.service_type_id,
            description=payload.description,
            cost=payload.cost,
            service_date=payload.service_date,
            mileage=payload.mileage,
            notes=payload.notes,
            provider_id=payload.provider_id,
        )
    except ValueError as exc:
        raise_service_http_error(exc)
    return {"ok": True, "service": serialize_service(service)}


@router.put("/{service_id}")
def update_service_endpoint(
    payload: ServiceUpdateRequest,
    service_id: int = Path(...),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True)
    for field in _REQUIRED_ON_UPDATE:
        if field in changes and changes[field] is None:
            raise HTTPException(status_code=400, detail=f"{field}_required")
    try:
        service = revise_service(db, user_id=user_id, service_id=service_id, changes=changes)
    except ValueError as exc:
        raise_service_http_error(exc)
    return {"ok": True, "service": serialize_service(service)}


@router.post("/{service_id}/complete")
def complete_service_endpoint(
    service_id: int = Path(...),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        service = complete_service(db, user_id=user_id, service_id=service_id)
    except ValueError as exc:
        raise_service_http_error(exc)
    return {"ok": True, "service": serialize_service(service)}
