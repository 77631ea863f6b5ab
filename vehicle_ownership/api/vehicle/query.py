"""Vehicle querying endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from vehicle_ownership.api.deps import get_current_user_id
from vehicle_ownership.constants import VALID_DOCUMENT_TYPES
from vehicle_ownership.core.registration import serialize_vehicle
from vehicle_ownership.crud import deactivate_vehicle, list_user_vehicles, list_vehicle_types
from vehicle_ownership.db import get_db
from vehicle_ownership.schemas.vehicle import (
    DocumentTypeSchema,
    VehicleTypeListResponse,
    VehicleTypeSchema,
)
from vehicle_ownership.settings import settings
from vehicle_ownership.utils.string import normalize_vehicle_plate

router = APIRouter(prefix="/api/vehicle")


@router.get("/vehicles")
def list_my_vehicles(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    vehicles = list_user_vehicles(db, user_id)
    return {"ok": True, "vehicles": [serialize_vehicle(vehicle) for vehicle in vehicles]}


@router.delete("/{vehicle_plate}")
def remove_vehicle(
    vehicle_plate: str = Path(...),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    plate = normalize_vehicle_plate(vehicle_plate)
    if not plate:
        raise HTTPException(status_code=400, detail="vehicle_plate_required")

    vehicle = deactivate_vehicle(db, user_id=user_id, license_plate=plate)
    if vehicle is None:
        raise HTTPException(status_code=404, detail="vehicle_not_found")

    return {"ok": True, "vehicle": serialize_vehicle(vehicle)}


@router.get("/types", response_model=VehicleTypeListResponse, response_model_by_alias=True)
def get_vehicle_types(db: Session = Depends(get_db)) -> VehicleTypeListResponse:
    types = list_vehicle_types(db)
    return VehicleTypeListResponse(data=[VehicleTypeSchema.model_validate(item) for item in types])


@router.get("/document-types")
def get_document_types() -> dict[str, object]:
    accepted = settings.accepted_document_type
    return {
        "ok": True,
        "data": [
            DocumentTypeSchema(
                value=value,
                label=label,
                accepted_for_ownership=value == accepted,
            ).model_dump(by_alias=True)
            for value, label in VALID_DOCUMENT_TYPES
        ],
    }
