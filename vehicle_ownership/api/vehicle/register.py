"""Vehicle registration endpoint: reconcile ownership, then persist."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from vehicle_ownership.api.deps import get_current_user_id, get_reconciler
from vehicle_ownership.api.vehicle.common import build_request_for_user, run_reconciliation
from vehicle_ownership.core.reconciliation import OwnershipReconciler
from vehicle_ownership.core.registration import (
    VehicleAlreadyRegisteredError,
    VehicleTypeNotFoundError,
    register_vehicle,
    serialize_vehicle,
)
from vehicle_ownership.crud import get_vehicle_by_plate
from vehicle_ownership.db import get_db
from vehicle_ownership.schemas.vehicle import ReconciliationResponse, VehiclePlateRequest

router = APIRouter(prefix="/api/vehicle")


@router.post("/register")
async def register_vehicle_endpoint(
    payload: VehiclePlateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    reconciler: OwnershipReconciler = Depends(get_reconciler),
):
    request = build_request_for_user(db, user_id, payload.vehicle_plate)

    if get_vehicle_by_plate(db, request.plate) is not None:
        raise HTTPException(status_code=409, detail="vehicle_already_registered")

    result = await run_reconciliation(reconciler, request)
    if not result.is_valid or result.vehicle_data is None:
        response = ReconciliationResponse.from_result(result)
        raise HTTPException(status_code=422, detail=response.model_dump(by_alias=True))

    try:
        vehicle = register_vehicle(
            db,
            user_id=user_id,
            plate=request.plate,
            vehicle_data=result.vehicle_data,
        )
    except VehicleAlreadyRegisteredError:
        raise HTTPException(status_code=409, detail="vehicle_already_registered")
    except VehicleTypeNotFoundError:
        raise HTTPException(status_code=500, detail="vehicle_type_not_found")

    return {
        "ok": True,
        "vehicle": serialize_vehicle(vehicle),
        "reconciliation": ReconciliationResponse.from_result(result).model_dump(by_alias=True),
    }
