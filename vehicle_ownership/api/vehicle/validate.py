"""Vehicle ownership validation endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vehicle_ownership.api.deps import get_current_user_id, get_reconciler
from vehicle_ownership.api.vehicle.common import build_request_for_user, run_reconciliation
from vehicle_ownership.core.reconciliation import OwnershipReconciler
from vehicle_ownership.db import get_db
from vehicle_ownership.schemas.vehicle import ReconciliationResponse, VehiclePlateRequest

router = APIRouter(prefix="/api/vehicle")


@router.post("/validate", response_model=ReconciliationResponse, response_model_by_alias=True)
async def validate_vehicle(
    payload: VehiclePlateRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    reconciler: OwnershipReconciler = Depends(get_reconciler),
) -> ReconciliationResponse:
    request = build_request_for_user(db, user_id, payload.vehicle_plate)
    result = await run_reconciliation(reconciler, request)
    return ReconciliationResponse.from_result(result)
