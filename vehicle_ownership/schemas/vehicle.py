"""Vehicle-related schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from vehicle_ownership.core.reconciliation import ReconciliationResult, VehicleData

__all__ = [
    "VehiclePlateRequest",
    "VehicleDataSchema",
    "ReconciliationResponse",
    "VehicleTypeSchema",
    "DocumentTypeSchema",
    "VehicleTypeListResponse",
]


class APIModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class VehiclePlateRequest(APIModel):
    vehicle_plate: str = Field(..., alias="vehiclePlate")


class VehicleDataSchema(APIModel):
    brand: str
    model: str
    year: int
    color: str
    vehicle_type_label: str = Field(..., alias="vehicleTypeLabel")
    vehicle_type: str = Field(..., alias="vehicleType")
    soat_expiry: Optional[str] = Field(None, alias="soatExpiry")
    technical_inspection_expiry: Optional[str] = Field(None, alias="technicalInspectionExpiry")

    @classmethod
    def from_vehicle_data(cls, data: VehicleData) -> "VehicleDataSchema":
        return cls(
            brand=data.brand,
            model=data.model,
            year=data.year,
            color=data.color,
            vehicle_type_label=data.vehicle_type_label,
            vehicle_type=data.vehicle_type,
            soat_expiry=data.soat_expiry,
            technical_inspection_expiry=data.technical_inspection_expiry,
        )


class ReconciliationResponse(APIModel):
    ok: bool
    verdict: str
    reason_code: Optional[str] = Field(None, alias="reasonCode")
    message: Optional[str] = None
    retryable: bool = False
    vehicle_data: Optional[VehicleDataSchema] = Field(None, alias="vehicleData")

    @classmethod
    def from_result(cls, result: ReconciliationResult) -> "ReconciliationResponse":
        return cls(
            ok=result.is_valid,
            verdict=result.verdict.value,
            reason_code=result.reason_code.value if result.reason_code else None,
            message=result.message,
            retryable=bool(result.reason_code and result.reason_code.retryable),
            vehicle_data=(
                VehicleDataSchema.from_vehicle_data(result.vehicle_data)
                if result.vehicle_data is not None
                else None
            ),
        )


class VehicleTypeSchema(APIModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool = Field(True, alias="isActive")


class DocumentTypeSchema(APIModel):
    value: str
    label: str
    accepted_for_ownership: bool = Field(False, alias="acceptedForOwnership")


class VehicleTypeListResponse(APIModel):
    ok: bool = True
    data: List[VehicleTypeSchema] = Field(default_factory=list)
