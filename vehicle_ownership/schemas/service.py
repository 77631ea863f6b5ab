"""Maintenance service schemas."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field

from vehicle_ownership.schemas.vehicle import APIModel

__all__ = ["ServiceCreateRequest", "ServiceUpdateRequest"]


class ServiceCreateRequest(APIModel):
    vehicle_plate: str = Field(..., alias="vehiclePlate")
    service_type_id: int = Field(..., alias="serviceTypeId")
    description: str
    cost: float
    service_date: date = Field(..., alias="serviceDate")
    mileage: Optional[int] = None
    notes: Optional[str] = None
    provider_id: Optional[str] = Field(None, alias="providerId")


class ServiceUpdateRequest(APIModel):
    service_type_id: Optional[int] = Field(None, alias="serviceTypeId")
    description: Optional[str] = None
    cost: Optional[float] = None
    service_date: Optional[date] = Field(None, alias="serviceDate")
    mileage: Optional[int] = None
    notes: Optional[str] = None
    provider_id: Optional[str] = Field(None, alias="providerId")
