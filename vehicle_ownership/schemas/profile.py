"""Profile schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from vehicle_ownership.schemas.vehicle import APIModel

__all__ = ["ProfileCreateRequest", "ProfileUpdateRequest"]


class ProfileCreateRequest(APIModel):
    email: str
    full_name: str = Field(..., alias="fullName")
    document_type: Optional[str] = Field(None, alias="documentType")
    document_number: Optional[str] = Field(None, alias="documentNumber")
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None


class ProfileUpdateRequest(APIModel):
    full_name: Optional[str] = Field(None, alias="fullName")
    document_type: Optional[str] = Field(None, alias="documentType")
    document_number: Optional[str] = Field(None, alias="documentNumber")
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
