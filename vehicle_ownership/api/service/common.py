"""Map maintenance errors onto HTTP responses."""

from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException

from vehicle_ownership.core.maintenance import (
    OwnedVehicleNotFoundError,
    ServiceAlreadyCompletedError,
    ServiceNotFoundError,
    ServiceTypeUnavailableError,
    ServiceValidationError,
    VehicleAccessDeniedError,
)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int, str], ...] = (
    (OwnedVehicleNotFoundError, 404, "vehicle_not_found"),
    (ServiceNotFoundError, 404, "service_not_found"),
    (VehicleAccessDeniedError, 403, "forbidden"),
    (ServiceTypeUnavailableError, 400, "service_type_unavailable"),
    (ServiceAlreadyCompletedError, 409, "service_already_completed"),
)


def raise_service_http_error(exc: ValueError) -> NoReturn:
    if isinstance(exc, ServiceValidationError):
        raise HTTPException(status_code=400, detail=exc.code) from exc
    for error_type, status_code, detail in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            raise HTTPException(status_code=status_code, detail=detail) from exc
    raise exc
