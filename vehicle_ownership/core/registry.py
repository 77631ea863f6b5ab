"""Read-only access to the national vehicle registry (RUNT).

Lookups return one of three explicit outcomes, :class:`Found`,
:class:`NotFound` or :class:`LookupFailed`, instead of raising or returning
``None``. Two backends are provided: :class:`SqlRegistryLookup` reads the
``runt_vehicle_data`` table, :class:`HttpRegistryLookup` queries a remote RUNT
service. :class:`InMemoryRegistryLookup` serves fixtures and local development.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Protocol, Union, runtime_checkable

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vehicle_ownership.models import RuntVehicleData
from vehicle_ownership.utils.logging import logger

__all__ = [
    "RegistryRecord",
    "Found",
    "NotFound",
    "LookupFailed",
    "LookupErrorKind",
    "LookupResult",
    "RegistryLookup",
    "SqlRegistryLookup",
    "HttpRegistryLookup",
    "InMemoryRegistryLookup",
    "record_from_row",
    "record_from_payload",
]


@dataclass(frozen=True, slots=True)
class RegistryRecord:
    plate: str
    owner_document_type: str
    owner_document_number: str
    owner_full_name: str
    vehicle_brand: str = ""
    vehicle_model: str = ""
    vehicle_year: int = 0
    vehicle_color: str = ""
    vehicle_type_label: str = ""
    soat_expiry: str | None = None
    technical_inspection_expiry: str | None = None


class LookupErrorKind(str, Enum):
    TRANSPORT = "transport"
    STORAGE = "storage"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True, slots=True)
class Found:
    record: RegistryRecord


@dataclass(frozen=True, slots=True)
class NotFound:
    plate: str


@dataclass(frozen=True, slots=True)
class LookupFailed:
    kind: LookupErrorKind
    cause: str


LookupResult = Union[Found, NotFound, LookupFailed]


@runtime_checkable
class RegistryLookup(Protocol):
    """Keyed read interface over the registry, by canonical (uppercase) plate."""

    async def lookup(self, plate: str) -> LookupResult:
        ...


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> str | None:
    text = _text(value)
    return text or None


def _year(value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def record_from_row(row: RuntVehicleData) -> RegistryRecord:
    return RegistryRecord(
        plate=_text(row.license_plate).upper(),
        owner_document_type=_text(row.owner_document_type).upper(),
        owner_document_number=_text(row.owner_document_number),
        owner_full_name=_text(row.owner_full_name),
        vehicle_brand=_text(row.vehicle_brand),
        vehicle_model=_text(row.vehicle_model),
        vehicle_year=row.vehicle_year or 0,
        vehicle_color=_text(row.vehicle_color),
        vehicle_type_label=_text(row.vehicle_type),
        soat_expiry=_optional_text(row.soat_expiry_date),
        technical_inspection_expiry=_optional_text(row.rtm_expiry_date),
    )


def record_from_payload(plate: str, payload: Mapping[str, Any]) -> RegistryRecord:
    """Build a record from a RUNT service payload.

    The service nests vehicle data under ``infoVehiculo`` and uses Spanish keys;
    English snake_case keys are accepted as a fallback.
    """
    info = payload.get("infoVehiculo") or payload
    if not isinstance(info, Mapping):
        raise ValueError("infoVehiculo is not an object")

    def pick(*keys: str) -> Any:
        for key in keys:
            value = info.get(key)
            if value not in (None, ""):
                return value
        return None

    owner_name = _text(pick("propietario", "owner_full_name"))
    owner_document = _text(pick("nroDocumento", "owner_document_number"))
    if not owner_name or not owner_document:
        raise ValueError("owner identity missing from registry payload")

    return RegistryRecord(
        plate=_text(pick("placa", "license_plate")).upper() or plate,
        owner_document_type=_text(pick("tipoDocumento", "owner_document_type")).upper(),
        owner_document_number=owner_document,
        owner_full_name=owner_name,
        vehicle_brand=_text(pick("marca", "vehicle_brand")),
        vehicle_model=_text(pick("linea", "vehicle_model")),
        vehicle_year=_year(pick("modelo", "vehicle_year")),
        vehicle_color=_text(pick("color", "vehicle_color")),
        vehicle_type_label=_text(pick("claseVehiculo", "vehicle_type")),
        soat_expiry=_optional_text(pick("soatFechaVencimiento", "soat_expiry_date")),
        technical_inspection_expiry=_optional_text(pick("rtmFechaVencimiento", "rtm_expiry_date")),
    )


class SqlRegistryLookup:
    """Registry lookup backed by the ``runt_vehicle_data`` table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def _query(self, plate: str) -> LookupResult:
        with self._session_factory() as db:
            row = (
                db.query(RuntVehicleData)
                .filter(RuntVehicleData.license_plate == plate)
                .one_or_none()
            )
            if row is None:
                return NotFound(plate=plate)
            return Found(record=record_from_row(row))

    async def lookup(self, plate: str) -> LookupResult:
        try:
            return await asyncio.to_thread(self._query, plate)
        except SQLAlchemyError as exc:
            logger.warning("Registry lookup failed for %s: %s", plate, exc)
            return LookupFailed(kind=LookupErrorKind.STORAGE, cause=str(exc))


class HttpRegistryLookup:
    """Registry lookup against a remote RUNT query service."""

    def __init__(
        self,
        api_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_url = api_url
        self._timeout = timeout
        self._transport = transport

    async def lookup(self, plate: str) -> LookupResult:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    self._api_url,
                    json={"license_plate": plate},
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as exc:
            logger.warning("RUNT lookup failed for %s: request error %s", plate, exc)
            return LookupFailed(kind=LookupErrorKind.TRANSPORT, cause=str(exc))

        if response.status_code == 404:
            return NotFound(plate=plate)

        if response.status_code >= 400:
            logger.warning(
                "RUNT lookup failed with HTTP %s",
                response.status_code,
                extra={"plate": plate, "body": response.text[:200]},
            )
            return LookupFailed(
                kind=LookupErrorKind.TRANSPORT,
                cause=f"RUNT service returned HTTP {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError:
            return LookupFailed(kind=LookupErrorKind.MALFORMED_RESPONSE, cause="invalid JSON")

        if not isinstance(data, dict):
            return LookupFailed(kind=LookupErrorKind.MALFORMED_RESPONSE, cause="payload is not an object")

        if data.get("success") is False:
            return NotFound(plate=plate)

        payload = data.get("data")
        if not payload:
            return NotFound(plate=plate)
        if not isinstance(payload, dict):
            return LookupFailed(kind=LookupErrorKind.MALFORMED_RESPONSE, cause="data is not an object")

        try:
            return Found(record=record_from_payload(plate, payload))
        except ValueError as exc:
            return LookupFailed(kind=LookupErrorKind.MALFORMED_RESPONSE, cause=str(exc))


class InMemoryRegistryLookup:
    def __init__(self, records: Iterable[RegistryRecord] = ()):
        self._records = {record.plate.upper(): record for record in records}

    async def lookup(self, plate: str) -> LookupResult:
        record = self._records.get(plate.upper())
        if record is None:
            return NotFound(plate=plate)
        return Found(record=record)
