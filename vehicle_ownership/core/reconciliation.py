"""Vehicle ownership reconciliation against the registry.

A single attempt validates the plate and document formats, looks the plate
up, then checks that the recorded owner is the requester (document type,
document number and a tolerant name comparison). Every outcome, including
unexpected exceptions, is reported as a :class:`ReconciliationResult`.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from vehicle_ownership.constants import (
    ACCEPTED_DOCUMENT_TYPE,
    DEFAULT_VEHICLE_TYPE,
    VEHICLE_TYPE_LOOKUP,
)
from vehicle_ownership.core.registry import (
    Found,
    LookupFailed,
    NotFound,
    RegistryLookup,
    RegistryRecord,
)
from vehicle_ownership.utils.logging import logger, reconciliation_logger
from vehicle_ownership.utils.names import compare_names
from vehicle_ownership.utils.string import (
    is_valid_document_number,
    is_valid_plate,
    normalize_vehicle_plate,
)

__all__ = [
    "Verdict",
    "ReasonCode",
    "REASON_MESSAGES",
    "ReconciliationRequest",
    "VehicleData",
    "ReconciliationResult",
    "OwnershipReconciler",
    "map_vehicle_type",
]


class Verdict(str, Enum):
    VALID = "Valid"
    INVALID = "Invalid"


class ReasonCode(str, Enum):
    VEHICLE_NOT_FOUND = "VehicleNotFound"
    OWNER_MISMATCH = "OwnerMismatch"
    INVALID_PLATE_FORMAT = "InvalidPlateFormat"
    INVALID_DOCUMENT_FORMAT = "InvalidDocumentFormat"
    SYSTEM_ERROR = "SystemError"

    @property
    def retryable(self) -> bool:
        return self is ReasonCode.SYSTEM_ERROR


# Caller-facing messages for each reason code.
REASON_MESSAGES: dict[ReasonCode, str] = {
    ReasonCode.INVALID_PLATE_FORMAT: "Formato de placa inválido",
    ReasonCode.INVALID_DOCUMENT_FORMAT: "Número de documento inválido",
    ReasonCode.VEHICLE_NOT_FOUND: "Vehículo no encontrado en el RUNT",
    ReasonCode.OWNER_MISMATCH: "El vehículo no está registrado a nombre del usuario",
    ReasonCode.SYSTEM_ERROR: "Error de conexión con el servicio RUNT. Intente nuevamente.",
}


@dataclass(frozen=True, slots=True)
class ReconciliationRequest:
    plate: str
    requester_document_type: str
    requester_document_number: str
    requester_full_name: str


@dataclass(frozen=True, slots=True)
class VehicleData:
    brand: str
    model: str
    year: int
    color: str
    vehicle_type_label: str
    vehicle_type: str
    soat_expiry: str | None = None
    technical_inspection_expiry: str | None = None

    @classmethod
    def from_record(cls, record: RegistryRecord) -> "VehicleData":
        return cls(
            brand=record.vehicle_brand,
            model=record.vehicle_model,
            year=record.vehicle_year,
            color=record.vehicle_color,
            vehicle_type_label=record.vehicle_type_label,
            vehicle_type=map_vehicle_type(record.vehicle_type_label),
            soat_expiry=record.soat_expiry,
            technical_inspection_expiry=record.technical_inspection_expiry,
        )


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    verdict: Verdict
    reason_code: ReasonCode | None = None
    vehicle_data: VehicleData | None = None

    @property
    def is_valid(self) -> bool:
        return self.verdict is Verdict.VALID

    @property
    def message(self) -> str | None:
        if self.reason_code is None:
            return None
        return REASON_MESSAGES[self.reason_code]

    @classmethod
    def valid(cls, vehicle_data: VehicleData) -> "ReconciliationResult":
        return cls(verdict=Verdict.VALID, vehicle_data=vehicle_data)

    @classmethod
    def invalid(cls, reason_code: ReasonCode) -> "ReconciliationResult":
        return cls(verdict=Verdict.INVALID, reason_code=reason_code)


def map_vehicle_type(label: str | None) -> str:
    """Map a registry vehicle class label to an internal type, ``car`` when unknown."""
    if not label:
        return DEFAULT_VEHICLE_TYPE
    return VEHICLE_TYPE_LOOKUP.get(label.strip(), DEFAULT_VEHICLE_TYPE)


async def _no_delay() -> None:
    return None


class OwnershipReconciler:
    """Stateless reconciliation of a claimed vehicle against a claimed owner.

    ``latency`` is an optional ``(min_seconds, max_seconds)`` window slept
    before the lookup, standing in for the external verification round trip.
    ``delay`` overrides how the pause is awaited.
    """

    def __init__(
        self,
        lookup: RegistryLookup,
        *,
        accepted_document_type: str = ACCEPTED_DOCUMENT_TYPE,
        latency: tuple[float, float] | None = None,
        delay: Callable[[], Awaitable[None]] | None = None,
    ):
        self._lookup = lookup
        self._accepted_document_type = accepted_document_type
        self._latency = latency
        if delay is not None:
            self._delay = delay
        elif latency is not None:
            self._delay = self._sleep_latency
        else:
            self._delay = _no_delay

    async def _sleep_latency(self) -> None:
        low, high = self._latency  # type: ignore[misc]
        await asyncio.sleep(random.uniform(low, high))

    async def reconcile(
        self,
        plate: str,
        requester_document_type: str,
        requester_document_number: str,
        requester_full_name: str,
    ) -> ReconciliationResult:
        request = ReconciliationRequest(
            plate=plate,
            requester_document_type=requester_document_type,
            requester_document_number=requester_document_number,
            requester_full_name=requester_full_name,
        )
        try:
            result = await self._reconcile(request)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected error reconciling plate %r", plate)
            result = ReconciliationResult.invalid(ReasonCode.SYSTEM_ERROR)

        reconciliation_logger.info(
            "plate=%s verdict=%s reason=%s",
            plate,
            result.verdict.value,
            result.reason_code.value if result.reason_code else "-",
        )
        return result

    async def reconcile_request(self, request: ReconciliationRequest) -> ReconciliationResult:
        return await self.reconcile(
            request.plate,
            request.requester_document_type,
            request.requester_document_number,
            request.requester_full_name,
        )

    async def _reconcile(self, request: ReconciliationRequest) -> ReconciliationResult:
        if not is_valid_plate(request.plate):
            return ReconciliationResult.invalid(ReasonCode.INVALID_PLATE_FORMAT)

        if not is_valid_document_number(request.requester_document_number):
            return ReconciliationResult.invalid(ReasonCode.INVALID_DOCUMENT_FORMAT)

        await self._delay()

        outcome = await self._lookup.lookup(normalize_vehicle_plate(request.plate))
        if isinstance(outcome, NotFound):
            return ReconciliationResult.invalid(ReasonCode.VEHICLE_NOT_FOUND)
        if isinstance(outcome, LookupFailed):
            logger.warning(
                "Registry lookup failed (%s): %s", outcome.kind.value, outcome.cause
            )
            return ReconciliationResult.invalid(ReasonCode.SYSTEM_ERROR)
        if not isinstance(outcome, Found):
            raise TypeError(f"Unexpected registry lookup result: {outcome!r}")

        record = outcome.record
        if not self._is_owner(record, request):
            return ReconciliationResult.invalid(ReasonCode.OWNER_MISMATCH)

        return ReconciliationResult.valid(VehicleData.from_record(record))

    def _is_owner(self, record: RegistryRecord, request: ReconciliationRequest) -> bool:
        accepted = self._accepted_document_type
        if request.requester_document_type != accepted or record.owner_document_type != accepted:
            return False
        if record.owner_document_number != request.requester_document_number:
            return False
        return compare_names(record.owner_full_name, request.requester_full_name)
